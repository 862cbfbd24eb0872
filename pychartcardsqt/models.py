"""Data models and style configuration for the chart widgets.

Provides frozen dataclasses for data points, derived geometry (arcs, axis and
extent plans) and per-chart styles, plus color normalization helpers.

Colors can be specified as:
- Hex string: "#6750a4" or "#806750a4" (with alpha first, Qt style)
- RGB tuple: (103, 80, 164)
- RGBA tuple: (103, 80, 164, 255)
- QColor object: QColor("red") or QColor(255, 0, 0)
- Color name: "red", "Green", "steelblue"

Everything in this module works without a running Qt application; QColor and
pyqtgraph are only imported when a caller actually hands us Qt objects or asks
for a pen/brush.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

log = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]
# Using Any for QColor to avoid hard dependency on PySide6 in type checking
Color = Union[str, Tuple[int, int, int], Tuple[int, int, int, int], Any]


def _qcolor_to_rgba(color: Any) -> RGBA:
    """Convert a QColor object to an RGBA tuple.

    Args:
        color: QColor object from PySide6.QtGui.

    Returns:
        Tuple of (r, g, b, a) with values 0-255.

    Raises:
        TypeError: If the input is not a QColor object.
    """
    try:
        from PySide6.QtGui import QColor
        if isinstance(color, QColor):
            return (color.red(), color.green(), color.blue(), color.alpha())
    except ImportError:
        pass
    raise TypeError(f"Expected QColor object, got {type(color)}")


def _hex_to_rgba(s: str) -> RGBA:
    """Parse ``#RRGGBB`` or ``#AARRGGBB`` into an RGBA tuple."""
    digits = s[1:]
    try:
        if len(digits) == 6:
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
            return (r, g, b, 255)
        if len(digits) == 8:
            a, r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4, 6))
            return (r, g, b, a)
    except ValueError as e:
        raise ValueError(f"Invalid hex color: '{s}'") from e
    raise ValueError(f"Invalid hex color: '{s}'. Use #RRGGBB or #AARRGGBB.")


def _color_name_to_rgba(color_name: str) -> RGBA:
    """Convert a color name (e.g., 'Green', 'Red') to RGBA tuple using QColor.

    Raises:
        ValueError: If PySide6 is not available, Qt cannot initialize, or the
            color name is invalid. In this case, use RGBA tuples instead.
    """
    try:
        from PySide6.QtGui import QColor
        qcolor = QColor(color_name)
        if qcolor.isValid():
            return (qcolor.red(), qcolor.green(), qcolor.blue(), qcolor.alpha())
        raise ValueError(
            f"Invalid color name: '{color_name}'. "
            f"Use RGBA tuples like (255, 0, 0, 255) instead."
        )
    except (ImportError, RuntimeError) as e:
        raise ValueError(
            f"Cannot convert color name '{color_name}': PySide6 is not available "
            f"or Qt cannot initialize ({type(e).__name__}: {e}). "
            f"Use RGBA tuples like (255, 0, 0, 255) instead."
        ) from e


def to_rgba(color: Color) -> RGBA:
    """Normalize a color to RGBA tuple format.

    Args:
        color: RGB/RGBA tuple, hex string, QColor object or color name string.

    Returns:
        Tuple of (r, g, b, a) with values 0-255.
    """
    if isinstance(color, tuple) and len(color) in (3, 4):
        channels = [int(c) for c in color]
        if len(channels) == 3:
            channels.append(255)
        if any(c < 0 or c > 255 for c in channels):
            raise ValueError(f"Color channels must be within 0-255, got {color}")
        return tuple(channels)  # type: ignore[return-value]

    if isinstance(color, str):
        s = color.strip()
        if s.startswith("#"):
            return _hex_to_rgba(s)
        return _color_name_to_rgba(s)

    try:
        return _qcolor_to_rgba(color)
    except TypeError:
        pass

    raise TypeError(
        f"Color must be an RGBA tuple (r, g, b, a), a hex string, a QColor object, "
        f"or a color name string, got {type(color)}"
    )


def lerp_rgba(start: RGBA, end: RGBA, t: float) -> RGBA:
    """Linearly interpolate two RGBA colors, ``t`` in [0, 1]."""
    t = min(max(float(t), 0.0), 1.0)
    return tuple(  # type: ignore[return-value]
        int(round(a + (b - a) * t)) for a, b in zip(start, end)
    )


def default_palette(count: int, cmap_name: str = "tab10") -> List[RGBA]:
    """Return ``count`` distinct colors from a qualitative matplotlib colormap.

    Colors cycle when ``count`` exceeds the colormap size.
    """
    if count <= 0:
        return []
    import matplotlib

    cmap = matplotlib.colormaps[cmap_name]
    size = getattr(cmap, "N", 10) or 10
    out: List[RGBA] = []
    for i in range(count):
        r, g, b, a = cmap(i % size)
        out.append((int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255))))
    return out


# ---------- data points ----------

@dataclass(frozen=True)
class DataPoint:
    """A labeled value. Labels need not be unique."""

    label: str
    value: float


@dataclass(frozen=True)
class ColoredDataPoint:
    """A labeled value with its own color (slices, colored bars)."""

    label: str
    value: float
    color: RGBA = (103, 80, 164, 255)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", to_rgba(self.color))


SeriesItem = Union[DataPoint, ColoredDataPoint, Tuple[Any, ...]]
Series = Sequence[SeriesItem]


def _coerce_value(label: str, raw: Any) -> float:
    try:
        v = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Value for '{label}' is not numeric: {raw!r}") from e
    if not math.isfinite(v):
        raise ValueError(f"Value for '{label}' must be finite, got {v}")
    return v


def coerce_point(item: SeriesItem) -> Union[DataPoint, ColoredDataPoint]:
    """Turn a data point or a ``(label, value[, color])`` tuple into a model."""
    if isinstance(item, (DataPoint, ColoredDataPoint)):
        _coerce_value(item.label, item.value)
        return item
    if isinstance(item, (tuple, list)) and len(item) in (2, 3):
        label = str(item[0])
        value = _coerce_value(label, item[1])
        if len(item) == 3:
            return ColoredDataPoint(label, value, to_rgba(item[2]))
        return DataPoint(label, value)
    raise ValueError(
        f"Series items must be DataPoint, ColoredDataPoint or (label, value[, color]) "
        f"tuples, got {item!r}"
    )


def coerce_series(series: Optional[Series]) -> Tuple[Union[DataPoint, ColoredDataPoint], ...]:
    """Coerce any accepted series input into a tuple of point models."""
    if series is None:
        return ()
    return tuple(coerce_point(item) for item in series)


def coerce_colored_series(
    series: Optional[Series], cmap_name: str = "tab10"
) -> Tuple[ColoredDataPoint, ...]:
    """Coerce a series and give uncolored points a palette color."""
    points = coerce_series(series)
    palette = default_palette(len(points), cmap_name)
    out = []
    for i, p in enumerate(points):
        if isinstance(p, ColoredDataPoint):
            out.append(p)
        else:
            out.append(ColoredDataPoint(p.label, p.value, palette[i]))
    return tuple(out)


def magnitudes(points: Sequence[Union[DataPoint, ColoredDataPoint]]) -> List[float]:
    """Point values with negatives treated as zero."""
    out = []
    for p in points:
        if p.value < 0:
            log.warning("Negative value %s for '%s' treated as 0", p.value, p.label)
            out.append(0.0)
        else:
            out.append(float(p.value))
    return out


# ---------- derived geometry ----------

@dataclass(frozen=True)
class Arc:
    """One slice of an angular chart, degrees clockwise from 3 o'clock."""

    start_angle: float
    sweep_angle: float
    color: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True)
class AxisPlan:
    """Gridline layout of a value axis.

    Attributes:
        step: Distance between gridlines in data units.
        gridline_values: Ascending gridline values, starting at 0.
        max_extent: Top gridline value; the axis ceiling used for pixel mapping.
    """

    step: float
    gridline_values: Tuple[float, ...]
    max_extent: float


@dataclass(frozen=True)
class ExtentPlan:
    """Horizontal layout of a point series inside a viewport."""

    spacing: float
    content_width: float
    needs_scroll: bool
    initial_scroll: float


# ---------- dataset selection ----------

class DatasetSelection:
    """Ordered dataset collection with exactly one selected key.

    The first key is selected by default; an empty collection selects ``""``.
    """

    def __init__(self, datasets: Optional[Mapping[str, Series]] = None) -> None:
        self._datasets: Dict[str, Series] = dict(datasets or {})
        self._selected: str = next(iter(self._datasets), "")

    def keys(self) -> List[str]:
        return list(self._datasets.keys())

    @property
    def selected(self) -> str:
        return self._selected

    def select(self, key: str) -> bool:
        """Select ``key``; return True if the selection changed.

        Raises:
            KeyError: If ``key`` is not one of the dataset keys.
        """
        if key not in self._datasets:
            raise KeyError(f"Unknown dataset key: '{key}'")
        if key == self._selected:
            return False
        self._selected = key
        return True

    def selected_series(self) -> Series:
        return self._datasets.get(self._selected, ())

    def __len__(self) -> int:
        return len(self._datasets)


# ---------- styles ----------

def _mk_pen(color: Color, width: float, dash: Optional[Tuple[float, float]] = None):
    import pyqtgraph as pg

    pen = pg.mkPen(color=to_rgba(color), width=width)
    if dash is not None:
        pen.setDashPattern([float(dash[0]), float(dash[1])])
    return pen


def _mk_brush(color: Color):
    import pyqtgraph as pg

    return pg.mkBrush(to_rgba(color))


@dataclass(frozen=True)
class CardStyle:
    """Card chrome shared by every chart card."""

    background_color: Color = "#eaddff"  # Material primary container
    title_color: Color = "#1d1b20"
    title_font_size: float = 16.0
    expanded_title_font_size: float = 20.0
    max_height: int = 300
    padding: int = 0
    expanded_margin: int = 32
    expanded_scale: float = 1.5


@dataclass(frozen=True)
class BarChartStyle:
    """Style of the vertical list of horizontal bars."""

    bar_color: Color = "#6750a4"  # Material primary
    bar_height: float = 20.0
    spacing: float = 6.0
    horizontal_padding: float = 16.0
    corner_radius: float = 12.0
    label_weight: int = 2
    bar_weight: int = 5
    value_weight: int = 1
    font_size: float = 9.0
    text_color: Color = "#1d1b20"
    duration_ms: int = 500
    stagger_ms: int = 50

    def to_brush(self):
        """Convert to a pyqtgraph brush for the bars."""
        return _mk_brush(self.bar_color)


@dataclass(frozen=True)
class HorizontalBarChartStyle:
    """Style of the multi-dataset horizontal bar chart."""

    show_as_percentage: bool = False
    transition_ms: int = 1200
    bar_animation_ms: int = 1200
    line_count: int = 12
    min_fraction: float = 0.05
    grid_color: Color = (211, 211, 211, 128)
    grid_dash: Tuple[float, float] = (10.0, 10.0)
    bar_height: float = 28.0
    row_spacing: float = 8.0
    corner_radius: float = 14.0
    label_color: Color = "#808080"
    selected_tab_color: Color = "#000000"
    tab_color: Color = "#808080"
    background_color: Color = "#ffffff"
    title_font_size: float = 16.0

    def grid_pen(self, solid: bool):
        """Pen for one vertical guide line, dashed unless ``solid``."""
        return _mk_pen(self.grid_color, 1.0, None if solid else self.grid_dash)


@dataclass(frozen=True)
class LineChartStyle:
    """Style and layout constants of the line chart."""

    x_min_point_spacing: float = 100.0
    y_min_point_spacing: float = 50.0
    axis_color: Color = "#000000"
    axis_stroke_width: float = 2.0
    interval_line_color: Color = "#d3d3d3"
    interval_stroke_width: float = 1.0
    interval_dash: Tuple[float, float] = (10.0, 15.0)
    fill_graph: bool = True
    fill_color: Color = (125, 82, 96, 110)  # Material tertiary, translucent
    line_color: Color = "#6750a4"
    line_width: float = 2.0
    point_color: Color = "#625b71"
    point_radius: float = 5.0
    smooth_lines: bool = True
    text_color: Color = "#1d1b20"
    left_padding: float = 60.0
    bottom_padding: float = 60.0
    trailing_margin: float = 20.0
    top_padding: float = 20.0
    y_axis_width: float = 50.0
    duration_ms: int = 800
    scroll_delay_ms: int = 10

    def axis_pen(self):
        return _mk_pen(self.axis_color, self.axis_stroke_width)

    def interval_pen(self):
        return _mk_pen(self.interval_line_color, self.interval_stroke_width, self.interval_dash)

    def line_pen(self):
        return _mk_pen(self.line_color, self.line_width)

    def fill_brush(self):
        return _mk_brush(self.fill_color)

    def point_brush(self):
        return _mk_brush(self.point_color)


@dataclass(frozen=True)
class PieChartStyle:
    """Style of the filled pie charts."""

    chart_size: float = 200.0
    duration_ms: int = 800
    show_legend: bool = True
    legend_font_size: float = 10.0
    legend_value_font_size: float = 18.0
    text_color: Color = "#1d1b20"
    muted_text_color: Color = "#808080"
    palette: str = "tab10"


@dataclass(frozen=True)
class DonutChartStyle:
    """Style of the donut chart."""

    chart_size: float = 200.0
    thickness: float = 30.0
    gap_angle: float = 2.0
    min_sweep: float = 0.5
    duration_ms: int = 800
    show_legend: bool = True
    legend_font_size: float = 10.0
    text_color: Color = "#1d1b20"
    palette: str = "tab10"

    def arc_pen(self, color: Color):
        """Round-capped stroke pen for one donut slice."""
        from PySide6.QtCore import Qt

        pen = _mk_pen(color, self.thickness)
        pen.setCapStyle(Qt.RoundCap)
        return pen
