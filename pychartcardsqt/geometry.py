"""Chart geometry: angle partitioning, axis/extent planning and path building.

Everything here is pure and deterministic: the same inputs always give the
same outputs, nothing is cached, and no Qt object is touched. Widgets call
these functions on every paint with the current animation progress.

Angles are degrees, 0 at the 3 o'clock position, growing clockwise. Pixel
coordinates follow the Qt convention (origin top-left, y grows downward).

Typical usage:

    arcs = partition(series, gap_angle=2.0, min_sweep=0.5, progress=0.6)
    plan = plan_axis(max_value=143, available_height=400, min_point_spacing=50)
    extent = plan_extent(len(series), viewport_width=320, min_point_spacing=100)
    path = build_path([(0, 10), (50, 40), (100, 5)], smooth=True)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .models import (
    Arc,
    AxisPlan,
    ColoredDataPoint,
    ExtentPlan,
    Series,
    coerce_series,
    magnitudes,
)
from .utils import clamp, normalize, safe_ratio

log = logging.getLogger(__name__)

Point = Tuple[float, float]

FULL_CIRCLE = 360.0
SMALL_SCALE_LIMIT = 50.0
SMALL_SCALE_STEP = 5.0
NICE_STEP_MULTIPLE = 10.0
USABLE_HEIGHT_RATIO = 0.8
DEFAULT_ARC_COLOR = (0, 0, 0, 255)


def _colors(points) -> List[Tuple[int, int, int, int]]:
    return [p.color if isinstance(p, ColoredDataPoint) else DEFAULT_ARC_COLOR for p in points]


# ---------- angular charts ----------

def partition(
    series: Series,
    gap_angle: float = 0.0,
    min_sweep: float = 0.0,
    progress: float = 1.0,
) -> List[Arc]:
    """Split a full circle into one arc per data point.

    Every raw angle (``value / total * 360``) is multiplied by the animation
    progress, so the whole ring fills up together. When the animated angles
    plus one gap per slice would exceed a full circle, all angles are scaled
    down uniformly so slices never overlap. Each sweep is the scaled angle
    minus the gap, floored at ``min_sweep`` so a slice never disappears.
    Start angles advance by the scaled angle (not the sweep) plus one gap per
    preceding slice.

    Args:
        series: Data points or ``(label, value[, color])`` tuples, drawn in
            the given order.
        gap_angle: Visual gap after each slice, in degrees.
        min_sweep: Smallest sweep any slice is drawn with, in degrees.
        progress: Animation progress in [0, 1].

    Returns:
        One Arc per input point, in input order. An all-zero series yields
        arcs of ``min_sweep``.
    """
    points = coerce_series(series)
    if not points:
        return []

    gap = max(float(gap_angle), 0.0)
    floor = max(float(min_sweep), 0.0)
    p = clamp(progress, 0.0, 1.0)

    values = np.asarray(magnitudes(points), dtype=np.float64)
    total = float(values.sum())
    if total > 0:
        raw = values / total * FULL_CIRCLE
    else:
        raw = np.zeros_like(values)

    animated = raw * p
    total_needed = float(animated.sum()) + len(points) * gap
    scale = FULL_CIRCLE / total_needed if total_needed > FULL_CIRCLE else 1.0
    scaled = animated * scale

    sweeps = np.maximum(scaled - gap, floor)
    offsets = np.concatenate(([0.0], np.cumsum(scaled)[:-1]))
    starts = offsets + gap * np.arange(len(points))

    return [
        Arc(float(s), float(w), c)
        for s, w, c in zip(starts, sweeps, _colors(points))
    ]


def pie_wedges(series: Series, progress: float = 1.0) -> List[Arc]:
    """Filled-pie wedges that grow in place.

    Unlike :func:`partition`, each wedge keeps its final start angle while the
    sweep grows from 0 to its share of the circle.
    """
    points = coerce_series(series)
    if not points:
        return []
    p = clamp(progress, 0.0, 1.0)
    values = np.asarray(magnitudes(points), dtype=np.float64)
    total = float(values.sum())
    raw = values / total * FULL_CIRCLE if total > 0 else np.zeros_like(values)
    starts = np.concatenate(([0.0], np.cumsum(raw)[:-1]))
    return [
        Arc(float(s), float(a * p), c)
        for s, a, c in zip(starts, raw, _colors(points))
    ]


def percentages(series: Series) -> List[float]:
    """Share of each point in the series total, in percent (0 when total is 0)."""
    points = coerce_series(series)
    values = magnitudes(points)
    total = sum(values)
    return [safe_ratio(v * 100.0, total) for v in values]


# ---------- axis / extent planning ----------

def plan_axis(
    max_value: float,
    available_height: float,
    min_point_spacing: float,
) -> AxisPlan:
    """Choose a "nice" gridline step and the gridline values for a value axis.

    Below 50 the step is fixed at 5. Otherwise 80% of the available height is
    divided into as many intervals as ``min_point_spacing`` allows and the
    resulting raw step is rounded up to a multiple of 10. Gridlines run from
    0 up to twice the maximum to leave headroom above the data; the list is
    extended by whole steps when needed so that it always has at least two
    entries and its last value is never below ``max_value``.

    Raises:
        ValueError: If ``min_point_spacing`` is not positive.
    """
    spacing = float(min_point_spacing)
    if not spacing > 0:
        raise ValueError(f"min_point_spacing must be positive, got {min_point_spacing}")

    top = float(max_value)
    if not math.isfinite(top) or top < 0:
        top = 0.0

    if top < SMALL_SCALE_LIMIT:
        step = SMALL_SCALE_STEP
    else:
        usable = max(float(available_height), 0.0) * USABLE_HEIGHT_RATIO
        intervals = max(1, int(math.floor(usable / spacing)))
        raw_step = top / intervals
        step = math.ceil(raw_step / NICE_STEP_MULTIPLE) * NICE_STEP_MULTIPLE

    limit = top * 2.0
    count = int(math.floor(limit / step)) + 1
    values = [i * step for i in range(count)]
    while len(values) < 2 or values[-1] < top:
        values.append(len(values) * step)

    return AxisPlan(step=float(step), gridline_values=tuple(float(v) for v in values),
                    max_extent=float(values[-1]))


def plan_extent(
    point_count: int,
    viewport_width: float,
    min_point_spacing: float,
    left_offset: float = 60.0,
    trailing_margin: float = 20.0,
) -> ExtentPlan:
    """Horizontal spacing of a point series and whether it needs scrolling.

    Points are spread over the viewport width left after the axis offset and
    trailing margin, but never closer than ``min_point_spacing``. When the
    resulting content is wider than the viewport, the plan asks for a
    horizontal scroll area and starts it scrolled fully to the right so the
    most recent data is visible.
    """
    n = max(int(point_count), 0)
    viewport = max(float(viewport_width), 0.0)
    available = max(viewport - left_offset - trailing_margin, 0.0)

    ideal = available / (n - 1) if n > 1 else available
    spacing = max(ideal, float(min_point_spacing))
    required = left_offset + max(n - 1, 0) * spacing + trailing_margin

    needs_scroll = required > viewport
    content_width = required if needs_scroll else viewport
    plan = ExtentPlan(
        spacing=float(spacing),
        content_width=float(content_width),
        needs_scroll=needs_scroll,
        initial_scroll=float(content_width - viewport),
    )
    log.debug("Extent plan for %d points in %.1fpx: %s", n, viewport, plan)
    return plan


def point_positions(
    values: Sequence[float],
    axis: AxisPlan,
    extent: ExtentPlan,
    baseline_y: float,
    plot_height: float,
    x_offset: float = 0.0,
    progress: float = 1.0,
) -> List[Point]:
    """Pixel positions of a line series.

    X advances by ``extent.spacing`` from ``x_offset``; a lone point is
    centered in its spacing. Y is the value normalized against the axis
    ceiling, scaled by ``progress`` so points rise from the baseline.
    """
    p = clamp(progress, 0.0, 1.0)
    n = len(values)
    out: List[Point] = []
    for i, v in enumerate(values):
        if n == 1:
            x = x_offset + extent.spacing / 2.0
        else:
            x = x_offset + extent.spacing * i
        frac = normalize(max(float(v), 0.0), 0.0, axis.max_extent) * p
        out.append((float(x), float(baseline_y - frac * plot_height)))
    return out


def gridline_offsets(width: float, line_count: int = 12) -> List[Tuple[float, bool]]:
    """Evenly spaced vertical guide lines as ``(x, solid)`` pairs.

    Even-indexed lines are solid, odd ones dashed.
    """
    if line_count <= 0:
        return []
    if line_count == 1:
        return [(0.0, True)]
    spacing = float(width) / (line_count - 1)
    return [(spacing * i, i % 2 == 0) for i in range(line_count)]


def bar_fraction(value: float, max_value: float, min_fraction: float = 0.05) -> Tuple[float, float]:
    """Width fraction of one horizontal bar.

    Returns:
        ``(target, shown)``: the value's share of ``max_value`` in [0, 1]
        (0 when the maximum is 0), and the drawn fraction floored at
        ``min_fraction`` so no bar has zero width.
    """
    target = clamp(safe_ratio(max(float(value), 0.0), max_value), 0.0, 1.0)
    return target, max(target, float(min_fraction))


# ---------- paths ----------

@dataclass(frozen=True)
class PathCommand:
    """One drawing command.

    ``op`` is ``"move"``/``"line"`` (x, y), ``"cubic"`` (c1x, c1y, c2x, c2y,
    x, y) or ``"close"`` (no coordinates).
    """

    op: str
    coords: Tuple[float, ...] = ()

    @property
    def end(self) -> Optional[Point]:
        if len(self.coords) < 2:
            return None
        return (self.coords[-2], self.coords[-1])


@dataclass(frozen=True)
class Path:
    """An immutable drawable path made of :class:`PathCommand` items."""

    commands: Tuple[PathCommand, ...]

    def anchors(self) -> List[Point]:
        """On-curve points in drawing order (control points excluded)."""
        return [c.end for c in self.commands if c.end is not None]

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and self.commands[-1].op == "close"

    def segment_count(self) -> int:
        return sum(1 for c in self.commands if c.op in ("line", "cubic"))


def _as_points(points: Sequence[Sequence[float]]) -> List[Point]:
    return [(float(p[0]), float(p[1])) for p in points]


def _segments(points: List[Point], smooth: bool) -> List[PathCommand]:
    out: List[PathCommand] = []
    for prev, curr in zip(points, points[1:]):
        if smooth:
            mid_x = prev[0] + (curr[0] - prev[0]) / 2.0
            out.append(PathCommand("cubic", (mid_x, prev[1], mid_x, curr[1], curr[0], curr[1])))
        else:
            out.append(PathCommand("line", curr))
    return out


def build_path(points: Sequence[Sequence[float]], smooth: bool = False) -> Optional[Path]:
    """Stroke path through ``points`` in order.

    Smooth mode joins each pair with a cubic whose control points sit at the
    horizontal midpoint, at the previous and current point's height, so the
    curve passes through every point exactly.

    Returns:
        None for an empty sequence; a single ``move`` for one point.
    """
    pts = _as_points(points)
    if not pts:
        return None
    commands = [PathCommand("move", pts[0])] + _segments(pts, smooth)
    return Path(tuple(commands))


def build_fill_path(
    points: Sequence[Sequence[float]],
    baseline_y: float,
    smooth: bool = False,
) -> Optional[Path]:
    """Closed region between the series line and a horizontal baseline."""
    pts = _as_points(points)
    if not pts:
        return None
    base = float(baseline_y)
    first, last = pts[0], pts[-1]
    commands = [
        PathCommand("move", (first[0], base)),
        PathCommand("line", first),
        *_segments(pts, smooth),
        PathCommand("line", (last[0], base)),
        PathCommand("close"),
    ]
    return Path(tuple(commands))
