"""Horizontal bar chart over several named datasets.

A row of tabs (one per dataset key, hidden when there is only one) selects
which dataset is shown. Bars are laid over a set of vertical guide lines and
their widths and colors glide to the new values whenever the selection
changes. A bar whose label appears once in both datasets moves from its
current width. Every other bar (a new label, or one repeated within a
dataset) grows from zero.

Typical usage:

    chart = HorizontalBarChart("Population", {
        "Gender": [("Women", 58, "#ffcb04"), ("Men", 42, "#2f7d32")],
        "Age": [("< 30", 20), ("30-60", 55), ("> 60", 25)],
    })
    chart.datasetChanged.connect(lambda key: print("showing", key))
    chart.select_dataset("Age")
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from .animation import ColorTween, FrameTicker, ProgressAnimation, ValueTween
from .geometry import bar_fraction, gridline_offsets
from .models import (
    RGBA,
    ColoredDataPoint,
    DatasetSelection,
    HorizontalBarChartStyle,
    Series,
    coerce_colored_series,
    magnitudes,
)
from .painting import draw_placeholder, elided, font_with, qcolor, size_hint, text_rect

log = logging.getLogger(__name__)

LEGEND_HEIGHT = 44.0


@dataclass(frozen=True)
class BarState:
    """One bar as currently drawn."""

    label: str
    text: str
    fraction: float
    color: RGBA


class _BarsCanvas(QWidget):
    """Paints the legend row, guide lines and bars of its owning chart."""

    def __init__(self, chart: "HorizontalBarChart") -> None:
        super().__init__(chart)
        self._chart = chart
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Minimum)

    def sizeHint(self) -> QtCore.QSize:
        return size_hint(280, self._chart.canvas_height())

    def minimumSizeHint(self) -> QtCore.QSize:
        return self.sizeHint()

    def paintEvent(self, event) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            self._chart._paint_canvas(painter, QRectF(self.rect()))
        finally:
            painter.end()


class HorizontalBarChart(QWidget):
    """Dataset tabs, a legend row and animated horizontal bars.

    Attributes:
        datasetChanged: Signal emitted with the newly selected dataset key.
    """

    datasetChanged = Signal(str)

    def __init__(
        self,
        title: str = "",
        datasets: Optional[Mapping[str, Series]] = None,
        style: Optional[HorizontalBarChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._style = style or HorizontalBarChartStyle()
        self._selection = DatasetSelection()
        self._points: Tuple[ColoredDataPoint, ...] = ()
        self._targets: List[float] = []
        self._bars: List[Tuple[ValueTween, ColorTween]] = []
        self._fade = ProgressAnimation(duration_ms=self._style.transition_ms)
        self._ticker = FrameTicker(self._on_frame, self.is_animating, parent=self)
        self._tab_buttons: Dict[str, QPushButton] = {}
        self._build_ui(title)
        self.set_datasets(datasets or {})

    # ---------- UI ----------
    def _build_ui(self, title: str) -> None:
        st = self._style
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)

        self.title_label = QLabel(title)
        self.title_label.setFont(font_with(self.font(), st.title_font_size, bold=True))
        self.title_label.setVisible(bool(title))
        layout.addWidget(self.title_label)

        self._tab_group = QButtonGroup(self)
        self._tab_group.setExclusive(True)
        self._tab_row = QWidget()
        self._tab_layout = QHBoxLayout(self._tab_row)
        self._tab_layout.setContentsMargins(0, 0, 0, 0)
        self._tab_layout.setSpacing(16)
        self.tab_scroll = QScrollArea()
        self.tab_scroll.setWidget(self._tab_row)
        self.tab_scroll.setWidgetResizable(True)
        self.tab_scroll.setFrameShape(QScrollArea.NoFrame)
        self.tab_scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.tab_scroll.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        layout.addWidget(self.tab_scroll)

        self.canvas = _BarsCanvas(self)
        layout.addWidget(self.canvas)

    def _rebuild_tabs(self) -> None:
        for button in self._tab_buttons.values():
            self._tab_group.removeButton(button)
            button.deleteLater()
        self._tab_buttons = {}
        while self._tab_layout.count():
            self._tab_layout.takeAt(0)

        for key in self._selection.keys():
            button = QPushButton(key)
            button.setCheckable(True)
            button.setFlat(True)
            button.clicked.connect(lambda _checked=False, k=key: self.select_dataset(k))
            self._tab_group.addButton(button)
            self._tab_layout.addWidget(button)
            self._tab_buttons[key] = button
        self._tab_layout.addStretch(1)

        self.tab_scroll.setFixedHeight(self._tab_row.sizeHint().height() + 4)
        self.tab_scroll.setVisible(self.tabs_visible())
        self._sync_tabs()

    def _sync_tabs(self) -> None:
        st = self._style
        selected = self._selection.selected
        for key, button in self._tab_buttons.items():
            active = key == selected
            button.setChecked(active)
            font = font_with(self.font(), self.font().pointSizeF(), bold=active)
            button.setFont(font)
            color = qcolor(st.selected_tab_color if active else st.tab_color).name()
            button.setStyleSheet(f"QPushButton {{ color: {color}; border: none; }}")

    # ---------- public API ----------
    def set_datasets(self, datasets: Mapping[str, Series]) -> None:
        """Replace every dataset and select the first key.

        Raises:
            ValueError: If a dataset contains a malformed item.
        """
        for series in datasets.values():
            coerce_colored_series(series)
        self._selection = DatasetSelection(datasets)
        self._rebuild_tabs()
        self._apply_selection()

    def dataset_keys(self) -> List[str]:
        return self._selection.keys()

    def selected_dataset(self) -> str:
        return self._selection.selected

    def tabs_visible(self) -> bool:
        return len(self._selection) > 1

    def select_dataset(self, key: str) -> None:
        """Show dataset ``key``; a no-op if it is already selected.

        Raises:
            KeyError: If ``key`` is not a dataset key.
        """
        if not self._selection.select(key):
            self._sync_tabs()
            return
        log.debug("Switching to dataset '%s'", key)
        self._sync_tabs()
        self._apply_selection()
        self.datasetChanged.emit(key)

    def series(self) -> Series:
        return self._selection.selected_series()

    def points(self) -> Tuple[ColoredDataPoint, ...]:
        return self._points

    def is_empty(self) -> bool:
        return not self._points

    def is_animating(self) -> bool:
        if self._fade.is_running():
            return True
        return any(width.is_running() or color.is_running() for width, color in self._bars)

    def target_fraction(self, label: str) -> float:
        """Target width of the first bar named ``label``, before the minimum floor.

        Raises:
            KeyError: If no bar of the selected dataset has that label.
        """
        for point, target in zip(self._points, self._targets):
            if point.label == label:
                return target
        raise KeyError(label)

    def bar_states(self) -> List[BarState]:
        """Bars of the selected dataset at the current animation time, in order."""
        st = self._style
        out = []
        for point, target, (width, color) in zip(self._points, self._targets, self._bars):
            if st.show_as_percentage:
                text = f"{point.label} ({int(target * 100)}%)"
            else:
                text = f"{point.label} ({int(point.value)})"
            out.append(BarState(
                label=point.label,
                text=text,
                fraction=float(width.value()),
                color=color.value(),
            ))
        return out

    def canvas_height(self) -> float:
        st = self._style
        if not self._points:
            return 100.0
        return LEGEND_HEIGHT + len(self._points) * (st.bar_height + st.row_spacing) + st.row_spacing

    # ---------- internals ----------
    def _carry_over(self) -> Dict[str, Tuple[ValueTween, ColorTween]]:
        """Tweens of the bars currently drawn, by label, for labels drawn once."""
        counts = Counter(p.label for p in self._points)
        return {
            point.label: bar
            for point, bar in zip(self._points, self._bars)
            if counts[point.label] == 1
        }

    def _apply_selection(self) -> None:
        st = self._style
        previous = self._carry_over()
        series = self._selection.selected_series()
        self._points = coerce_colored_series(series)
        values = magnitudes(self._points)
        max_value = max(values) if values else 0.0
        counts = Counter(p.label for p in self._points)

        targets: List[float] = []
        bars: List[Tuple[ValueTween, ColorTween]] = []
        for point, value in zip(self._points, values):
            target, shown = bar_fraction(value, max_value, st.min_fraction)
            bar = previous.pop(point.label, None) if counts[point.label] == 1 else None
            if bar is None:
                bar = (ValueTween(0.0, duration_ms=st.bar_animation_ms),
                       ColorTween(point.color, duration_ms=st.bar_animation_ms))
            bar[0].retarget(shown)
            bar[1].retarget(point.color)
            targets.append(target)
            bars.append(bar)
        self._targets = targets
        self._bars = bars

        self._fade.bind(series)
        self._ticker.kick()
        self.canvas.updateGeometry()
        self.canvas.update()

    def _on_frame(self) -> None:
        self.canvas.update()

    def _paint_canvas(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        painter.fillRect(rect, qcolor(st.background_color))
        if not self._points:
            draw_placeholder(painter, rect)
            return

        self._paint_legend(painter, QRectF(rect.left(), rect.top(), rect.width(), LEGEND_HEIGHT))

        bars_top = rect.top() + LEGEND_HEIGHT
        bars_h = rect.height() - LEGEND_HEIGHT
        for x, solid in gridline_offsets(rect.width() - 1, st.line_count):
            painter.setPen(st.grid_pen(solid))
            painter.drawLine(QtCore.QPointF(rect.left() + x, bars_top),
                             QtCore.QPointF(rect.left() + x, bars_top + bars_h))

        painter.save()
        painter.setOpacity(self._fade.progress())
        radius = min(st.corner_radius, st.bar_height / 2.0)
        y = bars_top + st.row_spacing
        for bar in self.bar_states():
            width = rect.width() * bar.fraction
            painter.setPen(Qt.NoPen)
            painter.setBrush(qcolor(bar.color))
            painter.drawRoundedRect(QRectF(rect.left(), y, width, st.bar_height), radius, radius)
            painter.setPen(qcolor(st.label_color))
            painter.drawText(text_rect(rect.left() + 8, y, rect.width() - 16, st.bar_height),
                             Qt.AlignVCenter | Qt.AlignLeft,
                             elided(painter, bar.text, rect.width() - 16))
            y += st.bar_height + st.row_spacing
        painter.restore()

    def _paint_legend(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        count = len(self._points)
        cell_w = rect.width() / count
        label_font = font_with(self.font(), max(self.font().pointSizeF() - 1, 6))
        value_font = font_with(self.font(), self.font().pointSizeF() + 2, bold=True)
        for i, point in enumerate(self._points):
            x = rect.left() + i * cell_w
            painter.setPen(Qt.NoPen)
            painter.setBrush(qcolor(point.color))
            painter.drawEllipse(QRectF(x, rect.top() + 5, 8, 8))
            painter.setFont(label_font)
            painter.setPen(qcolor(st.label_color))
            painter.drawText(text_rect(x + 12, rect.top(), cell_w - 12, 18),
                             Qt.AlignLeft | Qt.AlignVCenter, elided(painter, point.label, cell_w - 12))
            painter.setFont(value_font)
            painter.setPen(qcolor(st.selected_tab_color))
            painter.drawText(text_rect(x + 12, rect.top() + 18, cell_w - 12, 22),
                             Qt.AlignLeft | Qt.AlignVCenter, str(int(point.value)))
