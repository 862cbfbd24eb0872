"""Scrollable line chart with a fixed y-axis gutter.

The plot area lives in a QScrollArea. Its width comes from
:func:`~pychartcardsqt.geometry.plan_extent`: points are spread over the
viewport but never closer than ``x_min_point_spacing``, and when they do not
fit the canvas grows and the view is scrolled to the right end shortly after
every relayout so the latest values are visible. The y labels are painted in
a separate gutter that stays put while the plot scrolls.

Typical usage:

    chart = LineChart([("2019", 12), ("2020", 30), ("2021", 18)])
    chart.resize(480, 300)
    chart.show()
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import List, Optional, Tuple

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtWidgets import QFrame, QHBoxLayout, QScrollArea, QWidget

from .animation import ProgressAnimation
from .base_chart import BaseChart
from .geometry import build_fill_path, build_path, plan_axis, plan_extent, point_positions
from .models import AxisPlan, ExtentPlan, LineChartStyle, Series
from .painting import qcolor, size_hint, text_rect, to_qpainter_path
from .utils import normalize

log = logging.getLogger(__name__)


def _format_tick(value: float) -> str:
    return f"{value:g}"


class _YAxisGutter(QWidget):
    def __init__(self, chart: "LineChart") -> None:
        super().__init__(chart)
        self._chart = chart

    def paintEvent(self, event) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            self._chart._paint_gutter(painter, QRectF(self.rect()))
        finally:
            painter.end()


class _PlotCanvas(QWidget):
    def __init__(self, chart: "LineChart") -> None:
        super().__init__()
        self._chart = chart

    def paintEvent(self, event) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            self._chart._paint_plot(painter, QRectF(self.rect()))
        finally:
            painter.end()


class LineChart(BaseChart):
    """Line chart over labelled values, rising from the baseline on new data."""

    def __init__(
        self,
        series: Optional[Series] = None,
        style: Optional[LineChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        st = style or LineChartStyle()
        super().__init__(st, parent)
        self._anim = ProgressAnimation(duration_ms=st.duration_ms)
        self._axis: AxisPlan = plan_axis(0.0, 0.0, st.y_min_point_spacing)
        self._extent: ExtentPlan = plan_extent(0, 0.0, st.x_min_point_spacing,
                                               st.left_padding, st.trailing_margin)
        self._last_content_width = -1.0
        self._build_ui()
        self.set_data(series)

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.gutter = _YAxisGutter(self)
        self.gutter.setFixedWidth(int(self._style.y_axis_width))
        layout.addWidget(self.gutter)

        self.canvas = _PlotCanvas(self)
        self.scroll = QScrollArea()
        self.scroll.setFrameShape(QFrame.NoFrame)
        self.scroll.setWidgetResizable(False)
        self.scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scroll.setWidget(self.canvas)
        self.scroll.viewport().installEventFilter(self)
        layout.addWidget(self.scroll, 1)

    # ---------- data / animation ----------
    def set_data(self, series: Optional[Series]) -> None:
        super().set_data(series)
        self.gutter.setVisible(not self.is_empty())
        self.scroll.setVisible(not self.is_empty())
        self._relayout()

    def _bind_animation(self, series: Series) -> bool:
        return self._anim.bind(series)

    def is_animating(self) -> bool:
        return self._anim.is_running()

    def progress(self) -> float:
        return self._anim.progress()

    def _on_frame(self) -> None:
        self.gutter.update()
        self.canvas.update()

    @staticmethod
    def scaled_style(style: LineChartStyle, scale: float) -> LineChartStyle:
        return dataclasses.replace(
            style,
            x_min_point_spacing=style.x_min_point_spacing * scale,
            point_radius=style.point_radius * scale,
        )

    # ---------- layout ----------
    def axis_plan(self) -> AxisPlan:
        return self._axis

    def extent_plan(self) -> ExtentPlan:
        return self._extent

    def scroll_value(self) -> int:
        return self.scroll.horizontalScrollBar().value()

    def sizeHint(self) -> QtCore.QSize:
        return size_hint(360, 300)

    def eventFilter(self, obj, event) -> bool:
        if obj is self.scroll.viewport():
            if event.type() == QtCore.QEvent.Resize:
                self._relayout()
            elif event.type() == QtCore.QEvent.Wheel and self._wheel_to_horizontal(event):
                return True
        return super().eventFilter(obj, event)

    def _wheel_to_horizontal(self, event: QtGui.QWheelEvent) -> bool:
        """Scroll the plot sideways with an ordinary (vertical) mouse wheel."""
        bar = self.scroll.horizontalScrollBar()
        delta = event.angleDelta()
        notches = (delta.y() or delta.x()) / 120.0
        if bar.maximum() <= 0 or notches == 0:
            return False
        bar.setValue(bar.value() - int(round(notches * 3 * bar.singleStep())))
        return True

    def _relayout(self) -> None:
        st = self._style
        viewport = self.scroll.viewport()
        width = float(viewport.width())
        height = float(viewport.height())
        values = self._values

        self._axis = plan_axis(max(values) if values else 0.0, height, st.y_min_point_spacing)
        self._extent = plan_extent(len(values), width, st.x_min_point_spacing,
                                   st.left_padding, st.trailing_margin)
        self.canvas.setFixedSize(int(math.ceil(self._extent.content_width)), int(height))

        if self._extent.content_width != self._last_content_width:
            self._last_content_width = self._extent.content_width
            QtCore.QTimer.singleShot(st.scroll_delay_ms, self._scroll_to_end)
        self.gutter.update()
        self.canvas.update()

    def _scroll_to_end(self) -> None:
        bar = self.scroll.horizontalScrollBar()
        bar.setValue(bar.maximum())
        log.debug("Scrolled line chart to %d", bar.value())

    # ---------- geometry ----------
    def _baseline(self, height: float) -> Tuple[float, float]:
        st = self._style
        baseline = height - st.bottom_padding
        return baseline, max(baseline - st.top_padding, 0.0)

    def value_y(self, value: float, height: float) -> float:
        """Pixel y of ``value`` on the settled axis in a plot ``height`` tall."""
        baseline, plot_h = self._baseline(height)
        return baseline - normalize(value, 0.0, self._axis.max_extent) * plot_h

    def plot_points(self, height: Optional[float] = None) -> List[Tuple[float, float]]:
        """Point positions at the current animation progress."""
        h = float(self.canvas.height()) if height is None else height
        baseline, plot_h = self._baseline(h)
        return point_positions(
            self._values, self._axis, self._extent, baseline, plot_h,
            x_offset=self._style.left_padding, progress=self.progress(),
        )

    # ---------- painting ----------
    def _paint(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        # Gutter and canvas paint themselves.
        return

    def _paint_gutter(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        height = float(self.canvas.height())
        painter.setPen(qcolor(st.text_color))
        for value in self._axis.gridline_values:
            y = self.value_y(value, height)
            painter.drawText(text_rect(0, y - 10, rect.width() - 6, 20),
                             Qt.AlignRight | Qt.AlignVCenter, _format_tick(value))
        painter.setPen(st.axis_pen())
        baseline, _ = self._baseline(height)
        painter.drawLine(QPointF(rect.right(), st.top_padding), QPointF(rect.right(), baseline))

    def _paint_plot(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        height = rect.height()
        baseline, _ = self._baseline(height)

        painter.setPen(st.interval_pen())
        for value in self._axis.gridline_values[1:]:
            y = self.value_y(value, height)
            painter.drawLine(QPointF(rect.left(), y), QPointF(rect.right(), y))

        painter.setPen(st.axis_pen())
        painter.drawLine(QPointF(rect.left(), baseline), QPointF(rect.right(), baseline))

        points = self.plot_points(height)
        if st.fill_graph and len(points) > 1:
            painter.setPen(Qt.NoPen)
            painter.setBrush(st.fill_brush())
            painter.drawPath(to_qpainter_path(build_fill_path(points, baseline, st.smooth_lines)))

        painter.setPen(st.line_pen())
        painter.setBrush(Qt.NoBrush)
        painter.drawPath(to_qpainter_path(build_path(points, st.smooth_lines)))

        painter.setPen(Qt.NoPen)
        painter.setBrush(st.point_brush())
        for x, y in points:
            painter.drawEllipse(QPointF(x, y), st.point_radius, st.point_radius)

        painter.setPen(qcolor(st.text_color))
        label_w = self._extent.spacing
        for point, (x, _y) in zip(self._points, points):
            painter.drawText(text_rect(x - label_w / 2.0, baseline + 8, label_w, 20),
                             Qt.AlignHCenter | Qt.AlignTop, point.label)
