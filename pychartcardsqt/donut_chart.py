"""Donut chart: round-capped arcs separated by a small angular gap."""

from __future__ import annotations

import dataclasses
from typing import List, Optional

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QRectF
from PySide6.QtWidgets import QWidget

from .animation import ProgressAnimation
from .base_chart import BaseChart
from .geometry import partition
from .models import Arc, DonutChartStyle, Series, coerce_colored_series
from .painting import qt_arc_angles, size_hint, square_rect
from .pie_chart import legend_height, paint_percentage_legend


class DonutChart(BaseChart):
    """Ring of arcs from :func:`partition`, filling up over ``duration_ms``.

    The ring is stroked with a pen ``thickness`` wide, so the arc rectangle is
    inset by half the thickness to keep the stroke inside the widget.
    """

    def __init__(
        self,
        series: Optional[Series] = None,
        style: Optional[DonutChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        st = style or DonutChartStyle()
        super().__init__(st, parent)
        self._anim = ProgressAnimation(duration_ms=st.duration_ms)
        self.set_data(series)

    def _coerce(self, series):
        return coerce_colored_series(series, self._style.palette)

    def _bind_animation(self, series: Series) -> bool:
        return self._anim.bind(series)

    def is_animating(self) -> bool:
        return self._anim.is_running()

    def progress(self) -> float:
        return self._anim.progress()

    def arcs(self) -> List[Arc]:
        """Arcs at the current animation progress."""
        st = self._style
        return partition(self._points, st.gap_angle, st.min_sweep, self.progress())

    def sizeHint(self) -> QtCore.QSize:
        st = self._style
        rows = len(self._points) if st.show_legend else 0
        return size_hint(st.chart_size, st.chart_size + legend_height(rows))

    def minimumSizeHint(self) -> QtCore.QSize:
        return self.sizeHint()

    @staticmethod
    def scaled_style(style: DonutChartStyle, scale: float) -> DonutChartStyle:
        return dataclasses.replace(
            style,
            chart_size=style.chart_size * scale,
            thickness=style.thickness * scale,
        )

    def _paint(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        rows = len(self._points) if st.show_legend else 0
        chart_h = max(rect.height() - legend_height(rows), 0.0)
        ring = square_rect(QRectF(rect.left(), rect.top(), rect.width(), chart_h), st.thickness / 2.0)

        painter.setBrush(QtGui.QBrush())
        for arc in self.arcs():
            painter.setPen(st.arc_pen(arc.color))
            start16, span16 = qt_arc_angles(arc)
            painter.drawArc(ring, start16, span16)

        if rows:
            legend_rect = QRectF(rect.left(), rect.top() + chart_h, rect.width(), legend_height(rows))
            paint_percentage_legend(painter, legend_rect, self._points, st.legend_font_size, st.text_color)
