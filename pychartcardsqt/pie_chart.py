"""Filled pie charts.

PieChart draws wedges that grow in place from their final start angles, with
an optional legend of ``label: NN.N%`` rows underneath. PieChartCard is the
compact card variant: a title above a legend column (color bar, label and
``int(value)%``) sitting next to the pie.
"""

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from .animation import ProgressAnimation
from .base_chart import BaseChart
from .geometry import percentages, pie_wedges
from .models import ColoredDataPoint, PieChartStyle, Series, coerce_colored_series
from .painting import (
    draw_marker,
    elided,
    font_with,
    qcolor,
    qt_arc_angles,
    size_hint,
    square_rect,
    text_rect,
)
from .utils import format_percentage

LEGEND_ROW_HEIGHT = 22.0
LEGEND_TOP_MARGIN = 16.0


def legend_height(count: int) -> float:
    return LEGEND_TOP_MARGIN + count * LEGEND_ROW_HEIGHT if count else 0.0


def paint_percentage_legend(
    painter: QtGui.QPainter,
    rect: QRectF,
    points: Sequence[ColoredDataPoint],
    font_size: float,
    text_color,
) -> None:
    """Paint one ``marker  label: NN.N%`` row per point, top-down inside ``rect``."""
    painter.save()
    painter.setFont(font_with(painter.font(), font_size))
    y = rect.top() + LEGEND_TOP_MARGIN
    marker_r = 6.0
    for point, pct in zip(points, percentages(points)):
        center = QPointF(rect.left() + 8 + marker_r, y + LEGEND_ROW_HEIGHT / 2.0)
        draw_marker(painter, center, marker_r, point.color)
        painter.setPen(qcolor(text_color))
        x = center.x() + marker_r + 8
        width = rect.right() - x
        label = f"{point.label}: {format_percentage(pct)}"
        painter.drawText(text_rect(x, y, width, LEGEND_ROW_HEIGHT),
                         Qt.AlignVCenter | Qt.AlignLeft, elided(painter, label, width))
        y += LEGEND_ROW_HEIGHT
    painter.restore()


class PieChart(BaseChart):
    """Filled pie whose wedges grow together over ``duration_ms``."""

    def __init__(
        self,
        series: Optional[Series] = None,
        style: Optional[PieChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        st = style or PieChartStyle()
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

    def sizeHint(self) -> QtCore.QSize:
        st = self._style
        rows = len(self._points) if st.show_legend else 0
        return size_hint(st.chart_size, st.chart_size + legend_height(rows))

    def minimumSizeHint(self) -> QtCore.QSize:
        return self.sizeHint()

    @staticmethod
    def scaled_style(style: PieChartStyle, scale: float) -> PieChartStyle:
        return dataclasses.replace(style, chart_size=style.chart_size * scale)

    def _paint(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        rows = len(self._points) if st.show_legend else 0
        chart_h = max(rect.height() - legend_height(rows), 0.0)
        pie_rect = square_rect(QRectF(rect.left(), rect.top(), rect.width(), chart_h))

        painter.setPen(Qt.NoPen)
        for arc in pie_wedges(self._points, self.progress()):
            if arc.sweep_angle <= 0:
                continue
            painter.setBrush(qcolor(arc.color))
            start16, span16 = qt_arc_angles(arc)
            painter.drawPie(pie_rect, start16, span16)

        if rows:
            legend_rect = QRectF(rect.left(), rect.top() + chart_h, rect.width(), legend_height(rows))
            paint_percentage_legend(painter, legend_rect, self._points, st.legend_font_size, st.text_color)


class _ValueLegend(QWidget):
    """Legend column: color bar, muted label and ``int(value)%`` per point."""

    ROW_HEIGHT = 44.0
    BAR_SIZE = (4.0, 16.0)

    def __init__(self, style: PieChartStyle, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._style = style
        self._points: Sequence[ColoredDataPoint] = ()

    def set_points(self, points: Sequence[ColoredDataPoint]) -> None:
        self._points = tuple(points)
        self.updateGeometry()
        self.update()

    def sizeHint(self) -> QtCore.QSize:
        return size_hint(120, max(len(self._points), 1) * self.ROW_HEIGHT)

    def paintEvent(self, event) -> None:
        st = self._style
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            bar_w, bar_h = self.BAR_SIZE
            label_font = font_with(self.font(), st.legend_font_size)
            value_font = font_with(self.font(), st.legend_value_font_size, bold=True)
            y = 0.0
            for point in self._points:
                painter.setPen(Qt.NoPen)
                painter.setBrush(qcolor(point.color))
                painter.drawRect(QRectF(0, y + 4, bar_w, bar_h))

                x = bar_w + 8
                width = self.width() - x
                painter.setFont(label_font)
                painter.setPen(qcolor(st.muted_text_color))
                painter.drawText(text_rect(x, y, width, 18), Qt.AlignLeft | Qt.AlignVCenter,
                                 elided(painter, point.label, width))
                painter.setFont(value_font)
                painter.setPen(qcolor(st.text_color))
                painter.drawText(text_rect(x, y + 18, width, self.ROW_HEIGHT - 18),
                                 Qt.AlignLeft | Qt.AlignTop, f"{int(point.value)}%")
                y += self.ROW_HEIGHT
        finally:
            painter.end()


class PieChartCard(QFrame):
    """Compact card: title over a legend column beside a legend-less pie.

    Attributes:
        dataChanged: Forwarded from the inner PieChart.
    """

    dataChanged = QtCore.Signal()

    def __init__(
        self,
        title: str,
        series: Optional[Series] = None,
        style: Optional[PieChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        st = dataclasses.replace(style or PieChartStyle(), show_legend=False)
        self._style = st
        self._build_ui(title)
        self.set_data(series)

    def _build_ui(self, title: str) -> None:
        self.setObjectName("PieChartCard")
        self.setStyleSheet(
            "#PieChartCard { background: white; border: 1px solid #d3d3d3; border-radius: 12px; }"
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        self.title_label = QLabel(title)
        self.title_label.setFont(font_with(self.font(), 16, bold=True))
        layout.addWidget(self.title_label)

        row = QHBoxLayout()
        self.legend = _ValueLegend(self._style)
        self.pie = PieChart(style=self._style)
        self.pie.dataChanged.connect(self.dataChanged)
        row.addWidget(self.legend, 1)
        row.addWidget(self.pie, 1)
        layout.addLayout(row)

    def set_data(self, series: Optional[Series]) -> None:
        self.pie.set_data(series)
        self.legend.set_points(self.pie.points())

    def series(self) -> Series:
        return self.pie.series()

    def title(self) -> str:
        return self.title_label.text()
