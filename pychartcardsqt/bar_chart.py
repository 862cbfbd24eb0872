"""Vertical list of labelled horizontal bars with a staggered grow-in.

Each row is split into three weighted columns: the label, a rounded bar whose
width is the value normalized against [0, max], and the value text.

Typical usage:

    chart = BarChart()
    chart.set_data([("Low", 12), ("Medium", 40), ("High", 7)])
"""

from __future__ import annotations

import dataclasses
from typing import Optional

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QRectF, Qt
from PySide6.QtWidgets import QWidget

from .animation import StaggeredAnimation
from .base_chart import BaseChart
from .models import BarChartStyle, Series
from .painting import elided, font_with, qcolor, size_hint, text_rect
from .utils import format_percentage, normalize


class BarChart(BaseChart):
    """Rows of ``label | bar | value`` drawn top to bottom in input order."""

    def __init__(
        self,
        series: Optional[Series] = None,
        style: Optional[BarChartStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        st = style or BarChartStyle()
        super().__init__(st, parent)
        self._anim = StaggeredAnimation(duration_ms=st.duration_ms, stagger_ms=st.stagger_ms)
        self.set_data(series)

    def _bind_animation(self, series: Series) -> bool:
        return self._anim.bind(series, len(self._points))

    def is_animating(self) -> bool:
        return self._anim.is_running()

    def bar_progress(self, index: int) -> float:
        """Current grow-in progress of row ``index``."""
        return self._anim.progress(index)

    def row_height(self) -> float:
        return self._style.bar_height + self._style.spacing

    def sizeHint(self) -> QtCore.QSize:
        if self.is_empty():
            return size_hint(240, self.PLACEHOLDER_HEIGHT)
        return size_hint(240, self._style.spacing + len(self._points) * self.row_height())

    def minimumSizeHint(self) -> QtCore.QSize:
        return self.sizeHint()

    @staticmethod
    def scaled_style(style: BarChartStyle, scale: float) -> BarChartStyle:
        return dataclasses.replace(
            style,
            bar_height=style.bar_height * scale,
            corner_radius=style.corner_radius * scale,
            font_size=style.font_size * scale,
        )

    def _paint(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        st = self._style
        values = self._values
        max_value = max(values) if values else 0.0

        inner_w = max(rect.width() - 2 * st.horizontal_padding, 0.0)
        total_weight = float(st.label_weight + st.bar_weight + st.value_weight)
        label_w = inner_w * st.label_weight / total_weight
        bar_w = inner_w * st.bar_weight / total_weight
        value_w = inner_w * st.value_weight / total_weight

        painter.setFont(font_with(self.font(), st.font_size))
        text_color = qcolor(st.text_color)
        brush = st.to_brush()
        radius = min(st.corner_radius, st.bar_height / 2.0)

        y = rect.top() + st.spacing
        for i, (point, value) in enumerate(zip(self._points, values)):
            x = rect.left() + st.horizontal_padding

            painter.setPen(text_color)
            label_rect = text_rect(x, y, label_w, st.bar_height)
            painter.drawText(label_rect, Qt.AlignVCenter | Qt.AlignLeft,
                             elided(painter, point.label, label_w))

            frac = normalize(value, 0.0, max_value) * self.bar_progress(i)
            width = bar_w * frac
            if width > 0:
                painter.setPen(Qt.NoPen)
                painter.setBrush(brush)
                painter.drawRoundedRect(QRectF(x + label_w, y, width, st.bar_height), radius, radius)

            painter.setPen(text_color)
            value_rect = text_rect(x + label_w + bar_w, y, value_w, st.bar_height)
            painter.drawText(value_rect, Qt.AlignVCenter | Qt.AlignRight,
                             format_percentage(point.value))

            y += self.row_height()
