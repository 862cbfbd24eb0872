"""Chart cards: a titled container with an expand-to-fullscreen button.

The card builds its chart through a factory so the fullscreen view can host
a second, larger instance. The factory receives a scale factor (1.0 inline,
``CardStyle.expanded_scale`` when expanded); the expanded chart is handed the
inline chart's current series so both always show the same data.

Typical usage:

    card = bar_chart_card("Threat level", [("Low", 12), ("High", 40)])
    card.expandedChanged.connect(lambda on: print("expanded" if on else "inline"))
    layout.addWidget(card)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QScrollArea,
    QStyle,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from .bar_chart import BarChart
from .donut_chart import DonutChart
from .line_chart import LineChart
from .models import (
    BarChartStyle,
    CardStyle,
    DonutChartStyle,
    LineChartStyle,
    PieChartStyle,
    Series,
)
from .painting import font_with, qcolor
from .pie_chart import PieChart

log = logging.getLogger(__name__)

ChartFactory = Callable[[float], QWidget]


def _card_stylesheet(name: str, style: CardStyle) -> str:
    bg = qcolor(style.background_color).name()
    return f"#{name} {{ background: {bg}; border-radius: 12px; }}"


class _ExpandedDialog(QDialog):
    """Fullscreen host for the expanded chart."""

    def __init__(self, title: str, chart: QWidget, style: CardStyle, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.chart = chart
        self.setWindowTitle(title)
        self.setObjectName("ExpandedChartCard")
        self.setStyleSheet(_card_stylesheet("ExpandedChartCard", style))

        layout = QVBoxLayout(self)
        m = style.expanded_margin
        layout.setContentsMargins(m, m, m, m)

        header = QHBoxLayout()
        self.title_label = QLabel(title)
        self.title_label.setFont(font_with(self.font(), style.expanded_title_font_size, bold=True))
        self.title_label.setStyleSheet(f"color: {qcolor(style.title_color).name()};")
        header.addWidget(self.title_label, 1)
        self.close_button = QToolButton()
        self.close_button.setIcon(self.style().standardIcon(QStyle.SP_TitleBarCloseButton))
        self.close_button.setToolTip("Close")
        self.close_button.clicked.connect(self.accept)
        header.addWidget(self.close_button)
        layout.addLayout(header)

        scroll = QScrollArea()
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidgetResizable(True)
        scroll.setWidget(chart)
        layout.addWidget(scroll, 1)


class ChartCard(QFrame):
    """Titled card hosting one chart, expandable to a fullscreen dialog.

    Attributes:
        expandedChanged: Signal emitted with the new expanded state.
    """

    expandedChanged = Signal(bool)

    def __init__(
        self,
        title: str,
        factory: ChartFactory,
        style: Optional[CardStyle] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        """Initialize the card.

        Args:
            title: Text shown in the card header.
            factory: Builds a chart widget for a given scale factor.
            style: Card chrome; defaults to :class:`CardStyle`.
            parent: Parent widget.
        """
        super().__init__(parent)
        self._title = title
        self._factory = factory
        self._style = style or CardStyle()
        self._dialog: Optional[_ExpandedDialog] = None
        self._build_ui()

    def _build_ui(self) -> None:
        st = self._style
        self.setObjectName("ChartCard")
        self.setStyleSheet(_card_stylesheet("ChartCard", st))
        self.setMaximumHeight(st.max_height)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 12)

        header = QHBoxLayout()
        self.title_label = QLabel(self._title)
        self.title_label.setFont(font_with(self.font(), st.title_font_size, bold=True))
        self.title_label.setStyleSheet(f"color: {qcolor(st.title_color).name()};")
        header.addWidget(self.title_label, 1)
        self.expand_button = QToolButton()
        self.expand_button.setIcon(self.style().standardIcon(QStyle.SP_TitleBarMaxButton))
        self.expand_button.setToolTip("Expand")
        self.expand_button.clicked.connect(lambda: self.set_expanded(True))
        header.addWidget(self.expand_button)
        layout.addLayout(header)

        self._chart = self._factory(1.0)
        scroll = QScrollArea()
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setWidget(self._chart)
        m = st.padding
        self._chart.setContentsMargins(m, m, m, m)
        layout.addWidget(scroll, 1)

    def title(self) -> str:
        return self._title

    def chart(self) -> QWidget:
        """The inline chart widget."""
        return self._chart

    def expanded_chart(self) -> Optional[QWidget]:
        """The fullscreen chart while expanded, else None."""
        return self._dialog.chart if self._dialog is not None else None

    @property
    def expanded(self) -> bool:
        return self._dialog is not None

    def set_expanded(self, expanded: bool) -> None:
        """Open or close the fullscreen view."""
        if expanded == self.expanded:
            return
        if expanded:
            chart = self._factory(self._style.expanded_scale)
            if hasattr(self._chart, "series") and hasattr(chart, "set_data"):
                chart.set_data(self._chart.series())
            self._dialog = _ExpandedDialog(self._title, chart, self._style, self)
            self._dialog.finished.connect(self._on_dialog_finished)
            self._dialog.showMaximized()
        else:
            dialog = self._dialog
            self._dialog = None
            dialog.finished.disconnect(self._on_dialog_finished)
            dialog.close()
            dialog.deleteLater()
        log.debug("Card '%s' expanded=%s", self._title, expanded)
        self.expandedChanged.emit(expanded)

    def toggle_expanded(self) -> None:
        self.set_expanded(not self.expanded)

    def _on_dialog_finished(self, _result: int) -> None:
        self.set_expanded(False)


# ---------- convenience constructors ----------

def _factory(chart_cls, series: Optional[Series], style) -> ChartFactory:
    return lambda scale: chart_cls(series, chart_cls.scaled_style(style, scale))


def bar_chart_card(
    title: str,
    series: Optional[Series] = None,
    style: Optional[BarChartStyle] = None,
    card_style: Optional[CardStyle] = None,
    parent: Optional[QWidget] = None,
) -> ChartCard:
    base = style or BarChartStyle()
    return ChartCard(title, _factory(BarChart, series, base), card_style, parent)


def line_chart_card(
    title: str,
    series: Optional[Series] = None,
    style: Optional[LineChartStyle] = None,
    card_style: Optional[CardStyle] = None,
    parent: Optional[QWidget] = None,
) -> ChartCard:
    base = style or LineChartStyle()
    return ChartCard(title, _factory(LineChart, series, base), card_style, parent)


def pie_chart_card(
    title: str,
    series: Optional[Series] = None,
    style: Optional[PieChartStyle] = None,
    card_style: Optional[CardStyle] = None,
    parent: Optional[QWidget] = None,
) -> ChartCard:
    base = style or PieChartStyle()
    return ChartCard(title, _factory(PieChart, series, base), card_style, parent)


def donut_chart_card(
    title: str,
    series: Optional[Series] = None,
    style: Optional[DonutChartStyle] = None,
    card_style: Optional[CardStyle] = None,
    parent: Optional[QWidget] = None,
) -> ChartCard:
    base = style or DonutChartStyle()
    return ChartCard(title, _factory(DonutChart, series, base), card_style, parent)
