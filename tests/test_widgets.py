"""Widget tests for the chart widgets and cards (pytest-qt, offscreen)."""

import pytest
from PySide6.QtCore import QPoint, QPointF, Qt
from PySide6.QtGui import QWheelEvent
from PySide6.QtWidgets import QApplication

from pychartcardsqt import (
    BarChart,
    ChartCard,
    DonutChart,
    HorizontalBarChart,
    HorizontalBarChartStyle,
    LineChart,
    PieChart,
    PieChartCard,
    bar_chart_card,
    donut_chart_card,
    line_chart_card,
    pie_chart_card,
)

DATASETS = {
    "Gender": [("Women", 58, "#ffcb04"), ("Men", 42, "#2f7d32")],
    "Age": [("Women", 20), ("30-60", 55), ("> 60", 25)],
}


def _render(widget):
    """Force a paint pass through the offscreen backend."""
    widget.grab()


class TestBarChart:
    """Tests for BarChart."""

    def test_starts_animation_on_data(self, qtbot, sample_series):
        """New data starts the staggered grow-in."""
        chart = BarChart(sample_series)
        qtbot.addWidget(chart)
        assert len(chart.points()) == 4
        assert chart.is_animating()
        assert chart.bar_progress(3) <= chart.bar_progress(0)
        _render(chart)

    def test_settles(self, qtbot, sample_series):
        """The grow-in settles with every bar full."""
        chart = BarChart(sample_series)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        assert chart.bar_progress(3) == 1.0

    def test_same_series_does_not_restart(self, qtbot, sample_series):
        """Only a new series object restarts the animation."""
        chart = BarChart(sample_series)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        chart.set_data(sample_series)
        assert not chart.is_animating()
        chart.set_data(list(sample_series))
        assert chart.is_animating()

    def test_empty_shows_placeholder(self, qtbot):
        """No data shows the placeholder at its fixed height."""
        chart = BarChart([])
        qtbot.addWidget(chart)
        assert chart.is_empty()
        assert chart.sizeHint().height() == chart.PLACEHOLDER_HEIGHT
        _render(chart)

    def test_data_changed_signal(self, qtbot, sample_series):
        """set_data emits dataChanged."""
        chart = BarChart()
        qtbot.addWidget(chart)
        with qtbot.waitSignal(chart.dataChanged, timeout=500):
            chart.set_data(sample_series)

    def test_negative_values_drawn_as_zero(self, qtbot):
        """Negative values are drawn as zero but kept on the points."""
        chart = BarChart([("A", -5), ("B", 10)])
        qtbot.addWidget(chart)
        assert chart.values() == [0.0, 10.0]
        assert chart.points()[0].value == -5

    def test_malformed_data_raises(self, qtbot):
        """Non-finite values raise ValueError."""
        chart = BarChart()
        qtbot.addWidget(chart)
        with pytest.raises(ValueError):
            chart.set_data([("A", float("nan"))])


class TestHorizontalBarChart:
    """Tests for HorizontalBarChart."""

    def test_first_dataset_selected(self, qtbot):
        """The first dataset is selected and tabs are shown."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        assert chart.selected_dataset() == "Gender"
        assert chart.dataset_keys() == ["Gender", "Age"]
        assert chart.tabs_visible()
        _render(chart)

    def test_tabs_hidden_for_single_dataset(self, qtbot):
        """Tabs are hidden when there is a single dataset."""
        chart = HorizontalBarChart("Only", {"All": [("a", 1)]})
        qtbot.addWidget(chart)
        assert not chart.tabs_visible()
        assert chart.tab_scroll.isHidden()

    def test_select_emits_signal(self, qtbot):
        """Selecting a dataset emits datasetChanged with its key."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        with qtbot.waitSignal(chart.datasetChanged, timeout=500) as blocker:
            chart.select_dataset("Age")
        assert blocker.args == ["Age"]
        assert chart.series() is DATASETS["Age"]

    def test_clicking_a_tab_selects(self, qtbot):
        """Clicking a tab selects its dataset."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        chart.show()
        with qtbot.waitSignal(chart.datasetChanged, timeout=500):
            qtbot.mouseClick(chart._tab_buttons["Age"], Qt.LeftButton)
        assert chart.selected_dataset() == "Age"

    def test_unknown_key(self, qtbot):
        """Unknown dataset keys raise KeyError."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        with pytest.raises(KeyError):
            chart.select_dataset("Region")

    def test_fractions_and_labels(self, qtbot):
        """Fractions are relative to the largest value."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        assert chart.target_fraction("Women") == 1.0
        assert chart.target_fraction("Men") == pytest.approx(42 / 58)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        states = {s.label: s for s in chart.bar_states()}
        assert states["Women"].text == "Women (58)"
        assert states["Men"].fraction == pytest.approx(42 / 58)
        assert states["Women"].color == (255, 203, 4, 255)

    def test_percentage_labels(self, qtbot):
        """Percentage mode shows each bar's share of the maximum."""
        style = HorizontalBarChartStyle(show_as_percentage=True)
        chart = HorizontalBarChart("Population", DATASETS, style)
        qtbot.addWidget(chart)
        states = {s.label: s for s in chart.bar_states()}
        assert states["Men"].text == "Men (72%)"

    def test_shared_label_glides_from_current_width(self, qtbot):
        """A label present in both datasets glides from its current width."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        chart.select_dataset("Age")
        women = {s.label: s for s in chart.bar_states()}["Women"]
        assert women.fraction == pytest.approx(1.0, abs=0.05)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        women = {s.label: s for s in chart.bar_states()}["Women"]
        assert women.fraction == pytest.approx(20 / 55)

    def test_repeated_labels_keep_their_own_bars(self, qtbot):
        """Bars sharing a label keep their own width, color and text."""
        chart = HorizontalBarChart("Dup", {"All": [("X", 10, "#ff0000"), ("X", 100, "#00ff00")]})
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        states = chart.bar_states()
        assert [s.text for s in states] == ["X (10)", "X (100)"]
        assert states[0].fraction == pytest.approx(0.1)
        assert states[1].fraction == pytest.approx(1.0)
        assert states[0].color == (255, 0, 0, 255)
        assert states[1].color == (0, 255, 0, 255)
        assert chart.target_fraction("X") == pytest.approx(0.1)

    def test_returning_label_grows_from_zero(self, qtbot):
        """A label absent from the previous dataset starts at zero width."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        chart.select_dataset("Age")
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        chart.select_dataset("Gender")
        men = {s.label: s for s in chart.bar_states()}["Men"]
        assert men.fraction == pytest.approx(0.0, abs=0.05)

    def test_values_shown_as_integers(self, qtbot):
        """Bar text truncates values to whole numbers."""
        chart = HorizontalBarChart("Rates", {"All": [("a", 12.5), ("b", 40)]})
        qtbot.addWidget(chart)
        assert [s.text for s in chart.bar_states()] == ["a (12)", "b (40)"]

    def test_unknown_label_fraction(self, qtbot):
        """Asking for a label that is not drawn raises KeyError."""
        chart = HorizontalBarChart("Population", DATASETS)
        qtbot.addWidget(chart)
        with pytest.raises(KeyError):
            chart.target_fraction("30-60")

    def test_empty(self, qtbot):
        """No datasets shows the placeholder."""
        chart = HorizontalBarChart("Nothing")
        qtbot.addWidget(chart)
        assert chart.is_empty()
        assert chart.selected_dataset() == ""
        _render(chart)


class TestLineChart:
    """Tests for LineChart."""

    def test_layout_fits(self, qtbot):
        """Few points fit the viewport without scrolling."""
        chart = LineChart([("2019", 12), ("2020", 30), ("2021", 18)])
        qtbot.addWidget(chart)
        chart.resize(500, 300)
        chart.show()
        qtbot.waitExposed(chart)
        extent = chart.extent_plan()
        assert not extent.needs_scroll
        assert chart.axis_plan().gridline_values[-1] >= 30
        _render(chart)

    def test_overflow_scrolls_to_end(self, qtbot):
        """An overflowing plot ends up scrolled to the right end."""
        series = [(str(year), year % 7 * 10) for year in range(2000, 2020)]
        chart = LineChart(series)
        qtbot.addWidget(chart)
        chart.resize(400, 300)
        chart.show()
        qtbot.waitExposed(chart)
        assert chart.extent_plan().needs_scroll
        bar = chart.scroll.horizontalScrollBar()
        qtbot.waitUntil(lambda: bar.maximum() > 0 and chart.scroll_value() == bar.maximum(),
                        timeout=1000)

    def test_points_rise_to_final_heights(self, qtbot):
        """Points settle at the heights of their values."""
        chart = LineChart([("a", 10), ("b", 20)])
        qtbot.addWidget(chart)
        chart.resize(400, 300)
        chart.show()
        qtbot.waitExposed(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        height = float(chart.canvas.height())
        (_x0, y0), (_x1, y1) = chart.plot_points()
        assert y0 == pytest.approx(chart.value_y(10, height))
        assert y1 < y0

    def test_mouse_wheel_scrolls_sideways(self, qtbot):
        """A vertical wheel turn moves an overflowing plot horizontally."""
        series = [(str(year), year % 7 * 10) for year in range(2000, 2020)]
        chart = LineChart(series)
        qtbot.addWidget(chart)
        chart.resize(400, 300)
        chart.show()
        qtbot.waitExposed(chart)
        bar = chart.scroll.horizontalScrollBar()
        qtbot.waitUntil(lambda: bar.maximum() > 0 and chart.scroll_value() == bar.maximum(),
                        timeout=1000)
        before = chart.scroll_value()
        viewport = chart.scroll.viewport()
        center = QPointF(viewport.width() / 2, viewport.height() / 2)
        event = QWheelEvent(center, viewport.mapToGlobal(center), QPoint(0, 0), QPoint(0, 120),
                            Qt.NoButton, Qt.NoModifier, Qt.NoScrollPhase, False)
        QApplication.sendEvent(viewport, event)
        assert chart.scroll_value() < before

    def test_empty_hides_plot(self, qtbot):
        """No data hides the plot area."""
        chart = LineChart()
        qtbot.addWidget(chart)
        assert chart.is_empty()
        assert chart.scroll.isHidden()
        _render(chart)


class TestPieAndDonut:
    """Tests for PieChart, PieChartCard and DonutChart."""

    def test_pie_assigns_palette_colors(self, qtbot, sample_series):
        """Uncolored slices get distinct palette colors."""
        chart = PieChart(sample_series)
        qtbot.addWidget(chart)
        colors = {p.color for p in chart.points()}
        assert len(colors) == 4
        _render(chart)

    def test_pie_legend_grows_size_hint(self, qtbot, sample_series):
        """The legend adds to the size hint."""
        with_legend = PieChart(sample_series)
        qtbot.addWidget(with_legend)
        assert with_legend.sizeHint().height() > with_legend.style_config.chart_size

    def test_pie_card_forwards_data(self, qtbot, sample_series):
        """The card forwards data to a legend-free pie."""
        card = PieChartCard("Sex", sample_series)
        qtbot.addWidget(card)
        assert card.series() is sample_series
        assert card.title() == "Sex"
        assert not card.pie.style_config.show_legend
        _render(card)

    def test_donut_arcs_settle(self, qtbot, sample_series):
        """Donut arcs settle without overlapping."""
        chart = DonutChart(sample_series)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        arcs = chart.arcs()
        assert len(arcs) == 4
        assert sum(a.sweep_angle + 2.0 for a in arcs) <= 360.0
        _render(chart)

    def test_donut_restarts_on_new_series(self, qtbot, sample_series):
        """A new series object restarts the donut."""
        chart = DonutChart(sample_series)
        qtbot.addWidget(chart)
        qtbot.waitUntil(lambda: not chart.is_animating(), timeout=3000)
        chart.set_data(list(sample_series))
        assert chart.progress() < 0.5


class TestChartCard:
    """Tests for ChartCard and the convenience constructors."""

    @pytest.mark.parametrize(
        "make, chart_cls",
        [
            (bar_chart_card, BarChart),
            (line_chart_card, LineChart),
            (pie_chart_card, PieChart),
            (donut_chart_card, DonutChart),
        ],
    )
    def test_constructors(self, qtbot, sample_series, make, chart_cls):
        """Each constructor wraps the matching chart in a card."""
        card = make("Threat level", sample_series)
        qtbot.addWidget(card)
        assert isinstance(card, ChartCard)
        assert isinstance(card.chart(), chart_cls)
        assert card.title() == "Threat level"
        assert not card.expanded

    def test_expand_and_close(self, qtbot, sample_series):
        """Expanding shows a scaled copy, collapsing removes it."""
        card = donut_chart_card("Zones", sample_series)
        qtbot.addWidget(card)
        with qtbot.waitSignal(card.expandedChanged, timeout=500) as blocker:
            card.set_expanded(True)
        assert blocker.args == [True]
        assert card.expanded
        big = card.expanded_chart()
        assert isinstance(big, DonutChart)
        assert big.series() is sample_series
        assert big.style_config.chart_size == 300.0

        with qtbot.waitSignal(card.expandedChanged, timeout=500) as blocker:
            card.toggle_expanded()
        assert blocker.args == [False]
        assert card.expanded_chart() is None

    def test_dialog_close_button_collapses(self, qtbot, sample_series):
        """The dialog close button collapses the card."""
        card = bar_chart_card("Threat level", sample_series)
        qtbot.addWidget(card)
        card.expand_button.click()
        assert card.expanded
        dialog = card._dialog
        with qtbot.waitSignal(card.expandedChanged, timeout=500):
            dialog.close_button.click()
        assert not card.expanded

    def test_expanded_chart_uses_current_data(self, qtbot, sample_series):
        """The expanded chart shows the inline chart's latest data."""
        card = bar_chart_card("Threat level", sample_series)
        qtbot.addWidget(card)
        newer = [("Only", 1)]
        card.chart().set_data(newer)
        card.set_expanded(True)
        assert card.expanded_chart().series() is newer
        assert card.expanded_chart().style_config.bar_height == 30.0
        card.set_expanded(False)
