"""Tests for models.py: color normalization, series coercion, dataset
selection and the pen/brush helpers of the style dataclasses.
"""

import dataclasses
import logging

import pytest

from pychartcardsqt.models import (
    BarChartStyle,
    ColoredDataPoint,
    DataPoint,
    DatasetSelection,
    DonutChartStyle,
    HorizontalBarChartStyle,
    LineChartStyle,
    coerce_colored_series,
    coerce_point,
    coerce_series,
    default_palette,
    lerp_rgba,
    magnitudes,
    to_rgba,
)


class TestToRgba:
    """Tests for to_rgba function."""

    def test_rgb_tuple_gets_opaque_alpha(self):
        """RGB tuples get an opaque alpha."""
        assert to_rgba((10, 20, 30)) == (10, 20, 30, 255)

    def test_rgba_tuple_passthrough(self):
        """RGBA tuples are returned unchanged."""
        assert to_rgba((10, 20, 30, 40)) == (10, 20, 30, 40)

    def test_hex_rrggbb(self):
        """Six-digit hex strings are opaque."""
        assert to_rgba("#6750a4") == (103, 80, 164, 255)

    def test_hex_aarrggbb(self):
        """Eight-digit hex strings carry alpha first, Qt style."""
        assert to_rgba("#806750a4") == (103, 80, 164, 128)

    def test_color_name(self):
        """Named colors resolve through QColor."""
        assert to_rgba("red") == (255, 0, 0, 255)

    def test_qcolor(self):
        """QColor instances keep their alpha."""
        from PySide6.QtGui import QColor

        assert to_rgba(QColor(1, 2, 3, 4)) == (1, 2, 3, 4)

    @pytest.mark.parametrize("bad", ["#12", "#GGHHII", "#1234567"])
    def test_invalid_hex(self, bad):
        """Malformed hex strings raise ValueError."""
        with pytest.raises(ValueError):
            to_rgba(bad)

    def test_channel_out_of_range(self):
        """Channels above 255 raise ValueError."""
        with pytest.raises(ValueError):
            to_rgba((256, 0, 0))

    def test_unsupported_type(self):
        """Unsupported types raise TypeError."""
        with pytest.raises(TypeError):
            to_rgba(42)


class TestLerpRgba:
    """Tests for lerp_rgba function."""

    def test_endpoints(self):
        """Fractions 0 and 1 return the endpoints."""
        a, b = (0, 0, 0, 255), (200, 100, 50, 255)
        assert lerp_rgba(a, b, 0.0) == a
        assert lerp_rgba(a, b, 1.0) == b

    def test_midpoint(self):
        """Halfway mixes every channel, rounding to nearest."""
        assert lerp_rgba((0, 0, 0, 0), (100, 200, 50, 255), 0.5) == (50, 100, 25, 128)

    def test_fraction_is_clamped(self):
        """Fractions past 1 are clamped."""
        assert lerp_rgba((0, 0, 0, 0), (10, 10, 10, 10), 3.0) == (10, 10, 10, 10)


class TestDefaultPalette:
    """Tests for default_palette function."""

    def test_count_and_distinct(self):
        """The palette returns the requested number of distinct RGBA colors."""
        colors = default_palette(5)
        assert len(colors) == 5
        assert len(set(colors)) == 5
        assert all(len(c) == 4 and all(0 <= ch <= 255 for ch in c) for c in colors)

    def test_cycles_past_colormap_size(self):
        """The palette wraps after ten colors."""
        colors = default_palette(12)
        assert colors[10] == colors[0]
        assert colors[11] == colors[1]

    def test_empty(self):
        """Zero colors gives an empty palette."""
        assert default_palette(0) == []


class TestSeriesCoercion:
    """Tests for coerce_point, coerce_series and coerce_colored_series."""

    def test_tuples_become_models(self):
        """Tuples become DataPoint and ColoredDataPoint models."""
        points = coerce_series([("A", 1), ("B", 2.5, "#ff0000")])
        assert points[0] == DataPoint("A", 1.0)
        assert points[1] == ColoredDataPoint("B", 2.5, (255, 0, 0, 255))

    def test_models_pass_through(self):
        """Point models are returned as-is."""
        p = DataPoint("x", 3)
        assert coerce_point(p) is p

    def test_none_is_empty(self):
        """None coerces to an empty series."""
        assert coerce_series(None) == ()

    def test_duplicate_labels_allowed(self):
        """Repeated labels are kept."""
        assert len(coerce_series([("A", 1), ("A", 2)])) == 2

    @pytest.mark.parametrize("item", [("A",), ("A", 1, "red", "extra"), "A", 5])
    def test_malformed_items(self, item):
        """Items of the wrong shape raise ValueError."""
        with pytest.raises(ValueError):
            coerce_point(item)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "lots"])
    def test_non_finite_or_non_numeric_values(self, value):
        """Non-finite or non-numeric values raise ValueError."""
        with pytest.raises(ValueError):
            coerce_series([("A", value)])

    def test_colored_series_fills_palette_colors(self):
        """Uncolored points take palette colors by position."""
        points = coerce_colored_series([("A", 1), ("B", 2, (1, 2, 3))])
        assert points[0].color == default_palette(2)[0]
        assert points[1].color == (1, 2, 3, 255)

    def test_colored_point_normalizes_color(self):
        """Colors are normalized to RGBA on construction."""
        assert ColoredDataPoint("A", 1, "#000000").color == (0, 0, 0, 255)


class TestMagnitudes:
    """Tests for magnitudes function."""

    def test_negative_values_clamped_with_warning(self, caplog):
        """Negative values become 0 and log a warning."""
        with caplog.at_level(logging.WARNING, logger="pychartcardsqt.models"):
            values = magnitudes(coerce_series([("A", -3), ("B", 4)]))
        assert values == [0.0, 4.0]
        assert "Negative value" in caplog.text


class TestDatasetSelection:
    """Tests for DatasetSelection."""

    def test_first_key_selected_by_default(self):
        """The first key is selected initially."""
        sel = DatasetSelection({"Gender": [("W", 1)], "Age": [("<30", 2)]})
        assert sel.selected == "Gender"
        assert sel.keys() == ["Gender", "Age"]
        assert len(sel) == 2

    def test_select_reports_change(self):
        """select() reports whether the selection changed."""
        sel = DatasetSelection({"a": [], "b": []})
        assert sel.select("b") is True
        assert sel.select("b") is False
        assert sel.selected == "b"

    def test_selected_series_is_same_object(self):
        """The selected series is the caller's object."""
        data = [("x", 1)]
        sel = DatasetSelection({"only": data})
        assert sel.selected_series() is data

    def test_unknown_key(self):
        """Unknown keys raise KeyError."""
        sel = DatasetSelection({"a": []})
        with pytest.raises(KeyError):
            sel.select("missing")

    def test_empty(self):
        """An empty selection has no key and an empty series."""
        sel = DatasetSelection()
        assert sel.selected == ""
        assert sel.selected_series() == ()


class TestStyles:
    """Tests for the style dataclasses."""

    def test_styles_are_frozen(self):
        """Styles cannot be mutated."""
        style = BarChartStyle()
        with pytest.raises(dataclasses.FrozenInstanceError):
            style.bar_height = 40  # type: ignore[misc]

    def test_default_timings(self):
        """Default timings match the documented durations."""
        assert BarChartStyle().duration_ms == 500
        assert BarChartStyle().stagger_ms == 50
        assert HorizontalBarChartStyle().bar_animation_ms == 1200
        assert LineChartStyle().scroll_delay_ms == 10

    def test_interval_pen_is_dashed(self, qtbot):
        """The interval pen is light gray and dashed."""
        pen = LineChartStyle().interval_pen()
        assert list(pen.dashPattern()) == [10.0, 15.0]
        assert pen.color().getRgb() == (211, 211, 211, 255)

    def test_grid_pen_solid_and_dashed(self, qtbot):
        """Guide pens are solid or dashed on request."""
        style = HorizontalBarChartStyle()
        assert list(style.grid_pen(solid=True).dashPattern()) == []
        assert list(style.grid_pen(solid=False).dashPattern()) == [10.0, 10.0]

    def test_donut_pen_has_round_caps(self, qtbot):
        """Donut arcs use round caps at the ring thickness."""
        from PySide6.QtCore import Qt

        pen = DonutChartStyle().arc_pen("#ff0000")
        assert pen.capStyle() == Qt.RoundCap
        assert pen.widthF() == 30.0

    def test_bar_brush_color(self, qtbot):
        """The bar brush uses the bar color."""
        assert BarChartStyle().to_brush().color().getRgb() == (103, 80, 164, 255)
