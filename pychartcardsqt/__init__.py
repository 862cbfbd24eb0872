from .card import (
    ChartCard,
    bar_chart_card,
    line_chart_card,
    pie_chart_card,
    donut_chart_card,
)
from .bar_chart import BarChart
from .horizontal_bar_chart import HorizontalBarChart, BarState
from .line_chart import LineChart
from .pie_chart import PieChart, PieChartCard
from .donut_chart import DonutChart
from .models import (
    DataPoint,
    ColoredDataPoint,
    Arc,
    AxisPlan,
    ExtentPlan,
    DatasetSelection,
    to_rgba,
    default_palette,
    # Styles
    CardStyle,
    BarChartStyle,
    HorizontalBarChartStyle,
    LineChartStyle,
    PieChartStyle,
    DonutChartStyle,
)
from .geometry import (
    Path,
    PathCommand,
    partition,
    pie_wedges,
    percentages,
    plan_axis,
    plan_extent,
    point_positions,
    gridline_offsets,
    bar_fraction,
    build_path,
    build_fill_path,
)
from .animation import (
    AnimationPhase,
    ProgressAnimation,
    StaggeredAnimation,
    ValueTween,
    ColorTween,
    FrameTicker,
    FAST_OUT_SLOW_IN,
    LINEAR,
    bezier_easing,
)
from .utils import normalize

__all__ = [
    # Cards
    "ChartCard",
    "bar_chart_card",
    "line_chart_card",
    "pie_chart_card",
    "donut_chart_card",
    # Chart widgets
    "BarChart",
    "HorizontalBarChart",
    "BarState",
    "LineChart",
    "PieChart",
    "PieChartCard",
    "DonutChart",
    # Data + styles
    "DataPoint",
    "ColoredDataPoint",
    "Arc",
    "AxisPlan",
    "ExtentPlan",
    "DatasetSelection",
    "to_rgba",
    "default_palette",
    "CardStyle",
    "BarChartStyle",
    "HorizontalBarChartStyle",
    "LineChartStyle",
    "PieChartStyle",
    "DonutChartStyle",
    # Geometry
    "Path",
    "PathCommand",
    "partition",
    "pie_wedges",
    "percentages",
    "plan_axis",
    "plan_extent",
    "point_positions",
    "gridline_offsets",
    "bar_fraction",
    "build_path",
    "build_fill_path",
    # Animation
    "AnimationPhase",
    "ProgressAnimation",
    "StaggeredAnimation",
    "ValueTween",
    "ColorTween",
    "FrameTicker",
    "FAST_OUT_SLOW_IN",
    "LINEAR",
    "bezier_easing",
    "normalize",
]
