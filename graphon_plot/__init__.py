from graphon_plot.adapters import series_from_xy
from graphon_plot.axis import (
    AxisBounds,
    AxisPolicy,
    CategoryAxisPolicy,
    ChartAxes,
    DateAxisPolicy,
    NumericAxisPolicy,
)
from graphon_plot.chart import ChartState, LineChart
from graphon_plot.config import ChartConfig, load_chart_config
from graphon_plot.context import ChartContext
from graphon_plot.errors import ChartError, ChartStateError, InvalidConfigurationError, PlotDataError
from graphon_plot.layout import ChartLayout, ChartRenderer
from graphon_plot.series import ChartDataSource, ChartEntry, DataPointView, LineData, StaticChartDataSource
from graphon_plot.synchronizer import PointArena, PointSynchronizer, PointUpdate
from graphon_plot.transform import ChartTransform, Viewport

__all__ = [
    "AxisBounds",
    "AxisPolicy",
    "CategoryAxisPolicy",
    "ChartAxes",
    "ChartConfig",
    "ChartContext",
    "ChartDataSource",
    "ChartEntry",
    "ChartError",
    "ChartLayout",
    "ChartRenderer",
    "ChartState",
    "ChartStateError",
    "ChartTransform",
    "DataPointView",
    "DateAxisPolicy",
    "InvalidConfigurationError",
    "LineChart",
    "LineData",
    "NumericAxisPolicy",
    "PlotDataError",
    "PointArena",
    "PointSynchronizer",
    "PointUpdate",
    "StaticChartDataSource",
    "Viewport",
    "load_chart_config",
    "series_from_xy",
]
