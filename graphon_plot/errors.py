from __future__ import annotations


class ChartError(Exception):
    """Base class for chart layout errors."""


class InvalidConfigurationError(ChartError, ValueError):
    pass


class ChartStateError(ChartError, RuntimeError):
    pass


class PlotDataError(ChartError, ValueError):
    pass
