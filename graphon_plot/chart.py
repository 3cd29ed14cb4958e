from __future__ import annotations

from enum import Enum
import logging
import math
from typing import Generic, TypeVar

from graphon_plot.axis import AxisBounds, AxisPolicy, ChartAxes
from graphon_plot.config import ChartConfig
from graphon_plot.context import ChartContext
from graphon_plot.errors import ChartStateError, InvalidConfigurationError
from graphon_plot.layout import (
    AxisLine,
    AxisName,
    ChartLayout,
    ChartRenderer,
    MarkerPlacement,
    SeriesPath,
    TickLabel,
    TickMark,
)
from graphon_plot.series import ChartDataSource, DataPointView, LineData
from graphon_plot.synchronizer import PointArena, PointSynchronizer
from graphon_plot.transform import ChartTransform, Viewport, translate

LOGGER = logging.getLogger(__name__)

Tx = TypeVar("Tx")
Ty = TypeVar("Ty")


class ChartState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class LineChart(Generic[Tx, Ty]):
    """Line chart layout engine.

    Data is pulled from `data_source` on the first `attach_viewport` call and
    again on every `reload`; each layout pass rebuilds the transform from the
    current bounds and viewport, emits axis geometry and moves point views.
    Not thread-safe: callers serialise passes per chart.
    """

    def __init__(
        self,
        data_source: ChartDataSource,
        axes: ChartAxes[Tx, Ty] | None = None,
        *,
        config: ChartConfig | None = None,
        renderer: ChartRenderer | None = None,
    ) -> None:
        if data_source is None or not callable(getattr(data_source, "get_series", None)):
            raise InvalidConfigurationError("a data source with get_series() is required")
        self._config = config if config is not None else ChartConfig()
        if axes is None:
            axes = ChartAxes.numeric(self._config.x_tick_target, self._config.y_tick_target)
        elif not isinstance(axes, ChartAxes):
            raise InvalidConfigurationError("axes must be a ChartAxes instance")
        self._data_source = data_source
        self._axes = axes
        self._renderer = renderer
        self._synchronizer = PointSynchronizer(self._config.point_size)
        self._state = ChartState.UNINITIALIZED
        self._viewport: Viewport | None = None
        self._arena: PointArena | None = None
        self._context: ChartContext | None = None
        self._load_count = 0

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def axes(self) -> ChartAxes[Tx, Ty]:
        return self._axes

    @property
    def context(self) -> ChartContext | None:
        return self._context

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    @property
    def load_count(self) -> int:
        return self._load_count

    @property
    def lines(self) -> list[LineData]:
        return list(self._arena.lines) if self._arena is not None else []

    @property
    def point_views(self) -> list[DataPointView]:
        return list(self._arena.views) if self._arena is not None else []

    def attach_viewport(self, width: float, height: float) -> ChartLayout:
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            raise InvalidConfigurationError("viewport width and height must be finite and > 0")
        margin = self._config.edge_margin
        if width < 2 * margin or height < 2 * margin:
            LOGGER.warning("viewport %sx%s is smaller than twice the edge margin (%s); plot area collapses", width, height, margin)
        self._viewport = Viewport(width=float(width), height=float(height), edge_margin=margin)
        if self._state is ChartState.UNINITIALIZED:
            self._load()
        return self.layout()

    def reload(self) -> ChartLayout | None:
        self._load()
        if self._viewport is None:
            return None
        return self.layout()

    def layout(self) -> ChartLayout:
        if self._viewport is None:
            raise ChartStateError("attach a viewport before running a layout pass")
        if self._state is ChartState.UNINITIALIZED:
            self._load()
        assert self._arena is not None and self._context is not None

        viewport = self._viewport
        context = self._context
        arena = self._arena
        transform = ChartTransform.build(context, viewport)

        x_policy = self._axes.x
        y_policy = self._axes.y
        x_policy.prepare(AxisBounds(context.x_min, context.x_max), viewport.plot_width)
        y_policy.prepare(AxisBounds(context.y_min, context.y_max), viewport.plot_height)
        x_cross = x_policy.cross_coordinate()
        y_cross = y_policy.cross_coordinate()

        x_axis = AxisLine("x", transform.apply(context.x_min, y_cross), transform.apply(context.x_max, y_cross))
        y_axis = AxisLine("y", transform.apply(x_cross, context.y_min), transform.apply(x_cross, context.y_max))

        ticks: list[TickMark] = []
        labels: list[TickLabel] = []
        self._collect_axis("x", x_policy, y_cross, transform, ticks, labels)
        self._collect_axis("y", y_policy, x_cross, transform, ticks, labels)

        updates = self._synchronizer.synchronize(transform, arena)

        paths = []
        for series_index in range(len(arena.lines) - 1, -1, -1):
            line = arena.lines[series_index]
            px, py = transform.apply_many(*arena.series_coordinates(series_index))
            points = tuple(zip(px.tolist(), py.tolist()))
            paths.append(SeriesPath(series_index=series_index, name=line.name, color=line.color, points=points))

        markers = []
        for flat_index, view in arena.layered_views():
            series_index, entry_index = arena.owner(flat_index)
            assert view.point is not None
            markers.append(
                MarkerPlacement(
                    series_index=series_index,
                    entry_index=entry_index,
                    point=view.point,
                    size=view.size,
                    color=view.color,
                )
            )

        result = ChartLayout(
            viewport=viewport,
            context=context,
            transform=transform,
            x_axis=x_axis,
            y_axis=y_axis,
            ticks=tuple(ticks),
            labels=tuple(labels),
            paths=tuple(paths),
            markers=tuple(markers),
            updates=tuple(updates),
        )
        LOGGER.debug(
            "layout pass %sx%s: %d ticks, %d labels, %d/%d points moved",
            viewport.width,
            viewport.height,
            len(ticks),
            len(labels),
            len(updates),
            len(arena),
        )
        if self._renderer is not None:
            self._renderer.render(result)
        return result

    def _collect_axis(
        self,
        axis: AxisName,
        policy: AxisPolicy,
        cross: float,
        transform: ChartTransform,
        ticks: list[TickMark],
        labels: list[TickLabel],
    ) -> None:
        half = self._config.tick_size / 2.0
        gap = half + self._config.label_gap
        for i in range(policy.tick_count()):
            value = policy.value_at(i)
            coordinate = policy.coordinate_of(value)
            if axis == "x":
                anchor = transform.apply(coordinate, cross)
                tick_start, tick_end = translate(anchor, 0.0, -half), translate(anchor, 0.0, half)
                label_anchor, align = translate(anchor, 0.0, gap), "top-center"
            else:
                anchor = transform.apply(cross, coordinate)
                tick_start, tick_end = translate(anchor, -half, 0.0), translate(anchor, half, 0.0)
                label_anchor, align = translate(anchor, -gap, 0.0), "middle-right"
            if policy.should_draw_tick(value):
                ticks.append(TickMark(axis=axis, value=value, start=tick_start, end=tick_end))
            if policy.should_draw_label(value):
                labels.append(
                    TickLabel(axis=axis, value=value, text=policy.label_text(value), anchor=label_anchor, align=align)
                )

    def _load(self) -> None:
        lines = list(self._data_source.get_series() or ())
        arena = PointArena(
            lines,
            point_size=self._config.point_size,
            x_coordinate=self._axes.x.coordinate_of,
            y_coordinate=self._axes.y.coordinate_of,
        )
        context = ChartContext.from_coordinates(arena.xs, arena.ys)
        # Swap both together; a failed load leaves the previous data in place.
        self._arena = arena
        self._context = context
        self._state = ChartState.LOADED
        self._load_count += 1
        LOGGER.debug(
            "loaded %d series (%d entries); bounds x=[%s, %s] y=[%s, %s]",
            len(lines),
            len(arena),
            context.x_min,
            context.x_max,
            context.y_min,
            context.y_max,
        )
