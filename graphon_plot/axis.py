from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Generic, Hashable, Protocol, Sequence, TypeVar

import numpy as np

from graphon_plot.config import DEFAULT_TICK_TARGET
from graphon_plot.errors import InvalidConfigurationError, PlotDataError
from graphon_plot.scales import format_tick, generate_nice_ticks, nice_step, tick_step


T = TypeVar("T")
Tx = TypeVar("Tx")
Ty = TypeVar("Ty")

_POLICY_METHODS = (
    "prepare",
    "cross_coordinate",
    "tick_count",
    "value_at",
    "coordinate_of",
    "should_draw_tick",
    "should_draw_label",
    "label_text",
)


@dataclass(frozen=True)
class AxisBounds:
    vmin: float
    vmax: float

    @property
    def span(self) -> float:
        return self.vmax - self.vmin

    def contains(self, value: float) -> bool:
        return self.vmin <= value <= self.vmax


class AxisPolicy(Protocol[T]):
    """Tick enumeration, coordinate mapping and label decisions for one axis.

    `prepare` is called once per layout pass before any other query, with the
    axis' data-space bounds and its length in pixels. `cross_coordinate` is
    where the perpendicular axis line crosses this axis.
    """

    def prepare(self, bounds: AxisBounds, plot_extent: float) -> None:
        ...

    def cross_coordinate(self) -> float:
        ...

    def tick_count(self) -> int:
        ...

    def value_at(self, index: int) -> T:
        ...

    def coordinate_of(self, value: T) -> float:
        ...

    def should_draw_tick(self, value: T) -> bool:
        ...

    def should_draw_label(self, value: T) -> bool:
        ...

    def label_text(self, value: T) -> str:
        ...


class NumericAxisPolicy:
    """Default policy: nice-step ticks, identity mapping, origin suppression.

    The tick/label at 0 is hidden while 0 lies inside the axis bounds, since
    the perpendicular axis line already marks that position. With
    `pixels_per_tick` set, the tick target follows the plot extent instead of
    staying fixed.
    """

    def __init__(
        self,
        target_ticks: int = DEFAULT_TICK_TARGET,
        *,
        tick_step: float | None = None,
        pixels_per_tick: float | None = None,
    ) -> None:
        if target_ticks <= 0:
            raise InvalidConfigurationError("target_ticks must be > 0")
        if tick_step is not None and tick_step <= 0:
            raise InvalidConfigurationError("tick_step must be > 0")
        if pixels_per_tick is not None and pixels_per_tick <= 0:
            raise InvalidConfigurationError("pixels_per_tick must be > 0")
        self.target_ticks = target_ticks
        self.tick_step = tick_step
        self.pixels_per_tick = pixels_per_tick
        self._bounds: AxisBounds | None = None
        self._ticks = np.empty(0, dtype=np.float64)
        self._step: float | None = None

    def prepare(self, bounds: AxisBounds, plot_extent: float) -> None:
        target = self.target_ticks
        if self.pixels_per_tick is not None:
            target = max(2, int(plot_extent // self.pixels_per_tick))
        self._bounds = bounds
        self._ticks = generate_nice_ticks(bounds.vmin, bounds.vmax, target, step=self.tick_step)
        self._step = tick_step(self._ticks) or self.tick_step

    def cross_coordinate(self) -> float:
        return 0.0

    def tick_count(self) -> int:
        return int(self._ticks.size)

    def value_at(self, index: int) -> float:
        return float(self._ticks[index])

    def coordinate_of(self, value: float) -> float:
        return float(value)

    def should_draw_tick(self, value: float) -> bool:
        return not self._at_origin(value)

    def should_draw_label(self, value: float) -> bool:
        return not self._at_origin(value)

    def label_text(self, value: float) -> str:
        return format_tick(float(value), step=self._step)

    def _at_origin(self, value: float) -> bool:
        bounds = self._bounds
        if bounds is None or not bounds.contains(0.0):
            return False
        atol = self._step * 1e-9 if self._step else 1e-12
        return abs(float(value)) <= atol


# Calendar-friendly steps in seconds, from one second to one year. Longer
# spans step in nice multiples of a 365-day year.
DATE_STEPS_S = (
    1, 2, 5, 10, 15, 30,
    60, 120, 300, 600, 900, 1800,
    3600, 7200, 10800, 21600, 43200,
    86400, 172800, 604800, 1209600, 2592000, 7776000, 15552000, 31536000,
)


class DateAxisPolicy:
    """`datetime` axis; coordinates are POSIX seconds.

    Naive datetimes are read in `tz`. The tick under the perpendicular axis
    line is hidden but its label is kept, because the Y axis is placed at the
    left edge of the data rather than at the epoch.
    """

    def __init__(
        self,
        target_ticks: int = DEFAULT_TICK_TARGET,
        *,
        tz: tzinfo = timezone.utc,
        label_format: str | None = None,
    ) -> None:
        if target_ticks <= 0:
            raise InvalidConfigurationError("target_ticks must be > 0")
        self.target_ticks = target_ticks
        self.tz = tz
        self.label_format = label_format
        self._bounds: AxisBounds | None = None
        self._ticks: list[float] = []
        self._step: float = 86400.0

    def prepare(self, bounds: AxisBounds, plot_extent: float) -> None:
        self._bounds = bounds
        if bounds.span <= 0:
            self._ticks = [bounds.vmin]
            return
        self._step = _nearest_date_step(bounds.span / self.target_ticks)
        first = int(np.ceil(bounds.vmin / self._step - 1e-9))
        last = int(np.floor(bounds.vmax / self._step + 1e-9))
        self._ticks = [float(i * self._step) for i in range(first, last + 1)]

    def cross_coordinate(self) -> float:
        return self._bounds.vmin if self._bounds is not None else 0.0

    def tick_count(self) -> int:
        return len(self._ticks)

    def value_at(self, index: int) -> datetime:
        return datetime.fromtimestamp(self._ticks[index], tz=self.tz)

    def coordinate_of(self, value: datetime) -> float:
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.tz)
        return value.timestamp()

    def should_draw_tick(self, value: datetime) -> bool:
        return self.coordinate_of(value) != self.cross_coordinate()

    def should_draw_label(self, value: datetime) -> bool:
        return True

    def label_text(self, value: datetime) -> str:
        fmt = self.label_format
        if fmt is None:
            if self._step < 60:
                fmt = "%H:%M:%S"
            elif self._step < 86400:
                fmt = "%H:%M"
            else:
                fmt = "%Y-%m-%d"
        return value.astimezone(self.tz).strftime(fmt)


YEAR_S = DATE_STEPS_S[-1]


def _nearest_date_step(ideal: float) -> float:
    if ideal > YEAR_S:
        return max(1.0, nice_step(ideal / YEAR_S, 1)) * YEAR_S
    best = DATE_STEPS_S[0]
    for step in DATE_STEPS_S[1:]:
        if abs(step - ideal) <= abs(best - ideal):
            best = step
    return float(best)


class CategoryAxisPolicy:
    """Ordered categorical axis: one tick per category at its index."""

    def __init__(self, categories: Sequence[Hashable]) -> None:
        if categories is None:
            raise InvalidConfigurationError("categories are required")
        self.categories = tuple(categories)
        self._index = {category: i for i, category in enumerate(self.categories)}
        if len(self._index) != len(self.categories):
            raise InvalidConfigurationError("categories must be unique")
        self._visible: list[int] = []
        self._cross = 0.0

    def prepare(self, bounds: AxisBounds, plot_extent: float) -> None:
        self._cross = bounds.vmin
        self._visible = [i for i in range(len(self.categories)) if bounds.contains(float(i))]

    def cross_coordinate(self) -> float:
        return self._cross

    def tick_count(self) -> int:
        return len(self._visible)

    def value_at(self, index: int) -> Hashable:
        return self.categories[self._visible[index]]

    def coordinate_of(self, value: Hashable) -> float:
        try:
            return float(self._index[value])
        except KeyError:
            raise PlotDataError(f"unknown category: {value!r}") from None

    def should_draw_tick(self, value: Hashable) -> bool:
        return self.coordinate_of(value) != self._cross

    def should_draw_label(self, value: Hashable) -> bool:
        return True

    def label_text(self, value: Hashable) -> str:
        return str(value)


@dataclass(frozen=True)
class ChartAxes(Generic[Tx, Ty]):
    x: AxisPolicy[Tx]
    y: AxisPolicy[Ty]

    def __post_init__(self) -> None:
        for name in ("x", "y"):
            policy = getattr(self, name)
            if policy is None:
                raise InvalidConfigurationError(f"{name} axis policy is required")
            missing = [m for m in _POLICY_METHODS if not callable(getattr(policy, m, None))]
            if missing:
                raise InvalidConfigurationError(f"{name} axis policy is missing: {', '.join(missing)}")

    @classmethod
    def numeric(
        cls,
        x_target: int = DEFAULT_TICK_TARGET,
        y_target: int = DEFAULT_TICK_TARGET,
    ) -> "ChartAxes[float, float]":
        return cls(x=NumericAxisPolicy(x_target), y=NumericAxisPolicy(y_target))
