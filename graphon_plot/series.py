from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, Sequence, TypeVar


Tx = TypeVar("Tx")
Ty = TypeVar("Ty")

RGBA = tuple[int, int, int, int]
Point = tuple[float, float]

DEFAULT_LINE_COLOR: RGBA = (62, 149, 255, 255)


@dataclass(frozen=True)
class ChartEntry(Generic[Tx, Ty]):
    x: Tx
    y: Ty


@dataclass(frozen=True)
class LineData:
    name: str
    entries: tuple[ChartEntry, ...]
    color: RGBA = DEFAULT_LINE_COLOR

    @classmethod
    def from_pairs(cls, name: str, pairs: Sequence[tuple[object, object]], color: RGBA = DEFAULT_LINE_COLOR) -> "LineData":
        return cls(name=name, entries=tuple(ChartEntry(x, y) for x, y in pairs), color=color)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class DataPointView:
    """Per-entry marker; the layout engine only ever moves `point`."""

    size: float
    color: RGBA
    point: Point | None = None


class ChartDataSource(Protocol):
    def get_series(self) -> Sequence[LineData] | None:
        ...


class StaticChartDataSource:
    """Serves a fixed set of series, e.g. for charts built from literals."""

    def __init__(self, *lines: LineData) -> None:
        self._lines = tuple(lines)

    def get_series(self) -> Sequence[LineData]:
        return self._lines
