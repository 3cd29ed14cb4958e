from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

from graphon_plot.context import ChartContext
from graphon_plot.series import RGBA, Point
from graphon_plot.synchronizer import PointUpdate
from graphon_plot.transform import ChartTransform, Viewport


AxisName = Literal["x", "y"]
# Which point of the rendered text box sits on the anchor.
LabelAlign = Literal["top-center", "middle-right"]


@dataclass(frozen=True)
class AxisLine:
    axis: AxisName
    start: Point
    end: Point


@dataclass(frozen=True)
class TickMark:
    axis: AxisName
    value: Any
    start: Point
    end: Point


@dataclass(frozen=True)
class TickLabel:
    axis: AxisName
    value: Any
    text: str
    anchor: Point
    align: LabelAlign


@dataclass(frozen=True)
class SeriesPath:
    series_index: int
    name: str
    color: RGBA
    points: tuple[Point, ...]


@dataclass(frozen=True)
class MarkerPlacement:
    series_index: int
    entry_index: int
    point: Point
    size: float
    color: RGBA


@dataclass(frozen=True)
class ChartLayout:
    """Geometry of one layout pass, ready for a rendering collaborator.

    `paths` run in reverse registration order and `markers` bottom-to-top, so
    the first registered series ends up drawn on top.
    """

    viewport: Viewport
    context: ChartContext
    transform: ChartTransform
    x_axis: AxisLine
    y_axis: AxisLine
    ticks: tuple[TickMark, ...]
    labels: tuple[TickLabel, ...]
    paths: tuple[SeriesPath, ...]
    markers: tuple[MarkerPlacement, ...]
    updates: tuple[PointUpdate, ...]

    def ticks_for(self, axis: AxisName) -> tuple[TickMark, ...]:
        return tuple(t for t in self.ticks if t.axis == axis)

    def labels_for(self, axis: AxisName) -> tuple[TickLabel, ...]:
        return tuple(lbl for lbl in self.labels if lbl.axis == axis)


class ChartRenderer(Protocol):
    def render(self, layout: ChartLayout) -> None:
        ...
