from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable

import numpy as np

from graphon_plot.series import ChartEntry


CoordinateFn = Callable[[Any], float]


@dataclass(frozen=True)
class ChartContext:
    """Data-space bounds across every entry of every loaded series."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def domain(self) -> float:
        return self.x_max - self.x_min

    @property
    def range(self) -> float:
        return self.y_max - self.y_min

    @property
    def is_degenerate(self) -> bool:
        return self.domain == 0.0 and self.range == 0.0

    @classmethod
    def create(
        cls,
        entries: Iterable[ChartEntry],
        *,
        x_coordinate: CoordinateFn | None = None,
        y_coordinate: CoordinateFn | None = None,
    ) -> "ChartContext":
        xs, ys = entry_coordinates(entries, x_coordinate=x_coordinate, y_coordinate=y_coordinate)
        return cls.from_coordinates(xs, ys)

    @classmethod
    def from_coordinates(cls, xs: np.ndarray, ys: np.ndarray) -> "ChartContext":
        if xs.size == 0:
            # Axis-only chart anchored at the origin.
            return cls(x_min=0.0, x_max=0.0, y_min=0.0, y_max=0.0)
        return cls(
            x_min=float(np.min(xs)),
            x_max=float(np.max(xs)),
            y_min=float(np.min(ys)),
            y_max=float(np.max(ys)),
        )


def entry_coordinates(
    entries: Iterable[ChartEntry],
    *,
    x_coordinate: CoordinateFn | None = None,
    y_coordinate: CoordinateFn | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    to_x = x_coordinate or float
    to_y = y_coordinate or float
    items = list(entries)
    xs = np.fromiter((to_x(e.x) for e in items), dtype=np.float64, count=len(items))
    ys = np.fromiter((to_y(e.y) for e in items), dtype=np.float64, count=len(items))
    return xs, ys
