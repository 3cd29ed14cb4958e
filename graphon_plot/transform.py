from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from graphon_plot.context import ChartContext
from graphon_plot.series import Point


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    edge_margin: float

    @property
    def plot_width(self) -> float:
        return max(0.0, self.width - 2.0 * self.edge_margin)

    @property
    def plot_height(self) -> float:
        return max(0.0, self.height - 2.0 * self.edge_margin)


@dataclass(frozen=True)
class ChartTransform:
    """Affine data-space to pixel-space map; Y grows downward in pixels.

    A zero domain (or range) collapses that axis to zero scale anchored at the
    left (or bottom) plot edge, so degenerate charts place every point at the
    bottom-left plot corner instead of dividing by zero.
    """

    x_scale: float
    y_scale: float
    x_offset: float
    y_offset: float

    @classmethod
    def build(cls, context: ChartContext, viewport: Viewport) -> "ChartTransform":
        margin = viewport.edge_margin
        plot_w = viewport.plot_width
        plot_h = viewport.plot_height

        if context.domain > 0:
            x_scale = plot_w / context.domain
            x_offset = margin - context.x_min * x_scale
        else:
            x_scale = 0.0
            x_offset = margin

        if context.range > 0:
            y_scale = -plot_h / context.range
            y_offset = margin + plot_h - context.y_min * y_scale
        else:
            y_scale = 0.0
            y_offset = margin + plot_h

        return cls(x_scale=x_scale, y_scale=y_scale, x_offset=x_offset, y_offset=y_offset)

    def apply(self, x: float, y: float) -> Point:
        return (x * self.x_scale + self.x_offset, y * self.y_scale + self.y_offset)

    def apply_many(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        px = np.asarray(xs, dtype=np.float64) * self.x_scale + self.x_offset
        py = np.asarray(ys, dtype=np.float64) * self.y_scale + self.y_offset
        return px, py


def translate(point: Point, dx: float, dy: float) -> Point:
    return (point[0] + dx, point[1] + dy)
