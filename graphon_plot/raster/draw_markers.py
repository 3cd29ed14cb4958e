from __future__ import annotations

import numpy as np

from graphon_plot.raster.canvas import fill_rect
from graphon_plot.series import RGBA, Point


def draw_marker(dst: np.ndarray, origin: Point, size: float, color: RGBA) -> None:
    """Fill a square marker whose top-left corner sits at `origin`."""
    x0 = int(round(origin[0]))
    y0 = int(round(origin[1]))
    extent = max(1, int(round(size)))
    fill_rect(dst, x0, y0, x0 + extent - 1, y0 + extent - 1, color)
