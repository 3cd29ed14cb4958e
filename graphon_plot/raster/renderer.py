from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from graphon_plot.config import ChartConfig
from graphon_plot.errors import ChartStateError
from graphon_plot.layout import ChartLayout, TickLabel
from graphon_plot.raster.canvas import new_canvas
from graphon_plot.raster.draw_lines import draw_polyline, draw_segment
from graphon_plot.raster.draw_markers import draw_marker
from graphon_plot.raster.draw_text import DEFAULT_FONT_SIZE_PX, draw_text, text_size

LOGGER = logging.getLogger(__name__)


class RasterRenderer:
    """Paints a `ChartLayout` onto an RGBA numpy canvas.

    Draw order: axis lines and ticks, labels, series strokes in the order the
    layout lists them, then markers bottom-to-top.
    """

    def __init__(self, config: ChartConfig | None = None, *, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> None:
        self.config = config if config is not None else ChartConfig()
        self.font_size_px = font_size_px
        self._canvas: np.ndarray | None = None

    @property
    def canvas(self) -> np.ndarray | None:
        return self._canvas

    def render(self, layout: ChartLayout) -> None:
        cfg = self.config
        width = max(1, int(round(layout.viewport.width)))
        height = max(1, int(round(layout.viewport.height)))
        canvas = new_canvas(width, height, color=cfg.background)

        for axis_line in (layout.x_axis, layout.y_axis):
            draw_segment(canvas, axis_line.start, axis_line.end, cfg.axis_color)
        for tick in layout.ticks:
            draw_segment(canvas, tick.start, tick.end, cfg.axis_color)
        for label in layout.labels:
            x, y = self._label_origin(label)
            draw_text(canvas, x, y, label.text, cfg.label_color, font_size_px=self.font_size_px)

        for path in layout.paths:
            draw_polyline(canvas, path.points, path.color)
        for marker in layout.markers:
            draw_marker(canvas, marker.point, marker.size, marker.color)

        self._canvas = canvas
        LOGGER.debug("rasterised %dx%d chart (%d paths, %d markers)", width, height, len(layout.paths), len(layout.markers))

    def save_png(self, path: str | Path) -> Path:
        if self._canvas is None:
            raise ChartStateError("nothing rendered yet")
        out = Path(path)
        Image.fromarray(self._canvas).save(out)
        return out

    def _label_origin(self, label: TickLabel) -> tuple[int, int]:
        w, h = text_size(label.text, font_size_px=self.font_size_px)
        ax, ay = label.anchor
        if label.align == "top-center":
            return int(round(ax - w / 2.0)), int(round(ay))
        return int(round(ax - w)), int(round(ay - h / 2.0))
