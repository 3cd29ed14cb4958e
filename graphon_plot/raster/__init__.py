from .canvas import fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment
from .draw_markers import draw_marker
from .draw_text import draw_text, text_size
from .renderer import RasterRenderer

__all__ = [
    "RasterRenderer",
    "draw_marker",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "text_size",
]
