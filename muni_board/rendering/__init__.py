"""Layout and rendering of the arrivals board."""

from muni_board.rendering.encoder import encode_png, save_frame
from muni_board.rendering.layout import layout_board
from muni_board.rendering.renderer import paint, render_board
from muni_board.rendering.surface import PillowSurface, RenderError

__all__ = [
    "PillowSurface",
    "RenderError",
    "encode_png",
    "layout_board",
    "paint",
    "render_board",
    "save_frame",
]
