"""Paint board layouts onto a drawing surface."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from PIL import Image

from muni_board.config import DisplayConfig
from muni_board.logic.models import Board
from muni_board.rendering.instructions import (
    DrawLine,
    DrawText,
    FillRect,
    FillRoundedRect,
    Instruction,
)
from muni_board.rendering.layout import layout_board
from muni_board.rendering.surface import DrawingSurface, PillowSurface


def paint(instructions: Iterable[Instruction], surface: DrawingSurface) -> None:
    """Issue each instruction against the surface, in order."""
    for instruction in instructions:
        if isinstance(instruction, FillRect):
            surface.fill_rect(instruction.box, instruction.fill)
        elif isinstance(instruction, FillRoundedRect):
            surface.fill_rounded_rect(instruction.box, instruction.radius, instruction.fill)
        elif isinstance(instruction, DrawLine):
            surface.draw_line(instruction.start, instruction.end, instruction.fill)
        elif isinstance(instruction, DrawText):
            surface.draw_text(instruction.text, instruction.origin, instruction.align, instruction.fill)
        else:
            raise TypeError(f"Unsupported draw instruction: {instruction!r}")


def render_board(
    board: Board,
    now: datetime,
    display: DisplayConfig | None = None,
    title_prefix: str = "",
) -> Image.Image:
    """Render the board to a grayscale image of the configured size."""
    display = display or DisplayConfig()
    surface = PillowSurface.create(
        display.width, display.height, display.font_path, display.font_size
    )
    instructions = layout_board(
        board,
        now,
        surface.measure_text,
        width=display.width,
        height=display.height,
        title_prefix=title_prefix,
    )
    paint(instructions, surface)
    return surface.image


__all__ = ["paint", "render_board"]
