"""Drawing surfaces the board renderer paints onto."""

from __future__ import annotations

from typing import Protocol

from PIL import Image, ImageDraw, ImageFont

from muni_board.rendering.instructions import (
    ALIGN_CENTER,
    ALIGN_LEFT,
    ALIGN_RIGHT,
    WHITE,
    Box,
    Point,
)

# Pillow anchors: horizontal alignment + "s" for the text baseline.
_ANCHORS = {
    ALIGN_LEFT: "ls",
    ALIGN_RIGHT: "rs",
    ALIGN_CENTER: "ms",
}


class RenderError(Exception):
    """Raised when a surface, font or encoder cannot be set up or used."""


class DrawingSurface(Protocol):
    def fill_rect(self, box: Box, fill: int) -> None: ...

    def fill_rounded_rect(self, box: Box, radius: float, fill: int) -> None: ...

    def draw_line(self, start: Point, end: Point, fill: int) -> None: ...

    def measure_text(self, text: str, origin: Point) -> Box: ...

    def draw_text(self, text: str, origin: Point, align: str, fill: int) -> None: ...


def _anchor(align: str) -> str:
    try:
        return _ANCHORS[align]
    except KeyError as exc:
        raise ValueError(f"Unknown text alignment: {align!r}") from exc


def load_font(font_path: str | None, font_size: int) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, or Pillow's bundled font when no path is given."""
    try:
        if font_path is None:
            return ImageFont.load_default(size=font_size)
        return ImageFont.truetype(font_path, font_size)
    except (OSError, ValueError) as exc:
        raise RenderError(f"Failed to load font {font_path or '<default>'}: {exc}") from exc


class PillowSurface:
    """Grayscale Pillow canvas implementing DrawingSurface."""

    def __init__(
        self,
        width: int,
        height: int,
        font: ImageFont.FreeTypeFont,
        background: int = WHITE,
    ) -> None:
        try:
            self._image = Image.new("L", (width, height), background)
        except (ValueError, MemoryError) as exc:
            raise RenderError(f"Failed to create {width}x{height} surface: {exc}") from exc
        self._draw = ImageDraw.Draw(self._image)
        self._font = font

    @classmethod
    def create(cls, width: int, height: int, font_path: str | None, font_size: int) -> PillowSurface:
        return cls(width, height, load_font(font_path, font_size))

    @property
    def image(self) -> Image.Image:
        return self._image

    def fill_rect(self, box: Box, fill: int) -> None:
        self._draw.rectangle(box, fill=fill)

    def fill_rounded_rect(self, box: Box, radius: float, fill: int) -> None:
        self._draw.rounded_rectangle(box, radius=radius, fill=fill)

    def draw_line(self, start: Point, end: Point, fill: int) -> None:
        self._draw.line((start, end), fill=fill, width=1)

    def measure_text(self, text: str, origin: Point) -> Box:
        """Bounding box of left-aligned text with its baseline at origin."""
        return tuple(self._draw.textbbox(origin, text, font=self._font, anchor=_anchor(ALIGN_LEFT)))

    def draw_text(self, text: str, origin: Point, align: str, fill: int) -> None:
        self._draw.text(origin, text, font=self._font, fill=fill, anchor=_anchor(align))


__all__ = ["DrawingSurface", "PillowSurface", "RenderError", "load_font"]
