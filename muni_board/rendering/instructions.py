"""Draw instructions produced by the board layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Point = tuple[float, float]
Box = tuple[float, float, float, float]  # left, top, right, bottom

ALIGN_LEFT = "left"
ALIGN_RIGHT = "right"
ALIGN_CENTER = "center"

BLACK = 0
WHITE = 255
BUBBLE_GRAY = 204


@dataclass(frozen=True)
class FillRect:
    box: Box
    fill: int


@dataclass(frozen=True)
class FillRoundedRect:
    box: Box
    radius: float
    fill: int


@dataclass(frozen=True)
class DrawLine:
    start: Point
    end: Point
    fill: int = BLACK


@dataclass(frozen=True)
class DrawText:
    """Text run positioned by its baseline anchor point."""

    text: str
    origin: Point
    align: str = ALIGN_LEFT
    fill: int = BLACK


Instruction = Union[FillRect, FillRoundedRect, DrawLine, DrawText]


__all__ = [
    "ALIGN_CENTER",
    "ALIGN_LEFT",
    "ALIGN_RIGHT",
    "BLACK",
    "BUBBLE_GRAY",
    "WHITE",
    "Box",
    "DrawLine",
    "DrawText",
    "FillRect",
    "FillRoundedRect",
    "Instruction",
    "Point",
]
