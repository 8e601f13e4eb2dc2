"""Fixed-geometry layout of the two-column arrivals board."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging

from muni_board.logic.countdown import format_countdown
from muni_board.logic.models import ArrivalGroup, Board, DirectionColumn
from muni_board.rendering.instructions import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    BUBBLE_GRAY,
    Box,
    DrawLine,
    DrawText,
    FillRect,
    FillRoundedRect,
    Instruction,
    Point,
)

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 1024
CANVAS_HEIGHT = 758

HEADER_HEIGHT = 30
HEADER_TITLE_BASELINE = 23

ROW_HEIGHT = 40
ROW_BASELINE_OFFSET = 30

BADGE_LEFT_MARGIN = 20
BADGE_PADDING = 8
DESTINATION_GAP = 15
COUNTDOWN_RIGHT_MARGIN = 20
ROW_DIVIDER_INSET = 10

TextMeasurer = Callable[[str, Point], Box]


def row_top(index: int) -> int:
    """Top edge of row ``index`` within a column."""
    return HEADER_HEIGHT + index * ROW_HEIGHT


def max_rows(height: int = CANVAS_HEIGHT) -> int:
    """Number of rows that fit below the header."""
    return max((height - HEADER_HEIGHT) // ROW_HEIGHT, 0)


def badge_box(text_bounds: Box) -> Box:
    left, top, right, bottom = text_bounds
    return (
        left - BADGE_PADDING,
        top - BADGE_PADDING,
        right + BADGE_PADDING,
        bottom + BADGE_PADDING,
    )


def _layout_header(
    board: Board, width: int, midpoint: int, title_prefix: str
) -> list[Instruction]:
    instructions: list[Instruction] = [FillRect((0, 0, width, HEADER_HEIGHT), BUBBLE_GRAY)]
    for column, (x1, x2) in zip(board.columns, ((0, midpoint), (midpoint, width))):
        title = f"{title_prefix} {column.label}".strip()
        instructions.append(DrawText(title, ((x1 + x2) / 2, HEADER_TITLE_BASELINE), ALIGN_CENTER))
    instructions.append(DrawLine((0, HEADER_HEIGHT), (width, HEADER_HEIGHT)))
    return instructions


def _layout_row(
    group: ArrivalGroup,
    index: int,
    x1: int,
    x2: int,
    now: datetime,
    measure: TextMeasurer,
) -> list[Instruction]:
    top = row_top(index)
    baseline = top + ROW_BASELINE_OFFSET
    line_origin = (x1 + BADGE_LEFT_MARGIN, baseline)

    # Badge bounds depend on the rendered width of the line id.
    badge = badge_box(measure(group.line, line_origin))
    radius = (badge[3] - badge[1]) / 2
    divider_y = top + ROW_HEIGHT

    return [
        FillRoundedRect(badge, radius, BUBBLE_GRAY),
        DrawText(group.line, line_origin),
        DrawText(group.destination, (badge[2] + DESTINATION_GAP, baseline)),
        DrawText(
            format_countdown(group.arrivals, now),
            (x2 - COUNTDOWN_RIGHT_MARGIN, baseline),
            ALIGN_RIGHT,
        ),
        DrawLine((x1 + ROW_DIVIDER_INSET, divider_y), (x2 - ROW_DIVIDER_INSET, divider_y)),
    ]


def _layout_column(
    column: DirectionColumn,
    x1: int,
    x2: int,
    height: int,
    now: datetime,
    measure: TextMeasurer,
) -> list[Instruction]:
    limit = max_rows(height)
    if len(column.groups) > limit:
        logger.debug(
            "Column %s has %d rows, only %d fit", column.code, len(column.groups), limit
        )

    instructions: list[Instruction] = []
    for index, group in enumerate(column.groups[:limit]):
        instructions.extend(_layout_row(group, index, x1, x2, now, measure))
    return instructions


def layout_board(
    board: Board,
    now: datetime,
    measure: TextMeasurer,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    title_prefix: str = "",
) -> list[Instruction]:
    """Lay out the board as absolute draw instructions.

    The inbound column fills the left half and the outbound column the right
    half. ``measure`` returns the bounding box of left-aligned text drawn with
    its baseline at the given point; line-id badges are sized from it.
    """
    midpoint = width // 2
    instructions = _layout_header(board, width, midpoint, title_prefix)
    instructions.append(DrawLine((midpoint, 0), (midpoint, height)))
    instructions.extend(_layout_column(board.inbound, 0, midpoint, height, now, measure))
    instructions.extend(_layout_column(board.outbound, midpoint, width, height, now, measure))
    return instructions


__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "HEADER_HEIGHT",
    "ROW_HEIGHT",
    "TextMeasurer",
    "badge_box",
    "layout_board",
    "max_rows",
    "row_top",
]
