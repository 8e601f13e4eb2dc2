"""End-to-end board pipeline: feed records in, PNG bytes out."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from muni_board.config import BoardConfig, DisplayConfig
from muni_board.logic.aggregator import aggregate
from muni_board.logic.models import ArrivalRecord, Board
from muni_board.logic.normalizer import normalize_arrivals
from muni_board.rendering.encoder import encode_png
from muni_board.rendering.renderer import render_board


def build_board(records: Iterable[ArrivalRecord], config: BoardConfig) -> Board:
    """Filter, group and order records into the two board columns."""
    arrivals = normalize_arrivals(records, config.watched_stops)
    return aggregate(arrivals, config.inbound, config.outbound)


def render_png(
    records: Iterable[ArrivalRecord],
    config: BoardConfig,
    display: DisplayConfig,
    now: datetime,
) -> bytes:
    """Render the board for ``records`` as of ``now`` and encode it as PNG."""
    board = build_board(records, config)
    image = render_board(board, now, display, title_prefix=config.title_prefix)
    return encode_png(image)


__all__ = ["build_board", "render_png"]
