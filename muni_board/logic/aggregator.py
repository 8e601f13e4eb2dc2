"""Group normalized arrivals into the two board columns."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
import logging

from muni_board.config import DirectionConfig
from muni_board.logic.countdown import parse_timestamp
from muni_board.logic.models import (
    ArrivalGroup,
    Board,
    DirectionColumn,
    GroupKey,
    NormalizedArrival,
)

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _arrival_sort_key(arrival: NormalizedArrival) -> tuple[bool, datetime]:
    # Unknown times sort after every known time.
    arrival_time = parse_timestamp(arrival.expected_arrival)
    if arrival_time is None:
        return (True, _EARLIEST)
    return (False, arrival_time)


def _column(
    direction: DirectionConfig, buckets: dict[GroupKey, list[NormalizedArrival]]
) -> DirectionColumn:
    keys = sorted(
        (key for key in buckets if key.direction == direction.code),
        key=lambda key: (key.line, key.destination),
    )
    groups = tuple(
        ArrivalGroup(key=key, arrivals=tuple(sorted(buckets[key], key=_arrival_sort_key)))
        for key in keys
    )
    return DirectionColumn(code=direction.code, label=direction.label, groups=groups)


def aggregate(
    arrivals: Iterable[NormalizedArrival],
    inbound: DirectionConfig,
    outbound: DirectionConfig,
) -> Board:
    """Build the board: one column per configured direction, rows sorted by line then destination."""
    shown = {inbound.code, outbound.code}
    buckets: dict[GroupKey, list[NormalizedArrival]] = {}
    ignored = 0
    for arrival in arrivals:
        if arrival.direction not in shown:
            ignored += 1
            continue
        key = GroupKey(arrival.direction, arrival.line, arrival.destination)
        buckets.setdefault(key, []).append(arrival)

    if ignored:
        logger.debug("Ignored %d arrivals outside configured directions", ignored)

    return Board(inbound=_column(inbound, buckets), outbound=_column(outbound, buckets))


__all__ = ["aggregate"]
