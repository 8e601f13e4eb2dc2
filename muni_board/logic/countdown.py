"""Countdown text for a group of arrivals."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from muni_board.logic.models import NormalizedArrival

MAX_COUNTDOWN_ENTRIES = 3
COUNTDOWN_SEPARATOR = ", "
COUNTDOWN_SUFFIX = " min"
NO_ARRIVALS_TEXT = "--"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 feed timestamp; naive values are taken as UTC."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return _as_utc(datetime.fromisoformat(value))
    except ValueError:
        return None


def upcoming_minutes(arrivals: Iterable[NormalizedArrival], now: datetime) -> list[int]:
    """Whole minutes until the next few arrivals strictly after now.

    Arrivals are expected soonest first. Entries without a parseable time,
    or at or before ``now``, are skipped before the list is capped.
    """
    now = _as_utc(now)
    minutes: list[int] = []
    for arrival in arrivals:
        arrival_time = parse_timestamp(arrival.expected_arrival)
        if arrival_time is None or arrival_time <= now:
            continue
        minutes.append(int((arrival_time - now).total_seconds() // 60))
        if len(minutes) == MAX_COUNTDOWN_ENTRIES:
            break
    return minutes


def format_countdown(arrivals: Iterable[NormalizedArrival], now: datetime) -> str:
    """Render upcoming arrivals as e.g. "2, 9 min", or the placeholder."""
    minutes = upcoming_minutes(arrivals, now)
    if not minutes:
        return NO_ARRIVALS_TEXT
    return COUNTDOWN_SEPARATOR.join(str(value) for value in minutes) + COUNTDOWN_SUFFIX


__all__ = [
    "MAX_COUNTDOWN_ENTRIES",
    "NO_ARRIVALS_TEXT",
    "format_countdown",
    "parse_timestamp",
    "upcoming_minutes",
]
