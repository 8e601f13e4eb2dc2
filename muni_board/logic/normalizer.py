"""Restrict feed records to watched stops with complete row fields."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from muni_board.logic.models import ArrivalRecord, NormalizedArrival


def normalize_arrival(record: ArrivalRecord) -> NormalizedArrival | None:
    """Return the normalized record, or None if line/direction/destination is missing."""
    if not record.line or not record.direction or not record.destination:
        return None
    return NormalizedArrival(
        stop_id=record.stop_id,
        line=record.line,
        direction=record.direction,
        destination=record.destination,
        expected_arrival=record.expected_arrival,
    )


def normalize_arrivals(
    records: Iterable[ArrivalRecord], watched_stops: Collection[str]
) -> list[NormalizedArrival]:
    """Keep records at watched stops that can be placed on the board, in input order."""
    normalized = []
    for record in records:
        if record.stop_id not in watched_stops:
            continue
        arrival = normalize_arrival(record)
        if arrival is not None:
            normalized.append(arrival)
    return normalized


__all__ = ["normalize_arrival", "normalize_arrivals"]
