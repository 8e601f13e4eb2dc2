"""Data structures shared by the arrival pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class ArrivalRecord:
    """Single arrival as decoded from the stop-monitoring feed."""

    stop_id: str
    line: str | None = None
    direction: str | None = None
    destination: str | None = None
    expected_arrival: str | None = None


@dataclass(frozen=True)
class NormalizedArrival:
    """Arrival with line, direction and destination known to be present."""

    stop_id: str
    line: str
    direction: str
    destination: str
    expected_arrival: str | None = None


class GroupKey(NamedTuple):
    direction: str
    line: str
    destination: str


@dataclass(frozen=True)
class ArrivalGroup:
    """One board row: arrivals sharing a key, soonest first."""

    key: GroupKey
    arrivals: tuple[NormalizedArrival, ...]

    @property
    def line(self) -> str:
        return self.key.line

    @property
    def destination(self) -> str:
        return self.key.destination


@dataclass(frozen=True)
class DirectionColumn:
    """Rows shown under one direction heading."""

    code: str
    label: str
    groups: tuple[ArrivalGroup, ...] = ()


@dataclass(frozen=True)
class Board:
    """Both columns of the board."""

    inbound: DirectionColumn
    outbound: DirectionColumn

    @property
    def columns(self) -> tuple[DirectionColumn, DirectionColumn]:
        return (self.inbound, self.outbound)


__all__ = [
    "ArrivalRecord",
    "NormalizedArrival",
    "GroupKey",
    "ArrivalGroup",
    "DirectionColumn",
    "Board",
]
