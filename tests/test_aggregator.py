from __future__ import annotations

import random

from muni_board.config import DirectionConfig
from muni_board.logic.aggregator import aggregate
from muni_board.logic.models import GroupKey, NormalizedArrival

INBOUND = DirectionConfig(code="IB", label="Inbound")
OUTBOUND = DirectionConfig(code="OB", label="Outbound")


def _arrival(
    line: str = "N",
    destination: str = "Caltrain",
    direction: str = "IB",
    expected: str | None = "2024-05-01T12:05:00Z",
    stop_id: str = "15419",
) -> NormalizedArrival:
    return NormalizedArrival(
        stop_id=stop_id,
        line=line,
        direction=direction,
        destination=destination,
        expected_arrival=expected,
    )


def test_splits_into_configured_directions() -> None:
    board = aggregate(
        [_arrival(direction="IB"), _arrival(direction="OB", destination="Ocean Beach")],
        INBOUND,
        OUTBOUND,
    )

    assert board.inbound.label == "Inbound"
    assert board.outbound.label == "Outbound"
    assert [g.key for g in board.inbound.groups] == [GroupKey("IB", "N", "Caltrain")]
    assert [g.key for g in board.outbound.groups] == [GroupKey("OB", "N", "Ocean Beach")]


def test_unknown_direction_ignored() -> None:
    board = aggregate([_arrival(direction="XX")], INBOUND, OUTBOUND)

    assert board.inbound.groups == ()
    assert board.outbound.groups == ()


def test_missing_direction_gives_empty_column() -> None:
    board = aggregate([_arrival(direction="IB")], INBOUND, OUTBOUND)

    assert len(board.inbound.groups) == 1
    assert board.outbound.groups == ()
    assert board.outbound.code == "OB"


def test_no_arrivals_gives_two_empty_columns() -> None:
    board = aggregate([], INBOUND, OUTBOUND)

    assert board.inbound.groups == ()
    assert board.outbound.groups == ()


def test_groups_sorted_by_line_then_destination() -> None:
    arrivals = [
        _arrival(line="N", destination="Caltrain"),
        _arrival(line="J", destination="Downtown"),
        _arrival(line="N", destination="Ballpark"),
        _arrival(line="KT", destination="Sunnydale"),
    ]

    board = aggregate(arrivals, INBOUND, OUTBOUND)

    assert [(g.line, g.destination) for g in board.inbound.groups] == [
        ("J", "Downtown"),
        ("KT", "Sunnydale"),
        ("N", "Ballpark"),
        ("N", "Caltrain"),
    ]


def test_row_order_independent_of_input_order() -> None:
    arrivals = [
        _arrival(line=line, destination=dest, expected=f"2024-05-01T12:{minute:02d}:00Z")
        for line, dest in [("N", "Caltrain"), ("J", "Downtown"), ("L", "Zoo"), ("M", "Balboa")]
        for minute in (3, 11)
    ]
    expected = aggregate(arrivals, INBOUND, OUTBOUND)

    rng = random.Random(1234)
    for _ in range(10):
        shuffled = arrivals[:]
        rng.shuffle(shuffled)
        board = aggregate(shuffled, INBOUND, OUTBOUND)
        assert [g.key for g in board.inbound.groups] == [g.key for g in expected.inbound.groups]


def test_arrivals_sorted_by_time_missing_last() -> None:
    arrivals = [
        _arrival(expected=None, stop_id="a"),
        _arrival(expected="2024-05-01T12:09:00Z", stop_id="b"),
        _arrival(expected="not-a-time", stop_id="c"),
        _arrival(expected="2024-05-01T12:02:00Z", stop_id="d"),
    ]

    board = aggregate(arrivals, INBOUND, OUTBOUND)

    (group,) = board.inbound.groups
    assert [a.stop_id for a in group.arrivals] == ["d", "b", "a", "c"]


def test_time_sort_compares_instants_not_strings() -> None:
    arrivals = [
        _arrival(expected="2024-05-01T05:10:00-07:00", stop_id="later"),
        _arrival(expected="2024-05-01T12:05:00Z", stop_id="sooner"),
    ]

    (group,) = aggregate(arrivals, INBOUND, OUTBOUND).inbound.groups

    assert [a.stop_id for a in group.arrivals] == ["sooner", "later"]


def test_equal_times_keep_input_order() -> None:
    arrivals = [_arrival(stop_id=str(index)) for index in range(5)]

    (group,) = aggregate(arrivals, INBOUND, OUTBOUND).inbound.groups

    assert [a.stop_id for a in group.arrivals] == ["0", "1", "2", "3", "4"]
