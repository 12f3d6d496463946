from __future__ import annotations

import pytest

from uptime_audit.errors import InvalidStateError
from uptime_audit.features.ordering import (
    Column,
    ColumnStats,
    OrderedColumns,
    compare_column_stats,
    compare_histories,
    order_columns,
)
from uptime_audit.history.sequence import OnlineHistory


def _history_at(absolute_hours: list[int] | range, n_days: int = 2) -> OnlineHistory:
    history = OnlineHistory.with_days(n_days)
    for index in absolute_hours:
        history.days[index // 24].mark_online(index % 24)
    return history


def _three_columns() -> dict[str, OnlineHistory]:
    return {
        # uptime 10, median (14 + 15) / 2
        "ten": _history_at(range(10, 20)),
        # uptime 11, odd median lands on index 6
        "eleven": _history_at(range(0, 11)),
        # uptime 30
        "thirty": _history_at(range(0, 30)),
    }


def test_close_uptimes_compare_by_median() -> None:
    histories = _three_columns()

    assert histories["ten"].median() == 14.5
    assert histories["eleven"].median() == 6.0
    assert compare_histories(histories["ten"], histories["eleven"]) == 1
    assert compare_histories(histories["eleven"], histories["ten"]) == -1


def test_distant_uptimes_compare_by_total() -> None:
    histories = _three_columns()

    assert compare_histories(histories["ten"], histories["thirty"]) == -1
    assert compare_histories(histories["thirty"], histories["eleven"]) == 1


def test_order_columns_sorts_by_uptime_then_median() -> None:
    columns = [Column(identifier, history) for identifier, history in _three_columns().items()]

    ordered = order_columns(columns)

    assert ordered.identifiers == ["eleven", "ten", "thirty"]
    assert [history.total_uptime() for history in ordered.histories] == [11, 10, 30]


def test_tolerance_boundary_falls_back_to_uptime() -> None:
    later = _history_at(range(20, 30))  # uptime 10, late median
    earlier = _history_at(range(0, 13))  # uptime 13, early median

    assert compare_histories(later, earlier, tolerance=3) == -1
    assert compare_histories(later, earlier, tolerance=4) == 1


def test_order_columns_is_stable_for_ties() -> None:
    columns = [Column(f"clone-{index}", _history_at(range(3, 9))) for index in range(5)]

    ordered = order_columns(reversed(columns))

    assert ordered.identifiers == [f"clone-{index}" for index in reversed(range(5))]


def test_order_columns_respects_tolerance_parameter() -> None:
    columns = [
        Column("late", _history_at(range(20, 30))),
        Column("early", _history_at(range(0, 13))),
    ]

    assert order_columns(columns, tolerance=3).identifiers == ["late", "early"]
    assert order_columns(columns, tolerance=4).identifiers == ["early", "late"]


def test_median_is_only_needed_inside_tolerance() -> None:
    empty = ColumnStats.from_history(OnlineHistory.with_days(2))
    busy = ColumnStats.from_history(_history_at(range(0, 20)))

    assert compare_column_stats(empty, busy) == -1
    with pytest.raises(InvalidStateError):
        compare_column_stats(empty, ColumnStats.from_history(OnlineHistory.with_days(2)))


def test_swap_moves_identifier_and_history_together() -> None:
    histories = _three_columns()
    ordered = OrderedColumns(
        identifiers=list(histories),
        histories=list(histories.values()),
    )

    ordered.swap(0, 2)

    assert ordered.identifiers == ["thirty", "eleven", "ten"]
    assert ordered.histories[0] is histories["thirty"]
    assert ordered.histories[2] is histories["ten"]
    assert [column.identifier for column in ordered] == ordered.identifiers


def test_ordered_columns_rejects_desynchronized_lists() -> None:
    with pytest.raises(ValueError, match="same length"):
        OrderedColumns(identifiers=["a", "b"], histories=[OnlineHistory()])
