from __future__ import annotations

import logging

from uptime_audit.history.store import HistoryStore, PruneStats


def test_insert_if_absent_backfills_elapsed_days() -> None:
    store = HistoryStore()
    store.advance_all_by_one_day()
    store.advance_all_by_one_day()

    history = store.insert_if_absent("late")

    assert len(history) == 2
    assert history.total_uptime() == 0
    assert store.insert_if_absent("late") is history


def test_advance_all_by_one_day_appends_to_every_history() -> None:
    store = HistoryStore()
    store.advance_all_by_one_day()
    first = store.insert_if_absent("a")
    second = store.insert_if_absent("b")
    first.mark_online(4)

    store.advance_all_by_one_day()

    assert store.elapsed_days == 2
    assert len(first) == 2
    assert len(second) == 2
    assert first.days[1].bits == 0


def test_record_snapshot_wraps_hours_and_opens_days() -> None:
    store = HistoryStore()
    hours = [store.record_snapshot(["relay"]) for _ in range(25)]

    assert hours[:3] == [0, 1, 2]
    assert hours[23] == 23
    assert hours[24] == 0
    assert store.elapsed_days == 2
    assert store.snapshots_seen == 25
    assert store["relay"].total_uptime() == 25
    assert store["relay"].days[1].online_hours() == [0]


def test_record_snapshot_backfills_late_participants() -> None:
    store = HistoryStore()
    for hour in range(30):
        store.record_snapshot(["early", "late"] if hour == 29 else ["early"])

    late = store["late"]
    assert len(late) == len(store["early"]) == 2
    assert late.days[0].bits == 0
    assert late.days[1].online_hours() == [5]


def test_prune_removes_always_online_and_keeps_one_gap(caplog) -> None:
    store = HistoryStore()
    for hour in range(48):
        present = ["always"]
        if hour != 30:
            present.append("one_gap")
        store.record_snapshot(present)

    with caplog.at_level(logging.INFO):
        stats = store.prune()

    assert stats == PruneStats(removed=1, examined=2)
    assert "always" not in store
    assert "one_gap" in store
    assert "Pruned 1 (out of 2)" in caplog.text
