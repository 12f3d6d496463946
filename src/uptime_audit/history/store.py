from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ItemsView, Iterable

from uptime_audit.history.day import HOURS_PER_DAY
from uptime_audit.history.sequence import OnlineHistory

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PruneStats:
    removed: int
    examined: int


@dataclass
class HistoryStore:
    """Identifier -> history map filled one hourly snapshot at a time.

    ``elapsed_days`` is the number of days opened so far. Every history in the
    store has exactly that many days; late arrivals are back-filled offline.
    """

    histories: dict[str, OnlineHistory] = field(default_factory=dict)
    elapsed_days: int = 0
    snapshots_seen: int = 0

    def __len__(self) -> int:
        return len(self.histories)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.histories

    def __getitem__(self, identifier: str) -> OnlineHistory:
        return self.histories[identifier]

    def items(self) -> ItemsView[str, OnlineHistory]:
        return self.histories.items()

    def advance_all_by_one_day(self) -> None:
        for history in self.histories.values():
            history.append_day()
        self.elapsed_days += 1

    def insert_if_absent(self, identifier: str) -> OnlineHistory:
        history = self.histories.get(identifier)
        if history is None:
            history = OnlineHistory.with_days(self.elapsed_days)
            self.histories[identifier] = history
        return history

    def record_snapshot(self, identifiers: Iterable[str]) -> int:
        """Mark every identifier online for the next hour; returns that hour.

        Snapshot ``k`` (0-based) covers hour ``k % 24``; hour 0 opens a new day.
        """
        hour = self.snapshots_seen % HOURS_PER_DAY
        if hour == 0:
            self.advance_all_by_one_day()
        for identifier in identifiers:
            self.insert_if_absent(identifier).mark_online(hour)
        self.snapshots_seen += 1
        return hour

    def prune(self) -> PruneStats:
        """Drop histories that were online for every recorded hour."""
        examined = len(self.histories)
        always_online = [
            identifier
            for identifier, history in self.histories.items()
            if history.total_uptime() == len(history) * HOURS_PER_DAY
        ]
        for identifier in always_online:
            del self.histories[identifier]

        LOGGER.info(
            "Pruned %d (out of %d) participants that were always online.",
            len(always_online),
            examined,
        )
        return PruneStats(removed=len(always_online), examined=examined)
