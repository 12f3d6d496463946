from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable

from uptime_audit.errors import PreconditionError
from uptime_audit.history.store import HistoryStore
from uptime_audit.io.snapshots import Snapshot

LOGGER = logging.getLogger(__name__)

SNAPSHOT_INTERVAL = timedelta(hours=1)


def _warn_on_gap(previous: datetime | None, current: datetime | None) -> None:
    if previous is None or current is None:
        return
    if current - previous != SNAPSHOT_INTERVAL:
        LOGGER.warning(
            "Snapshots %s and %s are not one hour apart; treating them as consecutive hours.",
            previous,
            current,
        )


def accumulate_snapshots(
    snapshots: Iterable[Snapshot], store: HistoryStore | None = None
) -> HistoryStore:
    """Consume snapshots in arrival order into per-participant histories.

    Each snapshot counts as one hour and every 24th one starts a new day,
    regardless of its timestamp.
    """
    store = store if store is not None else HistoryStore()
    previous: datetime | None = None
    for snapshot in snapshots:
        _warn_on_gap(previous, snapshot.valid_after)
        previous = snapshot.valid_after
        store.record_snapshot(snapshot.identifiers)

    if store.snapshots_seen == 0:
        raise PreconditionError("No snapshots to process")
    if len(store) == 0:
        raise PreconditionError("No participants observed in any snapshot")

    LOGGER.info(
        "Accumulated %d snapshots over %d days for %d participants.",
        store.snapshots_seen,
        store.elapsed_days,
        len(store),
    )
    return store
