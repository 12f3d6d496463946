from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from uptime_audit.config import AnalysisConfig
from uptime_audit.detectors.base import DetectorResult
from uptime_audit.detectors.similar_runs import SimilarRunsDetector
from uptime_audit.errors import PreconditionError
from uptime_audit.features.ordering import Column, OrderedColumns, order_columns
from uptime_audit.history.store import PruneStats
from uptime_audit.io.snapshots import Snapshot
from uptime_audit.pipeline.accumulate import accumulate_snapshots

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class UptimeAnalysis:
    columns: OrderedColumns
    highlights: frozenset[int]
    prune_stats: PruneStats
    detector_result: DetectorResult
    n_snapshots: int
    n_days: int

    def summary(self) -> dict[str, object]:
        return {
            "n_snapshots": self.n_snapshots,
            "n_days": self.n_days,
            "n_participants_observed": self.prune_stats.examined,
            "n_pruned_always_online": self.prune_stats.removed,
            "n_columns": len(self.columns),
            self.detector_result.detector: self.detector_result.summary,
        }


def analyse_uptimes(snapshots: Iterable[Snapshot], config: AnalysisConfig) -> UptimeAnalysis:
    """Accumulate, prune, order and highlight. Any precondition failure aborts the run."""
    store = accumulate_snapshots(snapshots)
    n_snapshots = store.snapshots_seen
    n_days = store.elapsed_days

    prune_stats = store.prune()
    if len(store) == 0:
        raise PreconditionError("Every participant was always online; nothing left to order")

    columns = order_columns(
        (Column(identifier=identifier, history=history) for identifier, history in store.items()),
        tolerance=config.tolerance,
    )
    detector = SimilarRunsDetector(
        block_length=config.block_length,
        max_distance=config.max_distance,
        min_interesting_uptime=config.min_interesting_uptime,
    )
    result = detector.run(columns)
    return UptimeAnalysis(
        columns=columns,
        highlights=result.flagged_columns,
        prune_stats=prune_stats,
        detector_result=result,
        n_snapshots=n_snapshots,
        n_days=n_days,
    )
