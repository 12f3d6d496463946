from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from uptime_audit.detectors.base import Detector, DetectorResult
from uptime_audit.errors import PreconditionError
from uptime_audit.features.distance import uptime_distance
from uptime_audit.features.ordering import OrderedColumns
from uptime_audit.history.day import HOURS_PER_DAY

LOGGER = logging.getLogger(__name__)

DEFAULT_BLOCK_LENGTH = 5
DEFAULT_MAX_DISTANCE = 0.0002
DEFAULT_MIN_INTERESTING_UPTIME = 5

RUN_COLUMNS = [
    "run_id",
    "start_column",
    "end_column",
    "n_columns",
    "n_pairs",
    "first_identifier",
    "last_identifier",
]


@dataclass(frozen=True)
class HighlightRun:
    start: int
    end: int
    n_pairs: int

    @property
    def n_columns(self) -> int:
        return self.end - self.start + 1

    def column_indices(self) -> range:
        return range(self.start, self.end + 1)


def find_highlight_runs(
    columns: OrderedColumns,
    *,
    block_length: int = DEFAULT_BLOCK_LENGTH,
    max_distance: float = DEFAULT_MAX_DISTANCE,
    min_interesting_uptime: int = DEFAULT_MIN_INTERESTING_UPTIME,
) -> list[HighlightRun]:
    """Find runs of adjacent columns whose pairwise distance stays below ``max_distance``.

    Columns with fewer than ``min_interesting_uptime`` online or offline hours
    are skipped without breaking the current run. A run of at least
    ``block_length`` similar pairs covers every column from the left side of
    its first pair through the right side of its last pair, so skipped
    columns inside the run are flagged and those after it are not.
    """
    if len(columns) < 2:
        raise PreconditionError("Highlighting needs at least two columns")
    total_hours = columns.n_days * HOURS_PER_DAY
    if total_hours == 0:
        raise PreconditionError("Highlighting needs at least one day of data")

    histories = columns.histories
    runs: list[HighlightRun] = []
    runlength = 0
    run_start = run_end = 0
    for i in range(len(columns) - 1):
        time_online = histories[i].total_uptime()
        if (
            time_online < min_interesting_uptime
            or total_hours - time_online < min_interesting_uptime
        ):
            continue

        if uptime_distance(histories[i], histories[i + 1]) < max_distance:
            if runlength == 0:
                run_start = i
            runlength += 1
            run_end = i + 1
            continue
        if runlength >= block_length:
            runs.append(HighlightRun(start=run_start, end=run_end, n_pairs=runlength))
        runlength = 0

    if runlength >= block_length:
        runs.append(HighlightRun(start=run_start, end=run_end, n_pairs=runlength))
    return runs


def find_highlights(
    columns: OrderedColumns,
    *,
    block_length: int = DEFAULT_BLOCK_LENGTH,
    max_distance: float = DEFAULT_MAX_DISTANCE,
    min_interesting_uptime: int = DEFAULT_MIN_INTERESTING_UPTIME,
) -> set[int]:
    runs = find_highlight_runs(
        columns,
        block_length=block_length,
        max_distance=max_distance,
        min_interesting_uptime=min_interesting_uptime,
    )
    return {index for run in runs for index in run.column_indices()}


class SimilarRunsDetector(Detector):
    name = "similar_runs"

    def __init__(
        self,
        block_length: int = DEFAULT_BLOCK_LENGTH,
        max_distance: float = DEFAULT_MAX_DISTANCE,
        min_interesting_uptime: int = DEFAULT_MIN_INTERESTING_UPTIME,
    ) -> None:
        self.block_length = block_length
        self.max_distance = max_distance
        self.min_interesting_uptime = min_interesting_uptime

    def run(self, columns: OrderedColumns) -> DetectorResult:
        runs = find_highlight_runs(
            columns,
            block_length=self.block_length,
            max_distance=self.max_distance,
            min_interesting_uptime=self.min_interesting_uptime,
        )
        flagged = frozenset(index for run in runs for index in run.column_indices())

        rows = [
            {
                "run_id": run_id,
                "start_column": run.start,
                "end_column": run.end,
                "n_columns": run.n_columns,
                "n_pairs": run.n_pairs,
                "first_identifier": columns.identifiers[run.start],
                "last_identifier": columns.identifiers[run.end],
            }
            for run_id, run in enumerate(runs)
        ]
        run_table = pd.DataFrame(rows, columns=RUN_COLUMNS)

        LOGGER.info(
            "Highlighted %d of %d columns in %d runs.", len(flagged), len(columns), len(runs)
        )
        return DetectorResult(
            detector=self.name,
            summary={
                "n_columns": int(len(columns)),
                "n_runs": int(len(runs)),
                "n_highlighted_columns": int(len(flagged)),
                "longest_run_columns": max((run.n_columns for run in runs), default=0),
            },
            tables={"highlight_runs": run_table},
            flagged_columns=flagged,
        )
