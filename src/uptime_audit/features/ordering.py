from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterable

from uptime_audit.history.sequence import OnlineHistory

LOGGER = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 3


@dataclass(frozen=True)
class Column:
    identifier: str
    history: OnlineHistory = field(compare=False)


@dataclass
class ColumnStats:
    """Sort key material for one history; the median is computed on first use."""

    history: OnlineHistory
    uptime: int
    _median: float | None = field(default=None, repr=False)

    @classmethod
    def from_history(cls, history: OnlineHistory) -> ColumnStats:
        return cls(history=history, uptime=history.total_uptime())

    @property
    def median(self) -> float:
        if self._median is None:
            self._median = self.history.median()
        return self._median


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def compare_column_stats(
    left: ColumnStats, right: ColumnStats, tolerance: int = DEFAULT_TOLERANCE
) -> int:
    diff = left.uptime - right.uptime
    if -tolerance < diff < tolerance:
        return _sign(left.median - right.median)
    return _sign(diff)


def compare_histories(
    left: OnlineHistory, right: OnlineHistory, tolerance: int = DEFAULT_TOLERANCE
) -> int:
    """Three-way comparison used to place visually similar columns side by side.

    Histories whose total uptime differs by less than ``tolerance`` hours are
    ordered by their median online hour; all others by total uptime.
    """
    return compare_column_stats(
        ColumnStats.from_history(left), ColumnStats.from_history(right), tolerance
    )


@dataclass
class OrderedColumns:
    """Co-indexed identifiers and histories in display order."""

    identifiers: list[str] = field(default_factory=list)
    histories: list[OnlineHistory] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.identifiers) != len(self.histories):
            raise ValueError(
                "identifiers and histories must have the same length "
                f"({len(self.identifiers)} != {len(self.histories)})"
            )

    @classmethod
    def from_columns(cls, columns: Iterable[Column]) -> OrderedColumns:
        ordered = cls()
        for column in columns:
            ordered.identifiers.append(column.identifier)
            ordered.histories.append(column.history)
        return ordered

    def __len__(self) -> int:
        return len(self.identifiers)

    def __iter__(self):
        for identifier, history in zip(self.identifiers, self.histories):
            yield Column(identifier=identifier, history=history)

    def swap(self, i: int, j: int) -> None:
        self.identifiers[i], self.identifiers[j] = self.identifiers[j], self.identifiers[i]
        self.histories[i], self.histories[j] = self.histories[j], self.histories[i]

    @property
    def n_days(self) -> int:
        return len(self.histories[0]) if self.histories else 0


def order_columns(
    columns: Iterable[Column], tolerance: int = DEFAULT_TOLERANCE
) -> OrderedColumns:
    """Stable sort of columns with :func:`compare_column_stats`."""
    start = time.perf_counter()
    keyed = [(column, ColumnStats.from_history(column.history)) for column in columns]
    keyed.sort(
        key=cmp_to_key(
            lambda left, right: compare_column_stats(left[1], right[1], tolerance)
        )
    )
    ordered = OrderedColumns.from_columns(column for column, _stats in keyed)
    LOGGER.info(
        "Done sorting %d columns after %.3fs.", len(ordered), time.perf_counter() - start
    )
    return ordered
