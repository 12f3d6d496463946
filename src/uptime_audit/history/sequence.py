from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from uptime_audit.errors import InvalidStateError
from uptime_audit.history.day import HOURS_PER_DAY, BitDay

_HOUR_SHIFTS = np.arange(HOURS_PER_DAY, dtype=np.uint32)


@dataclass
class OnlineHistory:
    """Per-day presence of one participant, indexed by day offset from stream start."""

    days: list[BitDay] = field(default_factory=list)

    @classmethod
    def with_days(cls, n_days: int) -> OnlineHistory:
        return cls(days=[BitDay() for _ in range(n_days)])

    def __len__(self) -> int:
        return len(self.days)

    @property
    def total_hours(self) -> int:
        return len(self.days) * HOURS_PER_DAY

    def append_day(self) -> None:
        self.days.append(BitDay())

    def mark_online(self, hour: int) -> None:
        """Mark ``hour`` of the most recent day as online."""
        if not self.days:
            raise InvalidStateError("Cannot mark an hour online in a history without days")
        self.days[-1].mark_online(hour)

    def total_uptime(self) -> int:
        return sum(day.popcount() for day in self.days)

    def online_indices(self) -> list[int]:
        # Day-major, hour-minor: already ascending.
        return [
            day_index * HOURS_PER_DAY + hour
            for day_index, day in enumerate(self.days)
            for hour in day.online_hours()
        ]

    def median(self) -> float:
        indices = self.online_indices()
        n_indices = len(indices)
        if n_indices == 0:
            raise InvalidStateError("Median requested for a history without online hours")
        if n_indices == 1:
            return float(indices[0])
        if n_indices % 2 == 0:
            middle = n_indices // 2
            return (indices[middle - 1] + indices[middle]) / 2
        # Odd counts take the element after the textbook median. Ordering
        # output depends on this, so it stays.
        return float(indices[math.ceil(n_indices / 2)])

    def hourly_states(self) -> np.ndarray:
        """Boolean presence per absolute hour, shape ``(len(self) * 24,)``."""
        if not self.days:
            return np.zeros(0, dtype=bool)
        words = np.fromiter((day.bits for day in self.days), dtype=np.uint32, count=len(self.days))
        return (((words[:, np.newaxis] >> _HOUR_SHIFTS) & 1) == 1).ravel()
