from __future__ import annotations

import numpy as np

from uptime_audit.errors import LengthMismatchError
from uptime_audit.history.sequence import OnlineHistory

BOOST_STEP = 0.1
# Consecutive mismatched hours until the boost reaches 1.0 and stops growing.
BOOST_SATURATION_STEPS = 10


def mismatch_streaks(first: np.ndarray, second: np.ndarray) -> np.ndarray:
    """Length of the current run of disagreeing hours at every hour (0 where they agree)."""
    mismatched = first != second
    positions = np.arange(mismatched.size)
    last_agreement = np.maximum.accumulate(np.where(mismatched, -1, positions))
    return np.where(mismatched, positions - last_agreement, 0)


def uptime_distance(first: OnlineHistory, second: OnlineHistory) -> float:
    """Average per-hour penalty between two equally long histories.

    Each disagreeing hour costs the current boost, which grows by 0.1 per
    consecutive disagreement up to 1.0 and drops back to zero as soon as the
    two participants agree again. Long stretches of divergence therefore
    cost far more than scattered single-hour differences.
    """
    if len(first) != len(second):
        raise LengthMismatchError(
            f"Both histories must have the same length ({len(first)} != {len(second)} days)"
        )
    if len(first) == 0:
        return 0.0

    streaks = mismatch_streaks(first.hourly_states(), second.hourly_states())
    # Integer steps keep the boost at exactly 0.1, 0.2, ... 1.0.
    boost_steps = np.minimum(streaks, BOOST_SATURATION_STEPS)
    penalty = int(boost_steps.sum()) * BOOST_STEP
    return penalty / first.total_hours
