from __future__ import annotations

import pytest

from uptime_audit.history.day import HOURS_PER_DAY, BitDay, popcount32


@pytest.mark.parametrize("hour", range(HOURS_PER_DAY))
def test_mark_online_sets_only_that_hour(hour: int) -> None:
    day = BitDay()
    day.mark_online(hour)

    assert day.is_online(hour)
    assert [other for other in range(HOURS_PER_DAY) if day.is_online(other)] == [hour]


def test_mark_online_is_idempotent() -> None:
    day = BitDay()
    day.mark_online(5)
    day.mark_online(5)

    assert day.bits == 1 << 5
    assert day.popcount() == 1


def test_popcount_counts_set_hours() -> None:
    day = BitDay()
    for hour in (0, 3, 7):
        day.mark_online(hour)

    assert day.popcount() == 3
    assert BitDay().popcount() == 0

    full = BitDay()
    for hour in range(HOURS_PER_DAY):
        full.mark_online(hour)
    assert full.popcount() == 24
    assert full.online_hours() == list(range(HOURS_PER_DAY))


@pytest.mark.parametrize(
    "value",
    [0, 1, 0xFF, 0x0F0F0F, 0xFFFFFF, 0x80000001, 0xFFFFFFFF, 0x12345678],
)
def test_popcount32_matches_bit_count(value: int) -> None:
    assert popcount32(value) == bin(value).count("1")


def test_popcount32_ignores_bits_above_32() -> None:
    assert popcount32((1 << 40) | 0b101) == 2
