from __future__ import annotations

from dataclasses import dataclass

HOURS_PER_DAY = 24

_WORD_MASK = 0xFFFFFFFF
# Number of set bits for every possible byte value.
_BYTE_POPCOUNT: tuple[int, ...] = tuple(bin(value).count("1") for value in range(256))


def popcount32(value: int) -> int:
    """Count set bits in the low 32 bits of ``value`` one byte at a time."""
    value &= _WORD_MASK
    return (
        _BYTE_POPCOUNT[value & 0xFF]
        + _BYTE_POPCOUNT[(value >> 8) & 0xFF]
        + _BYTE_POPCOUNT[(value >> 16) & 0xFF]
        + _BYTE_POPCOUNT[(value >> 24) & 0xFF]
    )


@dataclass
class BitDay:
    """Presence of one participant over the 24 hours of one day.

    Bit ``h`` is set when the participant was seen during hour ``h``. Bits are
    only ever set; absence is the initial state.
    """

    bits: int = 0

    def mark_online(self, hour: int) -> None:
        self.bits |= 1 << hour

    def is_online(self, hour: int) -> bool:
        return (self.bits >> hour) & 1 == 1

    def popcount(self) -> int:
        return popcount32(self.bits)

    def online_hours(self) -> list[int]:
        return [hour for hour in range(HOURS_PER_DAY) if self.is_online(hour)]
