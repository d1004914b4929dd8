"""Fixed-capacity bit set backed by a Python int."""

from __future__ import annotations

from typing import Iterator


class FixedBitSet:
    """Bit array over ``[0, capacity)`` with set-bit and clear-bit iteration.

    Iteration order is ascending in both directions.
    """

    __slots__ = ("_capacity", "_full", "_bits")

    def __init__(self, capacity: int) -> None:
        assert capacity >= 0, "Capacity must be non-negative"
        self._capacity = capacity
        self._full = (1 << capacity) - 1
        self._bits = 0

    def __len__(self) -> int:
        return self._capacity

    def __contains__(self, idx: int) -> bool:
        return self.contains(idx)

    def contains(self, idx: int) -> bool:
        return 0 <= idx < self._capacity and (self._bits >> idx) & 1 == 1

    def insert(self, idx: int) -> None:
        assert 0 <= idx < self._capacity, f"Bit {idx} out of range"
        self._bits |= 1 << idx

    def set(self, idx: int, enabled: bool) -> None:
        assert 0 <= idx < self._capacity, f"Bit {idx} out of range"
        if enabled:
            self._bits |= 1 << idx
        else:
            self._bits &= ~(1 << idx)

    def any(self) -> bool:
        return self._bits != 0

    def count_ones(self) -> int:
        return bin(self._bits).count("1")

    def ones(self) -> Iterator[int]:
        return _iter_bits(self._bits)

    def zeroes(self) -> Iterator[int]:
        return _iter_bits(~self._bits & self._full)


def _iter_bits(bits: int) -> Iterator[int]:
    # Snapshot of `bits` is taken at call time, so callers may mutate the set
    # while consuming the iterator.
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low
