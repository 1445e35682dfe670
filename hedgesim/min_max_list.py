"""Fixed-capacity list tracking its smallest and largest values."""

from __future__ import annotations


class MinMaxList:
    """A list of floats of fixed capacity with O(1) access to its extremes.

    Appends beyond the capacity are ignored.
    """

    def __init__(self, size: int) -> None:
        self.values: list[float | None] = [None] * size
        self._length = 0
        self._min_idx: int | None = None
        self._max_idx: int | None = None

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self.values)

    def append(self, value: float) -> None:
        """Store ``value`` if there is room left."""
        if self._length >= len(self.values):
            return
        idx = self._length
        if self._min_idx is None or self.values[self._min_idx] > value:
            self._min_idx = idx
        if self._max_idx is None or self.values[self._max_idx] < value:
            self._max_idx = idx
        self.values[idx] = value
        self._length += 1

    def find_min(self) -> float | None:
        """Return the smallest stored value, or None when empty."""
        return None if self._min_idx is None else self.values[self._min_idx]

    def find_max(self) -> float | None:
        """Return the largest stored value, or None when empty."""
        return None if self._max_idx is None else self.values[self._max_idx]