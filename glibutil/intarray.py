"""Growable array of integers with the usual insert/remove/search helpers."""

from __future__ import annotations

import operator
from typing import Iterable, Iterator, List, Tuple

__all__ = ["IntArray"]


class IntArray:
    """A mutable sequence of integers.

    Mutating methods that have nothing to report return the array itself so
    calls can be chained.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._data: List[int] = [operator.index(v) for v in values]

    def __repr__(self) -> str:
        return f"IntArray({self._data!r})"

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return IntArray(self._data[index])
        return self._data[index]

    def __contains__(self, value: object) -> bool:
        return value in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IntArray):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return self._data == list(other)
        return NotImplemented

    def append(self, value: int) -> "IntArray":
        self._data.append(operator.index(value))
        return self

    def append_vals(self, values: Iterable[int]) -> "IntArray":
        self._data.extend(operator.index(v) for v in values)
        return self

    def prepend(self, value: int) -> "IntArray":
        return self.insert(0, value)

    def prepend_vals(self, values: Iterable[int]) -> "IntArray":
        return self.insert_vals(0, values)

    def insert(self, pos: int, value: int) -> "IntArray":
        return self.insert_vals(pos, (value,))

    def insert_vals(self, pos: int, values: Iterable[int]) -> "IntArray":
        if not 0 <= pos <= len(self._data):
            raise IndexError(f"insert position {pos} out of range")
        self._data[pos:pos] = [operator.index(v) for v in values]
        return self

    def set_count(self, count: int) -> "IntArray":
        """Truncate the array, or extend it with zeros, to ``count`` items."""
        if count < 0:
            raise ValueError("count must not be negative")
        if count < len(self._data):
            del self._data[count:]
        else:
            self._data.extend([0] * (count - len(self._data)))
        return self

    def find(self, value: int) -> int:
        """Index of the first occurrence of ``value``, or -1."""
        try:
            return self._data.index(value)
        except ValueError:
            return -1

    def remove(self, value: int) -> bool:
        """Remove the first occurrence of ``value``, keeping the order."""
        pos = self.find(value)
        if pos < 0:
            return False
        del self._data[pos]
        return True

    def remove_fast(self, value: int) -> bool:
        """Remove the first occurrence of ``value``, moving the last item in."""
        pos = self.find(value)
        if pos < 0:
            return False
        self._remove_fast_at(pos)
        return True

    def remove_all(self, value: int) -> int:
        """Remove every occurrence of ``value``; return how many were removed."""
        removed = 0
        while self.remove(value):
            removed += 1
        return removed

    def remove_all_fast(self, value: int) -> int:
        """Like ``remove_all`` but fills holes with the last item."""
        removed = 0
        while self.remove_fast(value):
            removed += 1
        return removed

    def remove_index(self, pos: int) -> "IntArray":
        """Remove the item at ``pos``; out-of-range positions are ignored."""
        if 0 <= pos < len(self._data):
            del self._data[pos]
        return self

    def remove_index_fast(self, pos: int) -> "IntArray":
        """Remove the item at ``pos`` by moving the last item into its place."""
        if not 0 <= pos < len(self._data):
            raise IndexError(f"position {pos} out of range")
        self._remove_fast_at(pos)
        return self

    def _remove_fast_at(self, pos: int) -> None:
        last = self._data.pop()
        if pos < len(self._data):
            self._data[pos] = last

    def remove_range(self, pos: int, count: int) -> "IntArray":
        """Remove up to ``count`` items starting at ``pos``."""
        if 0 <= pos < len(self._data) and count > 0:
            del self._data[pos:pos + count]
        return self

    def sort_ascending(self) -> None:
        self._data.sort()

    def sort_descending(self) -> None:
        self._data.sort(reverse=True)

    def to_ints(self) -> Tuple[int, ...]:
        """An immutable snapshot of the contents."""
        return tuple(self._data)