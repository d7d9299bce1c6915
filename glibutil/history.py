"""Time-limited history of integer samples with a time-weighted average."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, NamedTuple, Optional

__all__ = ["IntHistory"]


def _monotonic_us() -> int:
    return time.monotonic_ns() // 1000


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class _Entry(NamedTuple):
    time: int
    value: int


class IntHistory:
    """Keeps at most ``max_size`` samples no older than ``max_interval``.

    Time is measured by ``time_func``, which defaults to a monotonic clock in
    microseconds. Both ends of the interval are inclusive: a sample taken at
    time ``t`` is still valid at ``t + max_interval``.
    """

    def __init__(
        self,
        max_size: int,
        max_interval: int,
        time_func: Optional[Callable[[], int]] = None,
    ) -> None:
        if max_size <= 0 or max_interval <= 0:
            raise ValueError("max_size and max_interval must be positive")
        self.max_size = max_size
        self.max_interval = max_interval
        self._time = time_func or _monotonic_us
        self._entries: Deque[_Entry] = deque(maxlen=max_size)

    def __repr__(self) -> str:
        return (
            f"IntHistory(max_size={self.max_size}, "
            f"max_interval={self.max_interval}, entries={list(self._entries)})"
        )

    def _flush(self, now: int) -> bool:
        """Drop expired samples; return False if nothing is left."""
        cutoff = now - self.max_interval
        if self._entries and self._entries[-1].time >= cutoff:
            while self._entries[0].time < cutoff:
                self._entries.popleft()
            return True
        self._entries.clear()
        return False

    def _median(self) -> int:
        entries = self._entries
        if len(entries) == 1:
            return entries[0].value
        area = 0
        span = 0
        prev = entries[0]
        for entry in list(entries)[1:]:
            dt = entry.time - prev.time
            span += dt
            area += _cdiv(dt * (prev.value + entry.value), 2)
            prev = entry
        return _cdiv(area, span)

    def size(self) -> int:
        """Number of samples that have not expired yet."""
        if self._entries and self._flush(self._time()):
            return len(self._entries)
        return 0

    def interval(self) -> int:
        """Time elapsed since the oldest valid sample, or 0 if there is none."""
        if self._entries:
            now = self._time()
            if self._flush(now):
                return now - self._entries[0].time
        return 0

    def clear(self) -> None:
        """Forget all samples."""
        self._entries.clear()

    def add(self, value: int) -> int:
        """Record a sample and return the current time-weighted average."""
        now = self._time()
        if not self._entries or not self._flush(now):
            self._entries.clear()
            self._entries.append(_Entry(now, value))
        else:
            last_time = self._entries[-1].time
            if now > last_time:
                self._entries.append(_Entry(now, value))
            else:
                # Same time, or time went back: replace the latest sample
                self._entries[-1] = _Entry(last_time, value)
        return self._median()

    def median(self, default: int = 0) -> int:
        """Time-weighted average of the valid samples, or ``default``."""
        if self._entries and self._flush(self._time()):
            return self._median()
        return default