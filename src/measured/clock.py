"""Monotonic nanosecond clock sources."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of monotonically non-decreasing nanosecond timestamps."""

    def now(self) -> int: ...


class MonotonicClock:
    """Clock backed by `time.perf_counter_ns`."""

    def now(self) -> int:
        return time.perf_counter_ns()

    def __repr__(self) -> str:
        return "MonotonicClock()"


DEFAULT_CLOCK: Clock = MonotonicClock()
