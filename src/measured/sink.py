"""Consumption sinks for timed loops.

A sink accepts every value a timed callable produces and stores it
somewhere observable, so that the call producing it is never considered
dead work.
"""

from __future__ import annotations

from typing import Any, Protocol


class Sink(Protocol):
    """Anything that can consume a produced value."""

    def consume(self, value: Any) -> None: ...


class Blackhole:
    """Default sink: keeps the last value and a count of consumed values.

    Attributes:
        consumed: Number of values consumed since creation or last reset.
        last: Most recently consumed value, or None.
    """

    __slots__ = ("consumed", "last")

    def __init__(self) -> None:
        self.consumed = 0
        self.last: Any = None

    def consume(self, value: Any) -> None:
        self.last = value
        self.consumed += 1

    def reset(self) -> None:
        """Forget consumed values."""
        self.consumed = 0
        self.last = None

    def __repr__(self) -> str:
        return f"Blackhole(consumed={self.consumed})"
