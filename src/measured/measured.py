"""A callable paired with an optional state factory, ready to be timed."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from measured.clock import Clock
from measured.loop import loop_nullary, loop_unary
from measured.sink import Sink


@dataclass(frozen=True)
class Measured:
    """Something to time with the invocation loop.

    Attributes:
        fn: The timed callable. Called with no arguments, or with the
            state built by `state_fn` when one is set.
        state_fn: Optional zero-argument factory for the state passed to `fn`.
        name: Optional label; defaults to the callable's qualified name.
    """

    fn: Callable[..., Any]
    state_fn: Callable[[], Any] | None = None
    name: str | None = None

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        return getattr(self.fn, "__qualname__", None) or repr(self.fn)

    def invoke(self, sink: Sink, count: int, *, clock: Clock | None = None) -> int:
        """Run the loop `count` times and return elapsed nanoseconds.

        State is built once, before the clock is read, and shared by every
        call in this invocation.
        """
        if self.state_fn is None:
            return loop_nullary(sink, count, self.fn, clock)
        state = self.state_fn()
        return loop_unary(sink, count, self.fn, state, clock)
