"""Timed invocation loop.

Times `count` sequential calls of a callable, handing every result to a
sink, and returns the elapsed time in nanoseconds:

    elapsed = loop(Blackhole(), 1000, fn)            # fn()
    elapsed = loop(Blackhole(), 1000, fn, state)     # fn(state)

Exceptions raised by the callable or the sink are not caught; they abort
the loop and reach the caller with no elapsed time reported.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from measured.clock import DEFAULT_CLOCK, Clock
from measured.sink import Sink


class _NoState:
    """Marker for "no state given" (None is a valid state)."""

    def __repr__(self) -> str:
        return "NO_STATE"


NO_STATE: Final = _NoState()


def loop_nullary(
    sink: Sink,
    count: int,
    fn: Callable[[], Any],
    clock: Clock | None = None,
) -> int:
    """Time `count` calls of `fn()`.

    Args:
        sink: Receives each result.
        count: Number of calls; zero or negative means no calls.
        fn: Zero-argument callable.
        clock: Clock to read (default: `DEFAULT_CLOCK`).

    Returns:
        Elapsed nanoseconds.
    """
    now = (clock if clock is not None else DEFAULT_CLOCK).now
    consume = sink.consume
    start = now()
    while count > 0:
        consume(fn())
        count -= 1
    return now() - start


def loop_unary(
    sink: Sink,
    count: int,
    fn: Callable[[Any], Any],
    state: Any,
    clock: Clock | None = None,
) -> int:
    """Time `count` calls of `fn(state)`, passing the same `state` each time.

    Args:
        sink: Receives each result.
        count: Number of calls; zero or negative means no calls.
        fn: One-argument callable.
        state: Object handed unchanged to every call.
        clock: Clock to read (default: `DEFAULT_CLOCK`).

    Returns:
        Elapsed nanoseconds.
    """
    now = (clock if clock is not None else DEFAULT_CLOCK).now
    consume = sink.consume
    start = now()
    while count > 0:
        consume(fn(state))
        count -= 1
    return now() - start


def loop(
    sink: Sink,
    count: int,
    fn: Callable[..., Any],
    state: Any = NO_STATE,
    *,
    clock: Clock | None = None,
) -> int:
    """Time `count` calls of `fn`, with `state` as its argument when given.

    The call shape is chosen once, before timing starts.
    """
    if state is NO_STATE:
        return loop_nullary(sink, count, fn, clock)
    return loop_unary(sink, count, fn, state, clock)
