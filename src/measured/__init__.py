"""measured: time repeated invocations of a callable.

Every result is handed to a sink so the work being timed is never
discarded as unused.
"""

from __future__ import annotations

from measured.clock import DEFAULT_CLOCK, Clock, MonotonicClock
from measured.config import LoopConfig, LoopSuite, load_suite_config
from measured.errors import ConfigError, MeasuredError, TargetError
from measured.loop import NO_STATE, loop, loop_nullary, loop_unary
from measured.measured import Measured
from measured.sink import Blackhole, Sink
from measured.targets import resolve_target

__all__ = [
    "DEFAULT_CLOCK",
    "NO_STATE",
    "Blackhole",
    "Clock",
    "ConfigError",
    "LoopConfig",
    "LoopSuite",
    "Measured",
    "MeasuredError",
    "MonotonicClock",
    "Sink",
    "TargetError",
    "load_suite_config",
    "loop",
    "loop_nullary",
    "loop_unary",
    "resolve_target",
]
