"""Exceptions raised by measured itself.

Failures of the timed workload are never wrapped: they propagate as-is.
"""

from __future__ import annotations


class MeasuredError(ValueError):
    """Base class for measured input errors."""


class ConfigError(MeasuredError):
    """A suite configuration file is malformed."""


class TargetError(MeasuredError):
    """A target string cannot be resolved to a callable."""
