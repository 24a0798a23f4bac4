"""Resolve "package.module:attribute" strings to callables."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any

from measured.errors import TargetError


def split_target(target: str) -> tuple[str, str]:
    """Split a target string into (module path, attribute path)."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Invalid target {target!r}: expected 'module:attribute'"
        raise TargetError(msg)
    return module_name, attr_path


def resolve_target(target: str) -> Callable[..., Any]:
    """Import and return the callable named by `target`.

    Args:
        target: String like "json:dumps" or "mypkg.bench:Suite.run".

    Returns:
        The resolved callable.

    Raises:
        TargetError: If the string is malformed, the module or attribute
            does not exist, or the object is not callable.
    """
    module_name, attr_path = split_target(target)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import module {module_name!r} for target {target!r}: {e}"
        raise TargetError(msg) from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            msg = f"Target {target!r} has no attribute {part!r}"
            raise TargetError(msg) from e

    if not callable(obj):
        msg = f"Target {target!r} resolved to non-callable {type(obj).__name__}"
        raise TargetError(msg)

    return obj
