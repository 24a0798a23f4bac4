"""YAML suite configuration.

A suite file names a set of loops to time:

    name: examples
    count: 1000
    loops:
      - name: sum-small
        target: builtins:sum
        state: [1, 2, 3]
      - name: build
        target: mypkg.bench:build
        state_fn: mypkg.bench:make_input
        count: 500
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from measured.errors import ConfigError
from measured.loop import NO_STATE
from measured.measured import Measured
from measured.targets import resolve_target

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 1000


@dataclass
class LoopConfig:
    """Configuration for a single timed loop.

    Attributes:
        name: Loop identifier.
        target: "module:attribute" string of the timed callable.
        count: Number of calls per invocation.
        state: Literal state passed to every call, or NO_STATE.
        state_fn: "module:attribute" string of a state factory (optional).
        enabled: Whether the loop runs as part of the suite.
    """

    name: str
    target: str
    count: int = DEFAULT_COUNT
    state: Any = NO_STATE
    state_fn: str | None = None
    enabled: bool = True

    def to_measured(self) -> Measured:
        """Resolve targets and build the corresponding `Measured`."""
        fn = resolve_target(self.target)
        if self.state_fn is not None:
            return Measured(fn, resolve_target(self.state_fn), name=self.name)
        if self.state is not NO_STATE:
            state = self.state
            return Measured(fn, lambda: state, name=self.name)
        return Measured(fn, name=self.name)


@dataclass
class LoopSuite:
    """Collection of loop configurations.

    Attributes:
        name: Suite name.
        loops: Loop configurations, in file order.
        count: Default call count for loops that do not set one.
    """

    name: str
    loops: list[LoopConfig]
    count: int = DEFAULT_COUNT
    _by_name: dict[str, LoopConfig] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._by_name = {config.name: config for config in self.loops}

    def get(self, name: str) -> LoopConfig | None:
        return self._by_name.get(name)

    def enabled_loops(self) -> list[LoopConfig]:
        return [config for config in self.loops if config.enabled]


def _parse_count(value: Any, where: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{where}: count must be an integer, got {value!r}"
        raise ConfigError(msg)
    return value


def _parse_target(value: Any, key: str, where: str) -> str:
    if not isinstance(value, str):
        msg = f"{where}: {key} must be a 'module:attribute' string, got {value!r}"
        raise ConfigError(msg)
    return value


def _parse_enabled(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        msg = f"{where}: enabled must be true or false, got {value!r}"
        raise ConfigError(msg)
    return value


def _parse_loop(data: Any, index: int, default_count: int) -> LoopConfig:
    where = f"loops[{index}]"
    if not isinstance(data, dict):
        msg = f"{where}: expected a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    name = data.get("name")
    if not name:
        msg = f"{where}: missing 'name'"
        raise ConfigError(msg)
    where = f"loop {name!r}"

    target = data.get("target")
    if not target:
        msg = f"{where}: missing 'target'"
        raise ConfigError(msg)
    target = _parse_target(target, "target", where)

    if "state" in data and "state_fn" in data:
        msg = f"{where}: 'state' and 'state_fn' are mutually exclusive"
        raise ConfigError(msg)

    count = default_count
    if "count" in data:
        count = _parse_count(data["count"], where)

    state_fn = None
    if "state_fn" in data:
        state_fn = _parse_target(data["state_fn"], "state_fn", where)

    enabled = True
    if "enabled" in data:
        enabled = _parse_enabled(data["enabled"], where)

    return LoopConfig(
        name=str(name),
        target=target,
        count=count,
        state=data["state"] if "state" in data else NO_STATE,
        state_fn=state_fn,
        enabled=enabled,
    )


def parse_suite(data: Any) -> LoopSuite:
    """Build a `LoopSuite` from already-parsed YAML data."""
    if not isinstance(data, dict):
        msg = "Suite configuration must be a mapping"
        raise ConfigError(msg)

    loops_data = data.get("loops")
    if not isinstance(loops_data, list):
        msg = "Suite configuration needs a 'loops' list"
        raise ConfigError(msg)

    count = DEFAULT_COUNT
    if "count" in data:
        count = _parse_count(data["count"], "suite")

    loops = [_parse_loop(item, i, count) for i, item in enumerate(loops_data)]

    seen: set[str] = set()
    for config in loops:
        if config.name in seen:
            msg = f"Duplicate loop name {config.name!r}"
            raise ConfigError(msg)
        seen.add(config.name)

    return LoopSuite(
        name=data.get("name", "loops"),
        loops=loops,
        count=count,
    )


def load_suite_config(config_path: Path | str) -> LoopSuite:
    """Load a loop suite from a YAML file.

    Args:
        config_path: Path to the suite file.

    Returns:
        LoopSuite configuration.

    Raises:
        ConfigError: If the file is not valid YAML or not a valid suite.
    """
    config_path = Path(config_path)
    with config_path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {config_path}: {e}"
            raise ConfigError(msg) from e
        except UnicodeDecodeError as e:
            msg = f"{config_path} is not valid UTF-8: {e}"
            raise ConfigError(msg) from e

    suite = parse_suite(data)
    logger.debug(
        "Loaded suite %r from %s (%d loops)", suite.name, config_path, len(suite.loops)
    )
    return suite
