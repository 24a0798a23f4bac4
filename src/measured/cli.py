"""Command-line interface.

Provides the `measured` command with subcommands for:
- Timing a single callable
- Timing every loop of a YAML suite file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from measured.config import DEFAULT_COUNT, LoopConfig, load_suite_config
from measured.errors import MeasuredError
from measured.measured import Measured
from measured.sink import Blackhole
from measured.targets import resolve_target

logger = logging.getLogger(__name__)


def format_elapsed(label: str, count: int, elapsed_ns: int) -> str:
    return f"{label}: {max(count, 0)} evals in {elapsed_ns} ns"


def run_measured(measured: Measured, count: int) -> int:
    """Invoke `measured` once with a fresh Blackhole and print the timing."""
    sink = Blackhole()
    elapsed = measured.invoke(sink, count)
    logger.debug("%s consumed %d values", measured.label, sink.consumed)
    print(format_elapsed(measured.label, count, elapsed))
    return elapsed


def cmd_run(args: argparse.Namespace) -> int:
    """Time a single target."""
    try:
        fn = resolve_target(args.target)
        state_fn = resolve_target(args.state_fn) if args.state_fn else None
    except MeasuredError as e:
        print(f"Error: {e}")
        return 1

    logger.debug("Running %s x%d", args.target, args.count)
    run_measured(Measured(fn, state_fn, name=args.target), args.count)
    return 0


def cmd_suite(args: argparse.Namespace) -> int:
    """Time the loops of a suite file."""
    suite_path = Path(args.path)
    if not suite_path.is_file():
        print(f"Error: Suite configuration not found: {suite_path}")
        return 1

    try:
        suite = load_suite_config(suite_path)
    except MeasuredError as e:
        print(f"Error loading suite configuration: {e}")
        return 1

    configs: list[LoopConfig]
    if args.loop:
        config = suite.get(args.loop)
        if config is None:
            print(f"Error: Loop {args.loop!r} not found in suite {suite.name!r}")
            return 1
        configs = [config]
    else:
        configs = suite.enabled_loops()

    try:
        prepared = [(config, config.to_measured()) for config in configs]
    except MeasuredError as e:
        print(f"Error: {e}")
        return 1

    print(f"Suite: {suite.name}")
    for config, measured in prepared:
        count = args.count if args.count is not None else config.count
        run_measured(measured, count)

    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="measured",
        description="Time repeated invocations of a Python callable",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Time a single callable")
    run_parser.add_argument(
        "target",
        help="Callable to time, as module:attribute",
    )
    run_parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=DEFAULT_COUNT,
        help=f"Number of calls (default: {DEFAULT_COUNT})",
    )
    run_parser.add_argument(
        "--state-fn",
        help="Zero-argument factory (module:attribute) for the state passed to TARGET",
    )
    run_parser.set_defaults(func=cmd_run)

    # suite command
    suite_parser = subparsers.add_parser("suite", help="Time the loops of a suite file")
    suite_parser.add_argument(
        "path",
        help="Path to suite YAML file",
    )
    suite_parser.add_argument(
        "--loop",
        help="Run only the named loop (even if disabled)",
    )
    suite_parser.add_argument(
        "-n",
        "--count",
        type=int,
        help="Override the call count of every loop",
    )
    suite_parser.set_defaults(func=cmd_suite)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
