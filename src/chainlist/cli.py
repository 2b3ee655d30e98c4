"""Command-line interface.

Provides the `chainlist` command with subcommands that read a few
bounded lines from standard input and then:
- print the largest or smallest number (`max`, `min`)
- print the numbers with duplicates removed (`dedup`)
- print the lines as read (`show`)

Every payload comes from the heap, so every path tears the chain down
strongly before exiting. The exit status is 0 on success and 1 after an
error line on stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from chainlist.bulk import convert_strings_to_int_ptrs, deallocate, remove_duplicates
from chainlist.config import ChainConfig, ConfigError, load_config
from chainlist.errors import Outcome, print_error
from chainlist.heap import Heap, use_heap
from chainlist.reader import read_lines_as_string
from chainlist.render import print_list
from chainlist.search import get_max_int, get_min_int
from chainlist.types import STRONG, PayloadKind, Slot

# Body of a subcommand: works on the chain read from stdin
ChainAction = Callable[[Slot, ChainConfig], bool]


def resolve_config(args: argparse.Namespace) -> ChainConfig:
    """Merge the config file (if any) with command-line overrides."""
    config = load_config(Path(args.config)) if args.config else ChainConfig()
    if args.size is not None:
        config.max_input_size = args.size
    if args.count is not None:
        config.count = args.count
    if args.heap_limit is not None:
        config.heap_limit = args.heap_limit
    return config


def run_on_chain(args: argparse.Namespace, action: ChainAction) -> int:
    """Read the chain, run `action` on it, and always tear it down."""
    try:
        config = resolve_config(args)
    except (OSError, ConfigError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    with use_heap(Heap(config.heap_limit)):
        root = Slot()
        try:
            lines = read_lines_as_string(config.max_input_size, config.count)
            if lines:
                root = lines.value
            ok = bool(lines) and action(root, config)
        finally:
            deallocate(root, STRONG)

    if not ok:
        print_error()
        return 1
    return 0


def _numbers(root: Slot) -> bool:
    return bool(convert_strings_to_int_ptrs(root))


def _extremum(label: str, pick: Callable[[Slot], Outcome[int]]) -> ChainAction:
    def action(root: Slot, config: ChainConfig) -> bool:
        if not _numbers(root):
            return False
        found = pick(root)
        if not found:
            return False
        print(f"{label} number: {found.value}")
        return True

    return action


def cmd_max(args: argparse.Namespace) -> int:
    """Print the largest number read."""
    return run_on_chain(args, _extremum("Max", get_max_int))


def cmd_min(args: argparse.Namespace) -> int:
    """Print the smallest number read."""
    return run_on_chain(args, _extremum("Min", get_min_int))


def cmd_dedup(args: argparse.Namespace) -> int:
    """Print the numbers read, each distinct value once."""

    def action(root: Slot, config: ChainConfig) -> bool:
        if not _numbers(root):
            return False
        if not remove_duplicates(root, STRONG, PayloadKind.INT):
            return False
        return bool(print_list(root, PayloadKind.INT))

    return run_on_chain(args, action)


def cmd_show(args: argparse.Namespace) -> int:
    """Print the lines as read."""
    return run_on_chain(args, lambda root, config: bool(print_list(root, PayloadKind.STRING)))


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chainlist",
        description="Read bounded lines into a linked list and work on them",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--size",
        type=int,
        help="Buffer size per line, terminator included (default: 12)",
    )
    parser.add_argument(
        "--count",
        type=int,
        help="Number of lines to read (default: 2)",
    )
    parser.add_argument(
        "--heap-limit",
        type=int,
        help="Maximum number of live heap blocks (default: unlimited)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log allocator and error-indicator activity",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    max_parser = subparsers.add_parser("max", help="Print the largest number")
    max_parser.set_defaults(func=cmd_max)

    min_parser = subparsers.add_parser("min", help="Print the smallest number")
    min_parser.set_defaults(func=cmd_min)

    dedup_parser = subparsers.add_parser("dedup", help="Print numbers without duplicates")
    dedup_parser.set_defaults(func=cmd_dedup)

    show_parser = subparsers.add_parser("show", help="Print the lines as read")
    show_parser.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
