"""Main CLI entry point for microdot.

Provides commands: export, paths, cost, search, apply
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from microdot.cli.analyze import cost_command, paths_command, search_command
from microdot.cli.edit import apply_command
from microdot.cli.export import export_command
from microdot.graph.parser import COMMAND_SYNTAX

logger = logging.getLogger("microdot.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="microdot",
        description="Microdot - labelled directed graph editor and analyser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file "
            "(e.g. microdot.toml) or an inline TOML/JSON string. When "
            "omitted, built-in defaults are used."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export a graph file to DOT or JSON",
    )
    export_parser.add_argument(
        "graph",
        help="Graph file (JSON)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output file",
    )
    export_parser.add_argument(
        "-f",
        "--format",
        choices=["dot", "json"],
        default="dot",
        help="Output format (default: dot)",
    )

    # Path analysis command
    paths_parser = subparsers.add_parser(
        "paths",
        help="Find the critical path from sources to sinks",
    )
    paths_parser.add_argument(
        "graph",
        help="Graph file (JSON)",
    )
    paths_parser.add_argument(
        "--variable",
        help="Variable holding each node's cost (default: from config, 'cost')",
    )
    paths_parser.add_argument(
        "--shortest",
        action="store_true",
        help="Report the cheapest path instead of the dearest",
    )

    # Cost command
    cost_parser = subparsers.add_parser(
        "cost",
        help="Sum a variable over every node",
    )
    cost_parser.add_argument(
        "graph",
        help="Graph file (JSON)",
    )
    cost_parser.add_argument(
        "--variable",
        help="Variable to sum (default: from config, 'cost')",
    )

    # Search command
    search_parser = subparsers.add_parser(
        "search",
        help="List nodes whose label contains a fragment",
    )
    search_parser.add_argument(
        "graph",
        help="Graph file (JSON)",
    )
    search_parser.add_argument(
        "fragment",
        help="Case-sensitive text to look for",
    )

    # Apply command
    apply_parser = subparsers.add_parser(
        "apply",
        help="Edit a graph file with textual commands",
        description="Apply graph commands in order and save the graph.",
        epilog="commands:\n" + "\n".join(
            f"  {usage:<38}{summary}" for usage, summary in COMMAND_SYNTAX
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    apply_parser.add_argument(
        "graph",
        help="Graph file (JSON); created if missing",
    )
    apply_parser.add_argument(
        "commands",
        nargs="+",
        metavar="COMMAND",
        help='One command per argument, e.g. "i Write docs" "l n0 n1"',
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, Console(stderr=True))

    if args.command == "export":
        return export_command(args)
    elif args.command == "paths":
        return paths_command(args)
    elif args.command == "cost":
        return cost_command(args)
    elif args.command == "search":
        return search_command(args)
    elif args.command == "apply":
        return apply_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
