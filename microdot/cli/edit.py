"""Edit command: apply textual graph commands to a graph file."""

import logging
from typing import Optional

from rich.console import Console

from microdot.cli.common import config_from_args
from microdot.errors import MicrodotError
from microdot.graph.parser import parse_commands
from microdot.graph.storage import load_graph, save_graph

logger = logging.getLogger("microdot.cli.edit")


def apply_command(args, console: Optional[Console] = None) -> int:
    """Apply command lines to a graph file and save the result.

    Every line is parsed before the graph is touched, so a bad line leaves
    the file as it was. A missing graph file starts a new graph.

    Args:
        args: Parsed command-line arguments containing:
            - graph: Graph file to edit
            - commands: Command lines, e.g. ``i Write docs`` or ``l n0 n1``

    Returns:
        int: Exit code (0 when every command succeeded, 1 otherwise).
    """
    console = console or Console()
    try:
        config = config_from_args(args)
        commands = parse_commands(args.commands)
        graph = load_graph(args.graph, config)

        failed = 0
        for command in commands:
            logger.debug("Applying: %s", command.help_text())
            result = graph.apply_command(command)
            console.print(str(result), markup=False, highlight=False, soft_wrap=True)
            if not result.ok:
                failed += 1

        if not save_graph(args.graph, graph):
            logger.info("Graph unchanged: %s", args.graph)

        if failed:
            logger.warning("%d of %d commands failed", failed, len(commands))
            return 1
        return 0

    except (MicrodotError, OSError) as exc:
        logger.error("Apply failed: %s", exc)
        return 1
