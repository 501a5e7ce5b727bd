"""Export command implementation."""

import logging
from pathlib import Path

from microdot.cli.common import config_from_args, load_existing_graph
from microdot.errors import MicrodotError
from microdot.export.dot import DotExporter, export_dot
from microdot.export.palette import Palette
from microdot.graph.storage import save_graph

logger = logging.getLogger("microdot.cli.export")


def export_command(args) -> int:
    """Execute export command.

    Args:
        args: Parsed command-line arguments containing:
            - graph: Graph file to read
            - output: Output file path
            - format: Export format (dot or json)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = config_from_args(args)
        output_path = Path(args.output)
        export_format = getattr(args, "format", "dot")

        graph = load_existing_graph(args, config)
        if graph is None:
            return 1
        logger.info("Exporting %s as %s to %s", graph, export_format, output_path)

        if export_format == "dot":
            exporter = DotExporter(
                display_mode=config.display_mode,
                palette=Palette(config.palette),
                wrap_width=config.wrap_width,
            )
            export_dot(graph, output_path, exporter)
        elif export_format == "json":
            save_graph(output_path, graph)
        else:
            logger.error("Unsupported export format: %s", export_format)
            return 1

        logger.info("Export successful: %s", output_path)
        return 0

    except (MicrodotError, OSError) as exc:
        logger.error("Export failed: %s", exc)
        return 1
