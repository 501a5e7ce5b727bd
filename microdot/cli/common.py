"""Helpers shared by the CLI commands."""

import logging
from pathlib import Path
from typing import Optional

from microdot.config import MicrodotConfig, load_config
from microdot.graph.manager import Graph
from microdot.graph.storage import load_graph

logger = logging.getLogger("microdot.cli.common")


def config_from_args(args) -> MicrodotConfig:
    """Load the configuration named by ``--config``, or the defaults.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    source = getattr(args, "config", None)
    config = load_config(source)
    logger.debug("Using configuration: %s", config.model_dump())
    return config


def load_existing_graph(args, config: MicrodotConfig) -> Optional[Graph]:
    """Load the graph named by ``args.graph`` for a read-only command.

    Returns:
        Optional[Graph]: The graph, or None (after logging) when the file
        does not exist.

    Raises:
        GraphFormatError: If the file is not a graph document.
    """
    path = Path(args.graph)
    if not path.is_file():
        logger.error("Graph not found: %s", path)
        return None
    return load_graph(path, config)
