"""Load and save graphs as JSON files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from microdot.config.schema import MicrodotConfig
from microdot.export.json import JsonExporter, JsonImporter
from microdot.graph.manager import Graph

logger = logging.getLogger("microdot.graph.storage")

PathLike = Union[str, Path]


def load_graph(path: PathLike, config: Optional[MicrodotConfig] = None) -> Graph:
    """Load a graph file, or start a new graph if it does not exist yet.

    Args:
        path: Graph file path.
        config: Supplies the initial direction of a new graph.

    Returns:
        Graph: The loaded graph, or an empty one.

    Raises:
        GraphFormatError: If the file exists but is not a valid graph document.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Graph file %s not found; starting an empty graph", path)
        graph = Graph()
        if config is not None and config.left_right:
            graph.set_direction(True)
        return graph
    return JsonImporter.load(path)


def write_if_different(path: PathLike, content: str) -> bool:
    """Write ``content`` unless the file already holds exactly that text.

    Returns:
        bool: True if the file was written.
    """
    path = Path(path)
    if path.exists() and path.read_text(encoding="utf-8") == content:
        logger.debug("Skipping write of unchanged file %s", path)
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(content), path)
    return True


def save_graph(path: PathLike, graph: Graph) -> bool:
    """Persist ``graph`` as JSON.

    Returns:
        bool: True if the file changed on disk.
    """
    written = write_if_different(path, JsonExporter().export_json(graph))
    if written:
        logger.info("Graph saved to: %s", path)
    return written
