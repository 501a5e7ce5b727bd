"""Graphviz (DOT) export for graphs.

The exporter collects nodes and edges into a NetworkX MultiDiGraph with DOT
attributes, converts it with pydot, and wraps nodes that share a subgraph
marker in a ``cluster_`` subgraph.
"""

import logging
import re
import textwrap
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

import networkx as nx
import pydot
from networkx.drawing.nx_pydot import to_pydot

from microdot.export.base import NodeHighlight
from microdot.export.palette import SEARCH_RESULT_FILL, WHITE, Palette
from microdot.graph.labels import parse_label
from microdot.graph.manager import Graph

logger = logging.getLogger("microdot.export.dot")

_CLUSTER_NAME_RE = re.compile(r"[^A-Za-z0-9_]")


class DisplayMode(str, Enum):
    """Interactive renders show ids; presentation renders hide them."""

    INTERACTIVE = "interactive"
    PRESENTATION = "presentation"


def escape_label(text: str) -> str:
    """Quote text as a DOT string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class DotExporter:
    """Exporter producing DOT source."""

    def __init__(
        self,
        display_mode: DisplayMode = DisplayMode.INTERACTIVE,
        palette: Optional[Palette] = None,
        wrap_width: int = 40,
    ) -> None:
        self.display_mode = display_mode
        self.palette = palette or Palette()
        self.wrap_width = wrap_width
        self._reset()

    def _reset(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._is_left_right = False
        self._subgraphs: Dict[str, List[str]] = {}

    @property
    def interactive(self) -> bool:
        return self.display_mode is DisplayMode.INTERACTIVE

    def set_direction(self, is_left_right: bool) -> None:
        self._is_left_right = is_left_right

    def add_node(self, node_id: str, label: str, highlight: NodeHighlight) -> None:
        annotations = parse_label(label)
        tags = annotations.sorted_tags()

        lines = []
        if self.interactive:
            lines.append(node_id)
        if annotations.display_text:
            lines.append(textwrap.fill(annotations.display_text, self.wrap_width))
        if tags:
            lines.append(" ".join(str(tag) for tag in tags))

        fill = SEARCH_RESULT_FILL if highlight is NodeHighlight.SEARCH_RESULT else WHITE
        style = "filled,bold" if highlight is NodeHighlight.CURRENT_NODE else "filled"
        border = self.palette.tag_color(tags[0]) if tags else self.palette.stroke_color

        self._graph.add_node(
            node_id,
            label=escape_label("\n".join(lines)),
            style=escape_label(style),
            fillcolor=escape_label(fill),
            color=escape_label(border),
        )

        if annotations.subgraph is not None:
            self._subgraphs.setdefault(annotations.subgraph.name, []).append(node_id)

    def add_edge(self, edge_id: str, from_id: str, to_id: str) -> None:
        attrs = {"label": edge_id} if self.interactive else {}
        self._graph.add_edge(from_id, to_id, key=edge_id, **attrs)

    def export_dot(self, graph: Graph) -> str:
        """Render ``graph`` as DOT source."""
        self._reset()
        graph.export(self)

        self._graph.graph["graph"] = {"rankdir": "LR" if self._is_left_right else "TB"}
        self._graph.graph["node"] = {"shape": "box"}
        self._graph.graph["edge"] = {"color": escape_label(self.palette.stroke_color)}

        dot = to_pydot(self._graph)
        # to_pydot copies the multigraph key onto each edge; DOT has no such attribute
        for edge in dot.get_edges():
            edge.get_attributes().pop("key", None)

        for name, members in self._subgraphs.items():
            cluster = pydot.Cluster(
                _CLUSTER_NAME_RE.sub("_", name), label=escape_label(name)
            )
            for node_id in members:
                dot.del_node(node_id)
                cluster.add_node(pydot.Node(node_id, **self._graph.nodes[node_id]))
            dot.add_subgraph(cluster)

        logger.debug(
            "Rendered DOT with %d nodes, %d edges, %d clusters",
            self._graph.number_of_nodes(),
            self._graph.number_of_edges(),
            len(self._subgraphs),
        )
        return dot.to_string()


def export_dot(graph: Graph, output_path: Path, exporter: Optional[DotExporter] = None) -> None:
    """Export graph to DOT format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
        exporter: Configured exporter; interactive defaults when omitted.
    """
    logger.info("Exporting graph to DOT: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    content = (exporter or DotExporter()).export_dot(graph)
    output_path.write_text(content, encoding="utf-8")

    logger.info("DOT export completed: %d nodes, %d edges",
                graph.node_count(), graph.edge_count())
