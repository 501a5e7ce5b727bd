"""JSON persistence for graphs.

Document shape::

    {"nodes": [{"id": ..., "label": ...}],
     "edges": [{"from": ..., "to": ...}],
     "is_left_right": false}

Importing allocates fresh node ids and remaps edge endpoints, so a round
trip preserves labels, topology and direction but not necessarily ids.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from microdot.errors import GraphFormatError
from microdot.export.base import NodeHighlight
from microdot.graph.manager import Graph

logger = logging.getLogger("microdot.export.json")


class JsonNode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    label: str


class JsonEdge(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")


class JsonGraph(BaseModel):
    """Persisted graph document."""

    model_config = ConfigDict(extra="ignore")

    nodes: List[JsonNode] = Field(default_factory=list)
    edges: List[JsonEdge] = Field(default_factory=list)
    is_left_right: bool = False


class JsonExporter:
    """Exporter that collects a graph into a JsonGraph document."""

    def __init__(self) -> None:
        self._document = JsonGraph()

    def set_direction(self, is_left_right: bool) -> None:
        self._document.is_left_right = is_left_right

    def add_node(self, node_id: str, label: str, highlight: NodeHighlight) -> None:
        self._document.nodes.append(JsonNode(id=node_id, label=label))

    def add_edge(self, edge_id: str, from_id: str, to_id: str) -> None:
        self._document.edges.append(JsonEdge(from_id=from_id, to_id=to_id))

    @property
    def document(self) -> JsonGraph:
        return self._document

    def export_json(self, graph: Graph) -> str:
        """Serialise ``graph`` as pretty-printed JSON."""
        self._document = JsonGraph()
        graph.export(self)
        data = self._document.model_dump(by_alias=True)
        return json.dumps(data, indent=2, ensure_ascii=False)


class JsonImporter:
    """Builds a Graph from a persisted JSON document."""

    def __init__(self, content: str) -> None:
        self.content = content

    @classmethod
    def load(cls, path: Path) -> Graph:
        """Read and import a graph file.

        Raises:
            GraphFormatError: If the document is invalid.
            OSError: If the file cannot be read.
        """
        logger.info("Loading graph from %s", path)
        return cls(Path(path).read_text(encoding="utf-8")).import_graph()

    def import_graph(self) -> Graph:
        """Parse and validate the document into a new Graph.

        Raises:
            GraphFormatError: On malformed JSON, schema violations, or edges
                that name node ids missing from the document.
        """
        try:
            document = JsonGraph.model_validate_json(self.content)
        except ValidationError as exc:
            raise GraphFormatError(f"invalid graph document: {exc}") from exc

        graph = Graph()
        graph.set_direction(document.is_left_right)

        translate: Dict[str, str] = {}
        for node in document.nodes:
            new_id, _ = graph.insert_node(node.label)
            translate[node.id] = new_id

        for edge in document.edges:
            try:
                from_id = translate[edge.from_id]
                to_id = translate[edge.to_id]
            except KeyError as exc:
                raise GraphFormatError(
                    f"edge {edge.from_id} -> {edge.to_id} references unknown node {exc.args[0]}"
                ) from None
            graph.link_edge(from_id, to_id)

        logger.info("Imported %s", graph)
        return graph
