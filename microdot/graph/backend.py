"""Index-based working graph for path algorithms.

Wraps a NetworkX MultiDiGraph whose vertices are dense integer indexes, with
a bidirectional map between those indexes and the Graph's string ids. It is
built fresh for every analysis so the Graph's own id space stays untouched.
"""

import logging
from typing import Dict, Iterator, List

import networkx as nx

from microdot.graph.manager import Graph

logger = logging.getLogger("microdot.graph.backend")


class IndexedGraph:
    """Integer-indexed mirror of a Graph's topology."""

    def __init__(self) -> None:
        """Start with no vertices; use from_graph to mirror a Graph."""
        self._graph = nx.MultiDiGraph()
        self._id_to_index: Dict[str, int] = {}
        self._index_to_id: Dict[int, str] = {}

    @classmethod
    def from_graph(cls, graph: Graph) -> "IndexedGraph":
        """Mirror the nodes and edges of ``graph``.

        Args:
            graph: Source graph.

        Returns:
            IndexedGraph: Working graph with one vertex per node.
        """
        indexed = cls()
        for node in graph.nodes():
            indexed.add_node(node.id)
        for edge in graph.edges():
            indexed.add_edge(edge.from_id, edge.to_id)
        logger.debug(
            "Built indexed graph: %d nodes, %d edges",
            indexed.node_count(),
            indexed.edge_count(),
        )
        return indexed

    def add_node(self, node_id: str) -> int:
        """Add a vertex for ``node_id``.

        Returns:
            int: The vertex index.
        """
        index = len(self._id_to_index)
        self._graph.add_node(index)
        self._id_to_index[node_id] = index
        self._index_to_id[index] = node_id
        return index

    def add_edge(self, from_id: str, to_id: str) -> int:
        """Add an edge between two mirrored node ids.

        Returns:
            int: Edge key among parallel edges.
        """
        return self._graph.add_edge(self._id_to_index[from_id], self._id_to_index[to_id])

    def index_of(self, node_id: str) -> int:
        return self._id_to_index[node_id]

    def id_of(self, index: int) -> str:
        return self._index_to_id[index]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_index

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def all_simple_paths(self, source_id: str, target_id: str) -> Iterator[List[str]]:
        """Yield every simple path from ``source_id`` to ``target_id`` as ids.

        A node is never its own path: when source and target coincide
        nothing is yielded.
        """
        if source_id == target_id:
            return
        source = self._id_to_index[source_id]
        target = self._id_to_index[target_id]
        for path in nx.all_simple_paths(self._graph, source, target):
            yield [self._index_to_id[index] for index in path]
