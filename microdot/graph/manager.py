"""In-memory graph and its command API.

Graph owns every node and edge of one diagram. All edits go through the
command methods below, each of which returns a CommandResult describing what
happened. A command that names an unknown node or edge reports it in the
result and changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from microdot.export.base import Exporter, NodeHighlight
from microdot.graph.commands import (
    CommandResult,
    DeleteNode,
    ExpandEdge,
    GraphCommand,
    InsertAfterNode,
    InsertBeforeNode,
    InsertNode,
    LinkEdge,
    RenameNode,
    Search,
    SelectNode,
    SetDirection,
    UnlinkEdge,
)
from microdot.graph.identifiers import EDGE_PREFIX, NODE_PREFIX, IdAllocator
from microdot.graph.labels import NodeAnnotations, parse_label
from microdot.graph.values import Value

logger = logging.getLogger("microdot.graph.manager")

ValueExtractor = Callable[["Node"], Optional[Value]]


@dataclass
class Node:
    """A labelled vertex. The label is replaced in place on rename."""

    id: str
    label: str

    def annotations(self) -> NodeAnnotations:
        return parse_label(self.label)


@dataclass(frozen=True)
class Edge:
    """A directed connection between two node ids."""

    id: str
    from_id: str
    to_id: str


class Graph:
    """A small labelled directed multigraph with stable identifiers.

    Self-loops and parallel edges are allowed. At the end of every command
    each edge's endpoints exist as nodes.
    """

    def __init__(self) -> None:
        self._node_ids = IdAllocator(NODE_PREFIX)
        self._edge_ids = IdAllocator(EDGE_PREFIX)
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._is_left_right = False
        self._current_search: Optional[str] = None
        self._current_node: Optional[str] = None

    def __str__(self) -> str:
        return f"Graph: {len(self._nodes)} nodes, {len(self._edges)} edges"

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_left_right(self) -> bool:
        return self._is_left_right

    @property
    def current_search(self) -> Optional[str]:
        return self._current_search

    @property
    def current_node(self) -> Optional[str]:
        return self._current_node

    @property
    def node_high_water(self) -> int:
        return self._node_ids.high_water

    @property
    def edge_high_water(self) -> int:
        return self._edge_ids.high_water

    def nodes(self) -> List[Node]:
        """Nodes in insertion order."""
        return list(self._nodes.values())

    def edges(self) -> List[Edge]:
        """Edges in insertion order."""
        return list(self._edges.values())

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def find_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def find_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def find_node_label(self, node_id: str) -> Optional[str]:
        node = self._nodes.get(node_id)
        return node.label if node is not None else None

    def node_annotations(self, node_id: str) -> Optional[NodeAnnotations]:
        node = self._nodes.get(node_id)
        return node.annotations() if node is not None else None

    def find_node_variable_value(self, node_id: str, name: str) -> Optional[Value]:
        """Look up a ``$name=value`` variable on a node's label.

        Args:
            node_id: Node identifier.
            name: Variable name without the ``$``.

        Returns:
            Optional[Value]: The value, or None if the node or variable is absent.
        """
        annotations = self.node_annotations(node_id)
        if annotations is None:
            return None
        return annotations.variable_value(name)

    def sources(self) -> List[str]:
        """Ids of nodes with no incoming edge, sorted by id."""
        targets = {edge.to_id for edge in self._edges.values()}
        return sorted(node_id for node_id in self._nodes if node_id not in targets)

    def sinks(self) -> List[str]:
        """Ids of nodes with no outgoing edge, sorted by id."""
        origins = {edge.from_id for edge in self._edges.values()}
        return sorted(node_id for node_id in self._nodes if node_id not in origins)

    def node_weights(self, extract: ValueExtractor) -> Dict[str, Optional[Value]]:
        """Map every node id to the value ``extract`` reads from it."""
        return {node_id: extract(node) for node_id, node in self._nodes.items()}

    def highlight_for(self, node: Node) -> NodeHighlight:
        """Search matches win over the current-node highlight."""
        if self._matches_current_search(node):
            return NodeHighlight.SEARCH_RESULT
        if node.id == self._current_node:
            return NodeHighlight.CURRENT_NODE
        return NodeHighlight.NORMAL

    def export(self, exporter: Exporter) -> None:
        """Drive an exporter over direction, nodes and edges."""
        exporter.set_direction(self._is_left_right)
        for node in self._nodes.values():
            exporter.add_node(node.id, node.label, self.highlight_for(node))
        for edge in self._edges.values():
            exporter.add_edge(edge.id, edge.from_id, edge.to_id)

    def iter_edges_touching(self, node_id: str) -> Iterator[Edge]:
        for edge in self._edges.values():
            if edge.from_id == node_id or edge.to_id == node_id:
                yield edge

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def apply_command(self, command: GraphCommand) -> CommandResult:
        """Dispatch a command value to its mutator.

        Raises:
            TypeError: If ``command`` is not a known command type.
        """
        if isinstance(command, InsertNode):
            return self.insert_node(command.label)[1]
        if isinstance(command, DeleteNode):
            return self.delete_node(command.id, command.keep_edges)
        if isinstance(command, LinkEdge):
            return self.link_edge(command.from_id, command.to_id)
        if isinstance(command, UnlinkEdge):
            return self.unlink_edge(command.id)
        if isinstance(command, RenameNode):
            return self.rename_node(command.id, command.label)
        if isinstance(command, SelectNode):
            return self.select_node(command.id)
        if isinstance(command, InsertAfterNode):
            return self.inject_after_node(command.id, command.label)
        if isinstance(command, InsertBeforeNode):
            return self.inject_before_node(command.id, command.label)
        if isinstance(command, ExpandEdge):
            return self.expand_edge(command.id, command.label)
        if isinstance(command, SetDirection):
            return self.set_direction(command.is_left_right)
        if isinstance(command, Search):
            return self.highlight_search_results(command.fragment)
        raise TypeError(f"Unsupported graph command: {command!r}")

    def insert_node(self, label: str) -> Tuple[str, CommandResult]:
        """Add a node and make it the current node.

        Args:
            label: Raw label text.

        Returns:
            Tuple[str, CommandResult]: The new node id and the result.
        """
        node_id = self._node_ids.next_id()
        self._nodes[node_id] = Node(node_id, label)
        self._current_node = node_id
        logger.debug("Inserted node %s", node_id)
        return node_id, CommandResult(f"inserted node {node_id}: '{label}'")

    def delete_node(self, node_id: str, keep_edges: bool = False) -> CommandResult:
        """Remove a node and every edge touching it.

        Args:
            node_id: Node to remove.
            keep_edges: When True, link every predecessor of the node to
                every successor so connectivity through it survives.
        """
        if node_id not in self._nodes:
            return CommandResult.failure(f"node {node_id} not found")

        touching = list(self.iter_edges_touching(node_id))
        predecessors = sorted({e.from_id for e in touching if e.from_id != node_id})
        successors = sorted({e.to_id for e in touching if e.to_id != node_id})

        for edge in touching:
            del self._edges[edge.id]
        del self._nodes[node_id]

        if self._current_node == node_id:
            self._current_node = None

        if keep_edges:
            for from_id in predecessors:
                for to_id in successors:
                    self._add_edge(from_id, to_id)

        logger.debug(
            "Deleted node %s with %d edges (keep_edges=%s)",
            node_id,
            len(touching),
            keep_edges,
        )
        return CommandResult(f"node {node_id} removed")

    def link_edge(self, from_id: str, to_id: str) -> CommandResult:
        """Create an edge between two existing nodes."""
        if from_id not in self._nodes:
            return CommandResult.failure(f"source node {from_id} not found")
        if to_id not in self._nodes:
            return CommandResult.failure(f"target node {to_id} not found")

        edge = self._add_edge(from_id, to_id)
        return CommandResult(f"Added edge {edge.id} from {from_id} to {to_id}")

    def unlink_edge(self, edge_id: str) -> CommandResult:
        if edge_id not in self._edges:
            return CommandResult.failure(f"edge {edge_id} not found")

        del self._edges[edge_id]
        logger.debug("Removed edge %s", edge_id)
        return CommandResult(f"edge {edge_id} removed")

    def rename_node(self, node_id: str, label: str) -> CommandResult:
        node = self._nodes.get(node_id)
        if node is None:
            return CommandResult.failure(f"Could not find node {node_id}")

        node.label = label
        self._current_node = node_id
        logger.debug("Renamed node %s", node_id)
        return CommandResult(f"Node {node_id} renamed to '{label}'")

    def select_node(self, node_id: str) -> CommandResult:
        if node_id not in self._nodes:
            return CommandResult.failure(f"node {node_id} not found")

        self._current_node = node_id
        return CommandResult(f"node {node_id} selected")

    def inject_after_node(self, from_id: str, label: str) -> CommandResult:
        """Insert a new node linked from ``from_id``."""
        if from_id not in self._nodes:
            return CommandResult.failure(f"source node {from_id} not found")

        new_id, _ = self.insert_node(label)
        self._add_edge(from_id, new_id)
        return CommandResult(f"inserted node {new_id}: '{label}' after {from_id}")

    def inject_before_node(self, to_id: str, label: str) -> CommandResult:
        """Insert a new node linked to ``to_id``."""
        if to_id not in self._nodes:
            return CommandResult.failure(f"target node {to_id} not found")

        new_id, _ = self.insert_node(label)
        self._add_edge(new_id, to_id)
        return CommandResult(f"inserted node {new_id}: '{label}' before {to_id}")

    def expand_edge(self, edge_id: str, label: str) -> CommandResult:
        """Replace an edge with a new node sitting between its endpoints."""
        edge = self._edges.get(edge_id)
        if edge is None:
            return CommandResult.failure(f"edge {edge_id} not found")

        del self._edges[edge_id]
        new_id, _ = self.insert_node(label)
        self._add_edge(edge.from_id, new_id)
        self._add_edge(new_id, edge.to_id)
        return CommandResult(
            f"injected {new_id}: '{label}' between {edge.from_id} and {edge.to_id}"
        )

    def highlight_search_results(self, fragment: str) -> CommandResult:
        """Highlight nodes whose raw label contains ``fragment``.

        The match is a case-sensitive substring test. The result lists the
        matching nodes sorted by id.
        """
        self._current_search = fragment

        matches = sorted(
            (node for node in self._nodes.values() if self._matches_current_search(node)),
            key=lambda node: node.id,
        )
        lines = "\n".join(f"{node.id}: {node.label}" for node in matches)
        logger.debug("Search for %r matched %d nodes", fragment, len(matches))
        return CommandResult(f"Search results for: {fragment},\n{lines}\n")

    def set_direction(self, is_left_right: bool) -> CommandResult:
        self._is_left_right = is_left_right
        return CommandResult(
            f"Direction changed to {'LR' if is_left_right else 'TB'}"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add_edge(self, from_id: str, to_id: str) -> Edge:
        edge = Edge(self._edge_ids.next_id(), from_id, to_id)
        self._edges[edge.id] = edge
        logger.debug("Added edge %s: %s -> %s", edge.id, from_id, to_id)
        return edge

    def _matches_current_search(self, node: Node) -> bool:
        if self._current_search is None:
            return False
        return self._current_search in node.label
