"""Exporter contract between a Graph and its renderers.

``Graph.export`` drives an exporter with a fixed call sequence: one
``set_direction`` call, then ``add_node`` for every node in insertion order,
then ``add_edge`` for every edge in insertion order. Exporters share no base
state; anything with these three methods qualifies.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class NodeHighlight(str, Enum):
    """How a node should stand out when rendered."""

    NORMAL = "normal"
    SEARCH_RESULT = "search_result"
    CURRENT_NODE = "current_node"


class Exporter(Protocol):
    """Pull-based visitor over a graph's direction, nodes and edges."""

    def set_direction(self, is_left_right: bool) -> None:
        ...

    def add_node(self, node_id: str, label: str, highlight: NodeHighlight) -> None:
        ...

    def add_edge(self, edge_id: str, from_id: str, to_id: str) -> None:
        ...
