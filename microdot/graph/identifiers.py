"""Identifier allocation for graph nodes and edges.

Node ids look like ``n0, n1, ...`` and edge ids like ``e0, e1, ...``. Each
prefix has its own high-water mark that only ever grows, so an id is never
handed out twice during the life of a graph, even after deletions.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("microdot.graph.identifiers")

NODE_PREFIX = "n"
EDGE_PREFIX = "e"


class IdAllocator:
    """Monotonic id generator for one identifier prefix."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._high_water = 0

    @property
    def high_water(self) -> int:
        """Sequence number the next id will use."""
        return self._high_water

    def next_id(self) -> str:
        new_id = f"{self.prefix}{self._high_water}"
        self._high_water += 1
        return new_id

    def __repr__(self) -> str:
        return f"IdAllocator(prefix={self.prefix!r}, high_water={self._high_water})"
