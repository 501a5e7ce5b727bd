"""Path and cost analysis over node variables.

Every simple path from every source to every sink is enumerated and costed
by summing a per-node Value. Enumeration is exponential in the worst case;
it is meant for hand-drawn diagrams of a few dozen nodes and has no size
guard.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from microdot.graph.backend import IndexedGraph
from microdot.graph.manager import Graph, Node, ValueExtractor
from microdot.graph.values import Value

logger = logging.getLogger("microdot.analysis.paths")


@dataclass(frozen=True)
class Path:
    """A selected path and its cost.

    ``cost`` is None when no node on the path carried a value, which is not
    the same as a zero cost.
    """

    ids: List[str] = field(default_factory=list)
    cost: Optional[Value] = None

    def __len__(self) -> int:
        return len(self.ids)

    @property
    def is_empty(self) -> bool:
        return not self.ids


class CostCalculator:
    """Reads one named variable from a node's label."""

    def __init__(self, variable_name: str) -> None:
        self.variable_name = variable_name

    def __call__(self, node: Node) -> Optional[Value]:
        return node.annotations().variable_value(self.variable_name)

    def __repr__(self) -> str:
        return f"CostCalculator({self.variable_name!r})"


def path_cost(ids: List[str], weights: Dict[str, Optional[Value]]) -> Optional[Value]:
    """Sum the known weights along a path; None if there are none."""
    costs = [weights[node_id] for node_id in ids if weights.get(node_id) is not None]
    if not costs:
        return None
    return Value.sum(costs)


def enumerate_paths(graph: Graph) -> List[List[str]]:
    """All simple paths between every (source, sink) pair."""
    indexed = IndexedGraph.from_graph(graph)
    sinks = graph.sinks()

    paths: List[List[str]] = []
    for source in graph.sources():
        for sink in sinks:
            paths.extend(indexed.all_simple_paths(source, sink))

    logger.debug("Enumerated %d candidate paths", len(paths))
    return paths


def _compare_keys(a: Tuple[Value, int], b: Tuple[Value, int]) -> int:
    by_cost = a[0].compare(b[0])
    if by_cost:
        return by_cost
    return (a[1] > b[1]) - (a[1] < b[1])


def find_path(graph: Graph, extract: ValueExtractor, shortest: bool) -> Path:
    """Select the cheapest (or dearest) path through the graph.

    Candidates are ordered by cost, then by length. Paths without any
    valued node count as the zero of the kind the other paths are costed
    in, so a zero duration among duration costs. For the longest path both
    cost and length are negated, so ties go to the longer candidate; for
    the shortest path ties go to the shorter one.

    Args:
        graph: Graph to analyse.
        extract: Reads a node's cost, or None when it has none.
        shortest: True for the cheapest path, False for the dearest.

    Returns:
        Path: The chosen path, or an empty path when none exists.
    """
    weights = graph.node_weights(extract)
    candidates = enumerate_paths(graph)
    if not candidates:
        logger.info("No source-to-sink paths found")
        return Path()

    costs = {tuple(ids): path_cost(ids, weights) for ids in candidates}
    known = [cost for cost in costs.values() if cost is not None]
    zero = Value.zero_of(known[0].kind) if known else Value.zero()

    def sort_key(ids: List[str]) -> Tuple[Value, int]:
        cost = costs[tuple(ids)]
        if cost is None:
            cost = zero
        if shortest:
            return cost, len(ids)
        return -cost, -len(ids)

    keyed = [(sort_key(ids), ids) for ids in candidates]
    keyed.sort(key=functools.cmp_to_key(lambda a, b: _compare_keys(a[0], b[0])))

    best = keyed[0][1]
    cost = costs[tuple(best)]
    logger.info(
        "Selected %s path of %d nodes (cost=%s) from %d candidates",
        "shortest" if shortest else "longest",
        len(best),
        cost,
        len(candidates),
    )
    return Path(ids=list(best), cost=cost)


def find_shortest_path(graph: Graph, extract: ValueExtractor) -> Path:
    return find_path(graph, extract, shortest=True)


def find_longest_path(graph: Graph, extract: ValueExtractor) -> Path:
    """Critical path: the dearest source-to-sink path."""
    return find_path(graph, extract, shortest=False)


def find_cost(graph: Graph, extract: ValueExtractor) -> Value:
    """Sum the extracted value over every node, ignoring structure."""
    weights = graph.node_weights(extract)
    return Value.sum(value for value in weights.values() if value is not None)
