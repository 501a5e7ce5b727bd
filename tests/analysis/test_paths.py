"""Tests for source-to-sink path selection and cost aggregation."""

import itertools
from typing import Dict, Tuple

from microdot.analysis.paths import (
    CostCalculator,
    Path,
    enumerate_paths,
    find_cost,
    find_longest_path,
    find_shortest_path,
    path_cost,
)
from microdot.graph.manager import Graph
from microdot.graph.values import MIXED_TYPES, Duration, Value


def _build(labels: Dict[str, str], edges) -> Tuple[Graph, Dict[str, str]]:
    """Insert named nodes and link them; returns name -> node id."""
    graph = Graph()
    ids = {name: graph.insert_node(label)[0] for name, label in labels.items()}
    for from_name, to_name in edges:
        graph.link_edge(ids[from_name], ids[to_name])
    return graph, ids


def _diamond(costs: Dict[str, str]) -> Tuple[Graph, Dict[str, str]]:
    """q1 -> s1 -> q4 and q1 -> q2 -> q3 -> q4."""
    labels = {
        name: f"{name} {costs.get(name, '')}".strip()
        for name in ("q1", "s1", "q2", "q3", "q4")
    }
    return _build(
        labels,
        [("q1", "s1"), ("s1", "q4"), ("q1", "q2"), ("q2", "q3"), ("q3", "q4")],
    )


def test_most_negative_path_is_shortest() -> None:
    """Negative weights select the heavy branch as the cheapest path."""
    graph, ids = _diamond(
        {"q1": "$cost=-1", "s1": "$cost=-10", "q2": "$cost=-1", "q3": "$cost=-1", "q4": "$cost=-1"}
    )

    path = find_shortest_path(graph, CostCalculator("cost"))

    assert path.ids == [ids["q1"], ids["s1"], ids["q4"]]
    assert path.cost == Value.number(-12)


def test_longest_path_by_cost() -> None:
    """The longest path maximises the summed cost."""
    graph, ids = _diamond(
        {"q1": "$cost=-1", "s1": "$cost=-10", "q2": "$cost=-1", "q3": "$cost=-1", "q4": "$cost=-1"}
    )

    path = find_longest_path(graph, CostCalculator("cost"))

    assert path.ids == [ids["q1"], ids["q2"], ids["q3"], ids["q4"]]
    assert path.cost == Value.number(-4)


def test_without_costs_length_breaks_ties() -> None:
    """With no variables, shortest prefers fewer nodes and longest more."""
    graph, ids = _diamond({})
    graph.link_edge(ids["q1"], ids["q4"])

    shortest = find_shortest_path(graph, CostCalculator("cost"))
    longest = find_longest_path(graph, CostCalculator("cost"))

    assert shortest.ids == [ids["q1"], ids["q4"]]
    assert shortest.cost is None
    assert len(longest) == 4
    assert longest.cost is None


def test_duration_costs() -> None:
    """Durations compare by minutes."""
    graph, ids = _build(
        {"a": "start", "fast": "fast $t=10m", "slow": "slow $t=1d", "z": "end"},
        [("a", "fast"), ("fast", "z"), ("a", "slow"), ("slow", "z")],
    )

    longest = find_longest_path(graph, CostCalculator("t"))
    shortest = find_shortest_path(graph, CostCalculator("t"))

    assert longest.ids == [ids["a"], ids["slow"], ids["z"]]
    assert longest.cost == Value.duration(Duration.of(1, "d"))
    assert shortest.ids == [ids["a"], ids["fast"], ids["z"]]
    assert str(shortest.cost) == "10 minutes"


def _chains(order) -> Graph:
    """Disjoint chains inserted in the given order; node labels name the chain."""
    chains = {
        "ten": ["ten-a $cost=10m", "ten-b"],
        "free": ["free-a", "free-b", "free-c"],
        "five": ["five-a", "five-b $cost=5m", "five-c", "five-d"],
    }
    graph = Graph()
    for name in order:
        ids = [graph.insert_node(label)[0] for label in chains[name]]
        for from_id, to_id in zip(ids, ids[1:]):
            graph.link_edge(from_id, to_id)
    return graph


def _chain_name(graph: Graph, path: Path) -> str:
    return graph.find_node(path.ids[0]).label.split("-")[0]


def test_uncosted_path_ranks_against_duration_costs() -> None:
    """A path with no cost sorts as a zero duration whatever the insertion order."""
    for order in itertools.permutations(["ten", "free", "five"]):
        graph = _chains(order)

        shortest = find_shortest_path(graph, CostCalculator("cost"))
        longest = find_longest_path(graph, CostCalculator("cost"))

        assert _chain_name(graph, shortest) == "free"
        assert len(shortest) == 3
        assert shortest.cost is None
        assert _chain_name(graph, longest) == "ten"
        assert str(longest.cost) == "10 minutes"


def test_nan_cost_sorts_last() -> None:
    """A NaN-costed path is never the cheapest and always the dearest."""
    graph, ids = _build(
        {"a": "a", "x": "x $cost=NaN", "y": "y $cost=5", "z": "z"},
        [("a", "x"), ("x", "z"), ("a", "y"), ("y", "z")],
    )

    shortest = find_shortest_path(graph, CostCalculator("cost"))

    assert shortest.ids == [ids["a"], ids["y"], ids["z"]]
    assert shortest.cost == Value.number(5)


def test_empty_and_edgeless_graphs_have_no_path() -> None:
    """Isolated nodes are both source and sink but form no path."""
    empty = Graph()
    single = Graph()
    single.insert_node("alone $cost=3")

    for graph in (empty, single):
        for finder in (find_shortest_path, find_longest_path):
            path = finder(graph, CostCalculator("cost"))
            assert path == Path()
            assert path.is_empty
            assert path.cost is None


def test_cycle_without_sources_has_no_path() -> None:
    """A pure cycle has neither sources nor sinks."""
    graph, _ = _build({"a": "a", "b": "b"}, [("a", "b"), ("b", "a")])

    assert enumerate_paths(graph) == []
    assert find_longest_path(graph, CostCalculator("cost")).is_empty


def test_path_cost_distinguishes_missing_from_zero() -> None:
    """No valued node means no cost; a zero value is still a cost."""
    weights = {"n0": None, "n1": Value.number(0), "n2": None}

    assert path_cost(["n0", "n2"], weights) is None
    assert path_cost(["n0", "n1"], weights) == Value.number(0)


def test_find_cost_sums_every_node() -> None:
    """Whole-graph cost ignores structure."""
    graph, _ = _build(
        {"a": "a $cost=1", "b": "b $cost=2", "c": "c", "d": "d $cost=4"},
        [("a", "b")],
    )

    assert find_cost(graph, CostCalculator("cost")) == Value.number(7)
    assert find_cost(Graph(), CostCalculator("cost")) == Value.zero()


def test_find_cost_mixed_kinds() -> None:
    """Mixing numbers and durations yields the mixed-types sentinel."""
    graph, _ = _build({"a": "a $cost=1", "b": "b $cost=2h"}, [])

    assert find_cost(graph, CostCalculator("cost")) == Value.string(MIXED_TYPES)


def test_cost_calculator_reads_named_variable() -> None:
    """The calculator reads only its own variable."""
    graph = Graph()
    graph.insert_node("job $cost=3 $risk=high")
    node = graph.find_node("n0")

    assert CostCalculator("cost")(node) == Value.number(3)
    assert CostCalculator("risk")(node) == Value.string("high")
    assert CostCalculator("missing")(node) is None
