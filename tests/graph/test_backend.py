"""Tests for the integer-indexed working graph."""

from microdot.graph.backend import IndexedGraph
from microdot.graph.manager import Graph


def _graph() -> Graph:
    graph = Graph()
    for label in ("a", "b", "c"):
        graph.insert_node(label)
    graph.delete_node("n1")
    graph.insert_node("d")
    graph.link_edge("n0", "n2")
    graph.link_edge("n2", "n3")
    graph.link_edge("n0", "n3")
    graph.link_edge("n0", "n3")
    return graph


def test_from_graph_maps_ids_to_dense_indexes() -> None:
    """Indexes are dense even when node ids have gaps."""
    indexed = IndexedGraph.from_graph(_graph())

    assert indexed.node_count() == 3
    assert indexed.edge_count() == 4
    assert [indexed.index_of(node_id) for node_id in ("n0", "n2", "n3")] == [0, 1, 2]
    assert indexed.id_of(2) == "n3"
    assert indexed.has_node("n2")
    assert not indexed.has_node("n1")


def test_all_simple_paths_yields_ids() -> None:
    """Paths come back as node ids; parallel edges may repeat a path."""
    indexed = IndexedGraph.from_graph(_graph())

    paths = list(indexed.all_simple_paths("n0", "n3"))

    assert ["n0", "n2", "n3"] in paths
    assert ["n0", "n3"] in paths
    assert {tuple(path) for path in paths} == {("n0", "n2", "n3"), ("n0", "n3")}


def test_node_is_not_its_own_path() -> None:
    """Source equal to target yields nothing."""
    indexed = IndexedGraph.from_graph(_graph())

    assert list(indexed.all_simple_paths("n0", "n0")) == []
