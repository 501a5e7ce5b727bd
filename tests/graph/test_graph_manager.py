"""Tests for the Graph command API."""

from microdot.export.base import NodeHighlight
from microdot.graph.manager import Graph


def _chain(*labels: str) -> Graph:
    """Build a graph whose nodes are linked in label order."""
    graph = Graph()
    ids = [graph.insert_node(label)[0] for label in labels]
    for from_id, to_id in zip(ids, ids[1:]):
        graph.link_edge(from_id, to_id)
    return graph


def test_insert_allocates_sequential_ids() -> None:
    """Nodes are numbered n0, n1, ... and become current."""
    graph = Graph()

    node_id, result = graph.insert_node("first")
    second_id, _ = graph.insert_node("second")

    assert node_id == "n0"
    assert second_id == "n1"
    assert str(result) == "inserted node n0: 'first'"
    assert result.ok
    assert graph.current_node == "n1"
    assert str(graph) == "Graph: 2 nodes, 0 edges"


def test_ids_are_never_reused() -> None:
    """Deleting the newest node does not free its id."""
    graph = Graph()
    graph.insert_node("a")
    graph.insert_node("b")
    graph.delete_node("n1")

    node_id, _ = graph.insert_node("c")

    assert node_id == "n2"
    assert graph.node_high_water == 3


def test_link_and_unlink() -> None:
    """Edges get their own id sequence and can be removed by id."""
    graph = _chain("a", "b")

    assert graph.find_edge("e0").from_id == "n0"
    assert str(graph.link_edge("n1", "n0")) == "Added edge e1 from n1 to n0"
    assert str(graph.unlink_edge("e0")) == "edge e0 removed"
    assert not graph.has_edge("e0")
    assert graph.edge_count() == 1
    assert graph.edge_high_water == 2


def test_link_reports_missing_endpoints() -> None:
    """Linking to unknown nodes changes nothing."""
    graph = _chain("a")

    source_missing = graph.link_edge("n9", "n0")
    target_missing = graph.link_edge("n0", "n9")

    assert str(source_missing) == "source node n9 not found"
    assert str(target_missing) == "target node n9 not found"
    assert not source_missing.ok
    assert graph.edge_count() == 0
    assert graph.edge_high_water == 0


def test_self_loops_and_parallel_edges_are_allowed() -> None:
    """The graph is a multigraph."""
    graph = _chain("a", "b")
    graph.link_edge("n0", "n1")
    graph.link_edge("n0", "n0")

    assert graph.edge_count() == 3


def test_delete_removes_touching_edges() -> None:
    """Deleting a node takes every incident edge with it."""
    graph = _chain("a", "b", "c")

    result = graph.delete_node("n1")

    assert str(result) == "node n1 removed"
    assert graph.edge_count() == 0
    assert [node.id for node in graph.nodes()] == ["n0", "n2"]


def test_delete_keep_edges_bridges_neighbours() -> None:
    """With keep_edges every predecessor is linked to every successor."""
    graph = Graph()
    for label in ("p1", "p2", "mid", "s1", "s2"):
        graph.insert_node(label)
    graph.link_edge("n0", "n2")
    graph.link_edge("n1", "n2")
    graph.link_edge("n2", "n3")
    graph.link_edge("n2", "n4")

    graph.delete_node("n2", keep_edges=True)

    pairs = sorted((edge.from_id, edge.to_id) for edge in graph.edges())
    assert pairs == [("n0", "n3"), ("n0", "n4"), ("n1", "n3"), ("n1", "n4")]
    assert all(edge.id not in {"e0", "e1", "e2", "e3"} for edge in graph.edges())


def test_delete_keep_edges_ignores_self_loop() -> None:
    """A self-loop on the removed node does not create edges."""
    graph = _chain("a", "b", "c")
    graph.link_edge("n1", "n1")

    graph.delete_node("n1", keep_edges=True)

    assert [(edge.from_id, edge.to_id) for edge in graph.edges()] == [("n0", "n2")]


def test_delete_missing_node() -> None:
    """Unknown ids are reported, not raised."""
    graph = Graph()

    result = graph.delete_node("n9")

    assert str(result) == "node n9 not found"
    assert not result.ok


def test_delete_clears_current_node() -> None:
    """The current node reference never dangles."""
    graph = _chain("a")

    graph.delete_node("n0")

    assert graph.current_node is None


def test_rename_and_select() -> None:
    """Renaming replaces the label and selects the node."""
    graph = _chain("a", "b")

    assert str(graph.rename_node("n0", "alpha")) == "Node n0 renamed to 'alpha'"
    assert graph.find_node_label("n0") == "alpha"
    assert graph.current_node == "n0"
    assert str(graph.rename_node("n9", "x")) == "Could not find node n9"

    assert str(graph.select_node("n1")) == "node n1 selected"
    assert graph.current_node == "n1"
    assert str(graph.select_node("n9")) == "node n9 not found"
    assert graph.current_node == "n1"


def test_inject_after_and_before() -> None:
    """Injected nodes are linked to the reference node."""
    graph = _chain("a")

    after = graph.inject_after_node("n0", "later")
    before = graph.inject_before_node("n0", "earlier")

    assert str(after) == "inserted node n1: 'later' after n0"
    assert str(before) == "inserted node n2: 'earlier' before n0"
    pairs = [(edge.from_id, edge.to_id) for edge in graph.edges()]
    assert pairs == [("n0", "n1"), ("n2", "n0")]
    assert str(graph.inject_after_node("n9", "x")) == "source node n9 not found"
    assert str(graph.inject_before_node("n9", "x")) == "target node n9 not found"
    assert graph.node_count() == 3


def test_expand_edge_splits_it() -> None:
    """Expanding replaces an edge with a node and two new edges."""
    graph = _chain("a", "b")

    result = graph.expand_edge("e0", "middle")

    assert str(result) == "injected n2: 'middle' between n0 and n1"
    assert not graph.has_edge("e0")
    pairs = [(edge.id, edge.from_id, edge.to_id) for edge in graph.edges()]
    assert pairs == [("e1", "n0", "n2"), ("e2", "n2", "n1")]
    assert str(graph.expand_edge("e9", "x")) == "edge e9 not found"


def test_search_lists_matches_sorted_by_id() -> None:
    """Search is a case-sensitive substring match on the raw label."""
    graph = _chain("apple pie", "Apple", "pineapple $cost=1")

    result = graph.highlight_search_results("apple")

    assert str(result) == (
        "Search results for: apple,\nn0: apple pie\nn2: pineapple $cost=1\n"
    )
    assert graph.current_search == "apple"


def test_highlight_prefers_search_over_current() -> None:
    """A node that is both current and a search hit renders as a hit."""
    graph = _chain("alpha", "beta")
    graph.highlight_search_results("beta")

    nodes = {node.id: node for node in graph.nodes()}
    assert graph.highlight_for(nodes["n1"]) is NodeHighlight.SEARCH_RESULT
    graph.select_node("n0")
    assert graph.highlight_for(nodes["n0"]) is NodeHighlight.CURRENT_NODE
    graph.highlight_search_results("zzz")
    assert graph.highlight_for(nodes["n1"]) is NodeHighlight.NORMAL


def test_set_direction() -> None:
    """The direction flag reports LR or TB."""
    graph = Graph()

    assert str(graph.set_direction(True)) == "Direction changed to LR"
    assert graph.is_left_right
    assert str(graph.set_direction(False)) == "Direction changed to TB"


def test_sources_and_sinks_sorted() -> None:
    """Sources have no incoming edges, sinks no outgoing edges."""
    graph = Graph()
    for label in ("a", "b", "c", "d"):
        graph.insert_node(label)
    graph.link_edge("n2", "n0")
    graph.link_edge("n1", "n0")

    assert graph.sources() == ["n1", "n2", "n3"]
    assert graph.sinks() == ["n0", "n3"]


def test_find_node_variable_value() -> None:
    """Variables are read from the current label."""
    graph = _chain("task $cost=3")

    assert str(graph.find_node_variable_value("n0", "cost")) == "3"
    assert graph.find_node_variable_value("n0", "other") is None
    assert graph.find_node_variable_value("n9", "cost") is None

    graph.rename_node("n0", "task $cost=4")
    assert str(graph.find_node_variable_value("n0", "cost")) == "4"


class _RecordingExporter:
    def __init__(self) -> None:
        self.calls = []

    def set_direction(self, is_left_right: bool) -> None:
        self.calls.append(("direction", is_left_right))

    def add_node(self, node_id: str, label: str, highlight: NodeHighlight) -> None:
        self.calls.append(("node", node_id, label, highlight))

    def add_edge(self, edge_id: str, from_id: str, to_id: str) -> None:
        self.calls.append(("edge", edge_id, from_id, to_id))


def test_export_visits_direction_nodes_then_edges() -> None:
    """Exporters see direction first, then nodes and edges in insertion order."""
    graph = _chain("a", "b")
    exporter = _RecordingExporter()

    graph.export(exporter)

    assert exporter.calls == [
        ("direction", False),
        ("node", "n0", "a", NodeHighlight.NORMAL),
        ("node", "n1", "b", NodeHighlight.CURRENT_NODE),
        ("edge", "e0", "n0", "n1"),
    ]
