"""Tests for graph.py data model and edge resolution."""

import math

import pytest

from graph_visualizer.graph import (
    Edge,
    GraphValidationError,
    LayoutError,
    Node,
    build_label_index,
    build_layout_graph,
    check_finite,
    count_connections,
    graph_density,
    parse_graph,
    resolve_edges,
)


class TestParseGraph:
    """Tests for parse_graph function."""

    def test_parses_nodes_and_edges(self, small_payload):
        """Nodes keep id and label; edges map from/to onto source/target."""
        graph = parse_graph(small_payload)

        assert [n.label for n in graph.nodes] == ["A", "B", "C", "D"]
        assert graph.edges[0] == Edge(id=1, source="A", target="B")
        assert not graph.has_positions

    def test_positions_parsed(self, positioned_payload):
        """Node positions are read as float tuples."""
        graph = parse_graph(positioned_payload)

        assert graph.nodes[1].position == (200.0, 0.0)
        assert graph.has_positions

    @pytest.mark.parametrize(
        "payload",
        [
            {"edges": []},
            {"nodes": []},
            {"nodes": None, "edges": []},
            [],
        ],
    )
    def test_missing_nodes_or_edges_rejected(self, payload):
        """Missing nodes or edges is a validation error."""
        with pytest.raises(GraphValidationError):
            parse_graph(payload)

    def test_empty_lists_accepted(self):
        """Empty lists are present, so they are valid."""
        graph = parse_graph({"nodes": [], "edges": []})

        assert graph.nodes == []
        assert graph.edges == []

    def test_node_without_label_kept(self):
        graph = parse_graph({"nodes": [{"id": 1}], "edges": []})

        assert graph.nodes == [Node(1, None)]

    def test_node_without_id_uses_index(self):
        graph = parse_graph({"nodes": [{"label": "A"}, {"id": None, "label": "B"}], "edges": []})

        assert [n.id for n in graph.nodes] == [0, 1]

    def test_edge_without_endpoint_dropped(self):
        """A missing 'to' is kept as None and never resolves to a node."""
        graph = parse_graph({"nodes": [{"id": 1, "label": "A"}], "edges": [{"id": 1, "from": "A"}]})

        assert graph.edges == [Edge(1, "A", None)]
        assert resolve_edges(graph.nodes, graph.edges) == []

    def test_unlabelled_node_does_not_match_missing_endpoint(self):
        graph = parse_graph({"nodes": [{"id": 1}], "edges": [{"id": 1}]})

        assert resolve_edges(graph.nodes, graph.edges) == []

    @pytest.mark.parametrize("entries", [{"nodes": ["A"], "edges": []}, {"nodes": [], "edges": [3]}])
    def test_non_object_entry_rejected(self, entries):
        with pytest.raises(GraphValidationError, match="must be an object"):
            parse_graph(entries)

    def test_invalid_position_rejected(self):
        payload = {"nodes": [{"id": 1, "label": "A", "position": {"x": 1}}], "edges": []}
        with pytest.raises(GraphValidationError, match="invalid position"):
            parse_graph(payload)

    def test_node_ceiling(self, large_payload):
        """More nodes than max_nodes is rejected before any work is done."""
        with pytest.raises(GraphValidationError, match="limit is 5"):
            parse_graph(large_payload, max_nodes=5)


class TestResolveEdges:
    """Tests for label-based edge resolution."""

    def test_first_label_match_wins(self):
        """With duplicate labels, the first node is the one edges attach to."""
        nodes = [Node(1, "A"), Node(2, "A"), Node(3, "B")]

        index = build_label_index(nodes)

        assert index["A"].id == 1

    def test_unknown_labels_dropped(self):
        """Edges with an unknown endpoint are dropped without error."""
        nodes = [Node(1, "A"), Node(2, "B")]
        edges = [Edge(1, "A", "B"), Edge(2, "A", "Z"), Edge(3, "Y", "B")]

        resolved = resolve_edges(nodes, edges)

        assert [e.id for e, _, _ in resolved] == [1]

    def test_layout_graph_keeps_parallel_edges(self):
        """Each input edge is its own graph edge, keyed by node id."""
        nodes = [Node("x", "A"), Node("y", "B")]
        edges = [Edge(1, "A", "B"), Edge(2, "A", "B"), Edge(3, "B", "missing")]

        G = build_layout_graph(nodes, edges)

        assert G.number_of_nodes() == 2
        assert G.number_of_edges("x", "y") == 2
        assert G.number_of_edges() == 2
        assert G.nodes["x"]["label"] == "A"


class TestMetrics:
    """Tests for connection counts and density."""

    def test_connections_count_unresolved_edges(self):
        """Connections count raw edges, including those to unknown labels."""
        edges = [Edge(1, "A", "B"), Edge(2, "C", "A"), Edge(3, "A", "missing")]

        assert count_connections("A", edges) == 3
        assert count_connections("B", edges) == 1

    def test_self_loop_counted_once(self):
        assert count_connections("A", [Edge(1, "A", "A")]) == 1

    def test_unlabelled_node_has_no_connections(self):
        assert count_connections(None, [Edge(1, "A", None)]) == 0

    @pytest.mark.parametrize("nodes", [0, 1])
    def test_density_trivial_graphs(self, nodes):
        assert graph_density(nodes, 3) == 0

    def test_density_two_nodes_one_edge(self):
        assert graph_density(2, 1) == 1

    def test_density_uses_undirected_formula(self):
        assert graph_density(4, 4) == pytest.approx(4 / 12 * 2)


class TestCheckFinite:
    """Tests for check_finite function."""

    def test_finite_positions_pass(self):
        check_finite([Node(1, "A", (0.0, 1.5))])

    def test_nan_rejected(self):
        with pytest.raises(LayoutError, match="non-finite"):
            check_finite([Node(1, "A", (math.nan, 0.0))])

    def test_missing_position_rejected(self):
        with pytest.raises(LayoutError, match="no position"):
            check_finite([Node(1, "A")])
