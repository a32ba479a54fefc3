"""Pytest fixtures for graph-visualizer tests."""

import pytest

from graph_visualizer.graph import VisualGraph, parse_graph


@pytest.fixture
def small_payload() -> dict:
    """Cycle of four nodes: A -> B -> C -> D -> A."""
    return {
        "nodes": [
            {"id": 1, "label": "A"},
            {"id": 2, "label": "B"},
            {"id": 3, "label": "C"},
            {"id": 4, "label": "D"},
        ],
        "edges": [
            {"id": 1, "from": "A", "to": "B"},
            {"id": 2, "from": "B", "to": "C"},
            {"id": 3, "from": "C", "to": "D"},
            {"id": 4, "from": "D", "to": "A"},
        ],
    }


@pytest.fixture
def small_graph(small_payload) -> VisualGraph:
    return parse_graph(small_payload)


@pytest.fixture
def large_payload() -> dict:
    """Twelve nodes in a chain plus a hub, with one dangling edge."""
    labels = [f"N{i}" for i in range(12)]
    nodes = [{"id": i, "label": label} for i, label in enumerate(labels)]
    edges = [
        {"id": i, "from": labels[i], "to": labels[i + 1]} for i in range(len(labels) - 1)
    ]
    edges += [{"id": 100 + i, "from": "N0", "to": labels[i]} for i in range(2, 12, 3)]
    edges.append({"id": 999, "from": "N3", "to": "missing"})
    return {"nodes": nodes, "edges": edges}


@pytest.fixture
def large_graph(large_payload) -> VisualGraph:
    return parse_graph(large_payload)


@pytest.fixture
def dangling_payload() -> dict:
    """One node and an edge to a label that does not exist."""
    return {
        "nodes": [{"id": 1, "label": "A"}],
        "edges": [{"id": 1, "from": "A", "to": "B"}],
    }


@pytest.fixture
def positioned_payload() -> dict:
    """Two nodes with explicit positions, 200 units apart horizontally."""
    return {
        "nodes": [
            {"id": "a", "label": "Source", "position": {"x": 0, "y": 0}},
            {"id": "b", "label": "Target", "position": {"x": 200, "y": 0}},
        ],
        "edges": [{"id": 7, "from": "Source", "to": "Target"}],
    }
