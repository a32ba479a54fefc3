"""Graph data model, payload parsing and label-based edge resolution."""

import math
from dataclasses import dataclass, field, replace
from typing import Any

import networkx as nx


class GraphValidationError(ValueError):
    """Raised when a request payload cannot be turned into a graph."""


class LayoutError(RuntimeError):
    """Raised when positions are not usable for rendering (NaN, inf)."""


@dataclass
class Node:
    """A graph node; edges refer to it by ``label``, outputs by ``id``."""

    id: Any
    label: str | None
    position: tuple[float, float] | None = None

    def with_position(self, x: float, y: float) -> "Node":
        return replace(self, position=(x, y))


@dataclass
class Edge:
    """A directed edge between two node labels."""

    id: Any
    source: str | None  # "from" in the payload
    target: str | None  # "to" in the payload


@dataclass
class VisualGraph:
    """Nodes and edges of a single request."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    @property
    def has_positions(self) -> bool:
        """True when every node already carries a position."""
        return all(node.position is not None for node in self.nodes)


def _parse_position(raw: Any, index: int) -> tuple[float, float] | None:
    if raw is None:
        return None
    try:
        return (float(raw["x"]), float(raw["y"]))
    except (KeyError, TypeError, ValueError) as err:
        raise GraphValidationError(f"Node {index} has an invalid position: {raw!r}") from err


def parse_graph(payload: Any, max_nodes: int | None = None) -> VisualGraph:
    """Build a VisualGraph from a ``{nodes: [...], edges: [...]}`` payload.

    Args:
        payload: Decoded JSON request body.
        max_nodes: Optional ceiling on the number of nodes.

    Returns:
        The parsed graph.

    Raises:
        GraphValidationError: If ``nodes`` or ``edges`` is missing, either is
            not a list, an entry is not an object, or a position is malformed.

    A missing ``id`` falls back to the entry's index. Missing ``label``,
    ``from`` or ``to`` fields become ``None``; an edge with a missing endpoint
    then matches no node and is dropped later.
    """
    if not isinstance(payload, dict):
        raise GraphValidationError("Request body must be an object with 'nodes' and 'edges'")

    raw_nodes = payload.get("nodes")
    raw_edges = payload.get("edges")
    if raw_nodes is None or raw_edges is None:
        raise GraphValidationError("Both 'nodes' and 'edges' must be provided")
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise GraphValidationError("'nodes' and 'edges' must be lists")

    if max_nodes is not None and len(raw_nodes) > max_nodes:
        raise GraphValidationError(
            f"Graph has {len(raw_nodes)} nodes, the limit is {max_nodes}"
        )

    graph = VisualGraph()
    for i, raw in enumerate(raw_nodes):
        if not isinstance(raw, dict):
            raise GraphValidationError(f"Node {i} must be an object")
        node_id = raw.get("id")
        graph.nodes.append(
            Node(
                id=i if node_id is None else node_id,
                label=raw.get("label"),
                position=_parse_position(raw.get("position"), i),
            )
        )

    for i, raw in enumerate(raw_edges):
        if not isinstance(raw, dict):
            raise GraphValidationError(f"Edge {i} must be an object")
        graph.edges.append(
            Edge(id=raw.get("id", i), source=raw.get("from"), target=raw.get("to"))
        )

    return graph


def build_label_index(nodes: list[Node]) -> dict[str, Node]:
    """Map each label to the first node carrying it.

    Nodes without a label are left out, so a missing edge endpoint never
    resolves.
    """
    index: dict[str, Node] = {}
    for node in nodes:
        if node.label is not None and node.label not in index:
            index[node.label] = node
    return index


def resolve_edges(nodes: list[Node], edges: list[Edge]) -> list[tuple[Edge, Node, Node]]:
    """Join edges to their endpoint nodes by label.

    Edges whose ``source`` or ``target`` label matches no node are dropped.

    Returns:
        (edge, source_node, target_node) for every resolvable edge, in input order.
    """
    index = build_label_index(nodes)
    resolved = []
    for edge in edges:
        source = index.get(edge.source)
        target = index.get(edge.target)
        if source is None or target is None:
            continue
        resolved.append((edge, source, target))
    return resolved


def build_layout_graph(nodes: list[Node], edges: list[Edge]) -> nx.MultiDiGraph:
    """Build the resolved graph used by the layout and renderers.

    Nodes are keyed by id with ``label`` and ``position`` attributes. Parallel
    edges are kept as separate keys so each input edge contributes its own force.
    """
    G = nx.MultiDiGraph()
    for node in nodes:
        if node.id not in G:
            G.add_node(node.id, label=node.label, position=node.position)

    for edge, source, target in resolve_edges(nodes, edges):
        G.add_edge(source.id, target.id, edge_id=edge.id)

    return G


def count_connections(label: str | None, edges: list[Edge]) -> int:
    """Count input edges touching ``label``, resolvable or not."""
    if label is None:
        return 0
    return sum(1 for e in edges if e.source == label or e.target == label)


def graph_density(node_count: int, edge_count: int) -> float:
    """Undirected density formula applied to a directed edge count."""
    if node_count <= 1:
        return 0
    return edge_count / (node_count * (node_count - 1)) * 2


def check_finite(nodes: list[Node]) -> None:
    """Raise LayoutError if any node position is missing or not finite."""
    for node in nodes:
        if node.position is None:
            raise LayoutError(f"Node {node.id!r} has no position")
        x, y = node.position
        if not (math.isfinite(x) and math.isfinite(y)):
            raise LayoutError(f"Node {node.id!r} has a non-finite position ({x}, {y})")
