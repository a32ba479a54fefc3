"""Generate visualization outputs."""

import json
from pathlib import Path

from .graph import (
    Edge,
    Node,
    VisualGraph,
    check_finite,
    count_connections,
    graph_density,
    resolve_edges,
)
from .layout import build_render_context, compute_layout, draw_graph, encode_png, render_graph
from .settings import LayoutSettings, RenderSettings

EDGE_COLOR = "#555"
LAYOUT_NAME = "force-directed"
THEME = "light"


def edge_color(edge: Edge) -> str:
    """Stroke colour for an edge in the structured export."""
    return EDGE_COLOR


def to_graph_description(nodes: list[Node], edges: list[Edge]) -> dict:
    """Describe positioned nodes and edges for a flow-chart front end.

    Edges whose endpoints do not resolve by label are left out. Metadata
    totals count the input lists as given.

    Args:
        nodes: Nodes with positions.
        edges: Input edges.

    Returns:
        JSON-serializable graph description.
    """
    flow_nodes = [
        {
            "id": str(node.id),
            "type": "customNode",
            "position": {"x": node.position[0], "y": node.position[1]},
            "data": {
                "label": node.label,
                "connections": count_connections(node.label, edges),
            },
        }
        for node in nodes
    ]

    flow_edges = []
    for edge, source, target in resolve_edges(nodes, edges):
        color = edge_color(edge)
        flow_edges.append(
            {
                "id": f"e{edge.id}",
                "source": str(source.id),
                "target": str(target.id),
                "animated": True,
                "style": {"stroke": color, "strokeWidth": 2},
                "markerEnd": {"type": "arrowclosed", "color": color},
            }
        )

    return {
        "nodes": flow_nodes,
        "edges": flow_edges,
        "layout": LAYOUT_NAME,
        "theme": THEME,
        "metadata": {
            "totalNodes": len(nodes),
            "totalEdges": len(edges),
            "graphDensity": graph_density(len(nodes), len(edges)),
        },
    }


def layout_graph(graph: VisualGraph, settings: LayoutSettings | None = None) -> list[Node]:
    """Compute fresh positions for every node of ``graph``."""
    positioned = compute_layout(graph.nodes, graph.edges, settings)
    check_finite(positioned)
    return positioned


def ensure_positions(graph: VisualGraph, settings: LayoutSettings | None = None) -> list[Node]:
    """Use the positions supplied with the nodes, or compute them if any is missing."""
    if graph.has_positions:
        check_finite(graph.nodes)
        return list(graph.nodes)
    return layout_graph(graph, settings)


def to_image(
    graph: VisualGraph,
    layout_settings: LayoutSettings | None = None,
    render_settings: RenderSettings | None = None,
) -> bytes:
    """Rasterize a graph to PNG bytes.

    Supplied node positions are used as-is when every node has one;
    otherwise the layout engine runs first.
    """
    nodes = ensure_positions(graph, layout_settings)
    ctx = build_render_context(nodes, render_settings)
    return encode_png(draw_graph(nodes, graph.edges, ctx))


def generate_json(
    graph: VisualGraph,
    output_file: Path,
    settings: LayoutSettings | None = None,
) -> dict:
    """Lay out ``graph`` and write its description as JSON."""
    description = to_graph_description(layout_graph(graph, settings), graph.edges)
    with open(output_file, "w") as f:
        json.dump(description, f, indent=2)
    return description


def generate_png(
    graph: VisualGraph,
    output_file: Path,
    layout_settings: LayoutSettings | None = None,
    render_settings: RenderSettings | None = None,
) -> None:
    """Write ``graph`` as a PNG image."""
    output_file.write_bytes(to_image(graph, layout_settings, render_settings))


def generate_html(
    graph: VisualGraph,
    output_file: Path,
    layout_settings: LayoutSettings | None = None,
    render_settings: RenderSettings | None = None,
) -> None:
    """Write ``graph`` as an interactive pyvis page."""
    nodes = ensure_positions(graph, layout_settings)
    render_graph(nodes, graph.edges, output_file, render_settings)
