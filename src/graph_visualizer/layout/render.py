"""Pyvis rendering of a positioned graph to interactive HTML."""

from pathlib import Path

from ..graph import Edge, Node, build_layout_graph, count_connections
from ..settings import RenderSettings


def render_graph(
    nodes: list[Node],
    edges: list[Edge],
    output_path: Path,
    settings: RenderSettings | None = None,
) -> None:
    """Render positioned nodes with pyvis.

    Nodes are fixed at their layout positions (physics disabled) and drawn as
    boxes; only edges whose endpoints resolve by label are drawn.

    Args:
        nodes: Nodes with positions.
        edges: Edges, joined to nodes by label.
        output_path: Path to write the HTML file.
        settings: Colours for nodes and edges.
    """
    from pyvis.network import Network

    settings = settings or RenderSettings()
    graph = build_layout_graph(nodes, edges)

    net = Network(
        height="100vh",
        width="100%",
        bgcolor=settings.background,
        directed=True,
        cdn_resources="remote",
    )
    net.toggle_physics(False)

    for node_id, data in graph.nodes(data=True):
        x, y = data["position"]
        label = str(data["label"])
        count = count_connections(data["label"], edges)
        net.add_node(
            str(node_id),
            label=label,
            title=f"{label}\n{count} connection(s)",
            x=x,
            y=y,
            fixed=True,
            shape="box",
            color={"background": settings.node_fill, "border": settings.node_border},
            font={"size": settings.font_size, "color": settings.text_color},
        )

    for source, target, data in graph.edges(data=True):
        net.add_edge(
            str(source),
            str(target),
            title=f"e{data['edge_id']}",
            color=settings.edge_color,
            width=settings.edge_width,
        )

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "navigationButtons": true,
            "zoomView": true,
            "dragView": true,
            "hover": true,
            "tooltipDelay": 100
        },
        "edges": {
            "arrows": {"to": {"enabled": true, "scaleFactor": 0.6}},
            "smooth": false
        },
        "nodes": {
            "borderWidth": 1,
            "borderWidthSelected": 2
        }
    }
    """)

    net.save_graph(str(output_path))
