"""Node placement and drawing for small directed graphs.

Graphs with at most ``circular_threshold`` nodes are placed on a circle;
larger ones are spread by a force-directed simulation.
"""

import random

from ..graph import Edge, Node
from ..settings import LayoutSettings
from .circular import circle_radius, circular_layout
from .force import force_directed_layout
from .geometry import (
    RenderContext,
    arrowhead_points,
    boundary_intersection,
    build_render_context,
    edge_arrowhead,
)
from .raster import draw_graph, encode_png
from .render import render_graph


def compute_layout(
    nodes: list[Node],
    edges: list[Edge],
    settings: LayoutSettings | None = None,
    rng: random.Random | None = None,
) -> list[Node]:
    """Position every node, choosing circular or force-directed placement."""
    settings = settings or LayoutSettings()
    if len(nodes) <= settings.circular_threshold:
        return circular_layout(nodes, settings)
    return force_directed_layout(nodes, edges, settings, rng)


__all__ = [
    "compute_layout",
    "circle_radius",
    "circular_layout",
    "force_directed_layout",
    "RenderContext",
    "build_render_context",
    "boundary_intersection",
    "arrowhead_points",
    "edge_arrowhead",
    "draw_graph",
    "encode_png",
    "render_graph",
]
