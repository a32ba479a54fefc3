"""Circular placement for small graphs."""

import math

from ..graph import Node
from ..settings import LayoutSettings


def circle_radius(settings: LayoutSettings) -> float:
    """Radius of the placement circle for the given canvas."""
    return min(settings.width, settings.height) / 2.5 - settings.padding


def circular_layout(nodes: list[Node], settings: LayoutSettings | None = None) -> list[Node]:
    """Place nodes evenly on a circle around the canvas centre.

    Node ``i`` of ``n`` sits at angle ``2*pi*i/n``, in input order, so the
    result depends only on the order of ``nodes``.

    Args:
        nodes: Nodes to place.
        settings: Canvas parameters; defaults to an 800x600 canvas.

    Returns:
        New nodes carrying positions.
    """
    settings = settings or LayoutSettings()
    n = len(nodes)
    radius = circle_radius(settings)
    cx = settings.width / 2
    cy = settings.height / 2

    positioned = []
    for i, node in enumerate(nodes):
        angle = i / n * 2 * math.pi
        positioned.append(
            node.with_position(cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        )
    return positioned
