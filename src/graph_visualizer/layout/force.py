"""Force-directed placement for larger graphs."""

import math
import random

from ..graph import Edge, Node, build_layout_graph
from ..settings import LayoutSettings


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def initial_positions(
    count: int, settings: LayoutSettings, rng: random.Random
) -> list[list[float]]:
    """Uniformly random starting points inside the padded canvas."""
    span_x = settings.width - 2 * settings.padding
    span_y = settings.height - 2 * settings.padding
    return [
        [settings.padding + rng.random() * span_x, settings.padding + rng.random() * span_y]
        for _ in range(count)
    ]


def force_directed_layout(
    nodes: list[Node],
    edges: list[Edge],
    settings: LayoutSettings | None = None,
    rng: random.Random | None = None,
) -> list[Node]:
    """Spread nodes with a fixed number of repulsion/attraction rounds.

    Each round:
    - every ordered pair of nodes repels with ``repulsion / d**2``
    - every resolvable edge pulls its endpoints together with
      ``attraction * ln(d)`` (negative, i.e. pushing, when ``d < 1``)
    - each velocity axis is clamped to ``+-max_step`` and added to the
      position, which is then clamped to the padded canvas

    Velocities are reset at the start of every round; they accumulate forces,
    not momentum.

    Args:
        nodes: Nodes to place.
        edges: Edges, joined to nodes by label. Unresolvable edges exert no force.
        settings: Simulation parameters.
        rng: Random source for the starting positions. Defaults to
            ``random.Random(settings.seed)``.

    Returns:
        New nodes carrying their final positions.
    """
    settings = settings or LayoutSettings()
    if rng is None:
        rng = random.Random(settings.seed)

    n = len(nodes)
    positions = initial_positions(n, settings, rng)

    # Edges are resolved by label, then addressed by node id
    graph = build_layout_graph(nodes, edges)
    index_by_id: dict = {}
    for i, node in enumerate(nodes):
        index_by_id.setdefault(node.id, i)
    springs = [(index_by_id[u], index_by_id[v]) for u, v in graph.edges()]

    min_x, max_x = settings.padding, settings.width - settings.padding
    min_y, max_y = settings.padding, settings.height - settings.padding
    k = settings.repulsion

    for _ in range(settings.iterations):
        velocities = [[0.0, 0.0] for _ in range(n)]

        for i in range(n):
            xi, yi = positions[i]
            vel = velocities[i]
            for j in range(n):
                if i == j:
                    continue
                dx = xi - positions[j][0]
                dy = yi - positions[j][1]
                distance = math.sqrt(dx * dx + dy * dy) or 1.0
                force = k / (distance * distance)
                vel[0] += dx / distance * force
                vel[1] += dy / distance * force

        for s, t in springs:
            dx = positions[t][0] - positions[s][0]
            dy = positions[t][1] - positions[s][1]
            distance = math.sqrt(dx * dx + dy * dy) or 1.0
            force = math.log(distance) * settings.attraction
            fx = dx / distance * force
            fy = dy / distance * force
            velocities[s][0] += fx
            velocities[s][1] += fy
            velocities[t][0] -= fx
            velocities[t][1] -= fy

        step = settings.max_step
        for pos, vel in zip(positions, velocities):
            pos[0] = _clamp(pos[0] + _clamp(vel[0], -step, step), min_x, max_x)
            pos[1] = _clamp(pos[1] + _clamp(vel[1], -step, step), min_y, max_y)

    return [node.with_position(x, y) for node, (x, y) in zip(nodes, positions)]
