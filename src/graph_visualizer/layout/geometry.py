"""Canvas sizing, scale handling and edge/box intersection math."""

import math
from dataclasses import dataclass

from ..graph import Node
from ..settings import RenderSettings

Point = tuple[float, float]


@dataclass
class Bounds:
    """Axis-aligned box in graph units."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float


@dataclass
class RenderContext:
    """Scale and offset shared by every drawing primitive.

    Graph coordinates map to pixels as ``(p + offset) * scale``. Stroke
    widths, font size and arrow length are kept in graph units divided by
    ``scale``, so once mapped to pixels they come out at their nominal size
    whatever the downscale.
    """

    scale: float
    offset_x: float
    offset_y: float
    canvas_width: float  # graph units, before scaling
    canvas_height: float
    settings: RenderSettings

    @property
    def image_size(self) -> tuple[int, int]:
        """Pixel size of the output image, never below ``min_image_size``.

        Fractional sizes are truncated.
        """
        floor = self.settings.min_image_size
        return (
            int(max(floor, self.canvas_width * self.scale)),
            int(max(floor, self.canvas_height * self.scale)),
        )

    @property
    def edge_width(self) -> float:
        return self.settings.edge_width / self.scale

    @property
    def border_width(self) -> float:
        return self.settings.border_width / self.scale

    @property
    def font_size(self) -> float:
        return self.settings.font_size / self.scale

    @property
    def arrow_length(self) -> float:
        return self.settings.arrow_length / self.scale

    def to_pixel(self, point: Point) -> Point:
        x, y = point
        return ((x + self.offset_x) * self.scale, (y + self.offset_y) * self.scale)

    def to_pixels(self, length: float) -> float:
        """Convert a length in graph units to pixels."""
        return length * self.scale


def node_bounds(nodes: list[Node], settings: RenderSettings) -> Bounds:
    """Bounding box of all node boxes (centre +- half the box size)."""
    if not nodes:
        return Bounds(0.0, 0.0, 0.0, 0.0)
    half_w = settings.node_width / 2
    half_h = settings.node_height / 2
    xs = [node.position[0] for node in nodes]
    ys = [node.position[1] for node in nodes]
    return Bounds(min(xs) - half_w, min(ys) - half_h, max(xs) + half_w, max(ys) + half_h)


def fit_scale(width: float, height: float, max_size: float) -> float:
    """Uniform downscale factor so neither side exceeds ``max_size``."""
    if width > max_size or height > max_size:
        return min(max_size / width, max_size / height)
    return 1.0


def build_render_context(nodes: list[Node], settings: RenderSettings | None = None) -> RenderContext:
    """Size the canvas around positioned nodes.

    The canvas is the node bounding box plus ``padding`` on every side. If
    either side exceeds ``max_size`` everything is scaled down uniformly.

    Args:
        nodes: Nodes with positions.
        settings: Render parameters.

    Returns:
        RenderContext for drawing the nodes.
    """
    settings = settings or RenderSettings()
    bounds = node_bounds(nodes, settings)
    canvas_width = bounds.max_x - bounds.min_x + 2 * settings.padding
    canvas_height = bounds.max_y - bounds.min_y + 2 * settings.padding
    return RenderContext(
        scale=fit_scale(canvas_width, canvas_height, settings.max_size),
        offset_x=-bounds.min_x + settings.padding,
        offset_y=-bounds.min_y + settings.padding,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        settings=settings,
    )


def boundary_intersection(
    start: Point,
    target: Point,
    box_width: float,
    box_height: float,
) -> Point:
    """Point where the line start->target meets the target's box.

    The side is chosen from ``|dx|`` against ``|dy|``: a mostly horizontal
    line is tried against the left/right side, a mostly vertical one against
    the top/bottom. If that hit lies outside the side's extent, the other
    pair of sides is used instead.

    A vertical line (``dx == 0``) has no slope; it meets the top/bottom side
    straight above/below ``start``.
    """
    sx, sy = start
    tx, ty = target
    dx = tx - sx
    dy = ty - sy

    left = tx - box_width / 2
    right = tx + box_width / 2
    top = ty - box_height / 2
    bottom = ty + box_height / 2

    if abs(dx) > abs(dy):
        slope = dy / dx
        ix = left if dx > 0 else right
        iy = sy + slope * (ix - sx)
        if iy < top or iy > bottom:
            iy = bottom if dy > 0 else top
            ix = sx + (iy - sy) / slope
    else:
        iy = top if dy > 0 else bottom
        if dx == 0:
            ix = sx
        else:
            slope = dy / dx
            ix = sx + (iy - sy) / slope
            if ix < left or ix > right:
                ix = left if dx > 0 else right
                iy = sy + slope * (ix - sx)

    return (ix, iy)


def arrowhead_points(
    tip: Point,
    angle: float,
    length: float,
    spread: float = math.pi / 6,
) -> list[Point]:
    """Triangle with its point at ``tip`` facing along ``angle``.

    The two back corners sit ``length`` behind the tip at ``angle +- spread``.
    """
    x, y = tip
    return [
        (x, y),
        (x - length * math.cos(angle - spread), y - length * math.sin(angle - spread)),
        (x - length * math.cos(angle + spread), y - length * math.sin(angle + spread)),
    ]


def edge_arrowhead(
    source: Point,
    target: Point,
    ctx: RenderContext,
) -> list[Point]:
    """Arrowhead triangle, in graph units, for an edge entering ``target``'s box."""
    angle = math.atan2(target[1] - source[1], target[0] - source[0])
    tip = boundary_intersection(
        source, target, ctx.settings.node_width, ctx.settings.node_height
    )
    return arrowhead_points(tip, angle, ctx.arrow_length, ctx.settings.arrow_angle)
