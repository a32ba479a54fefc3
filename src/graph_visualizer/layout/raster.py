"""Pillow rasterization of a positioned graph."""

import io

from PIL import Image, ImageDraw, ImageFont

from ..graph import Edge, Node, resolve_edges
from .geometry import RenderContext, edge_arrowhead

# Tried in order before falling back to Pillow's built-in font
FONT_CANDIDATES = [
    "Arial.ttf",
    "arial.ttf",
    "DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def load_font(size: float) -> ImageFont.ImageFont:
    """Load a sans-serif font at ``size`` pixels."""
    pixel_size = max(1, round(size))
    for font in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(font, pixel_size)
        except OSError:
            continue

    return ImageFont.load_default(size=pixel_size)


def _stroke(ctx: RenderContext, width: float) -> int:
    """Pixel stroke width for a width in graph units."""
    return max(1, round(ctx.to_pixels(width)))


def draw_graph(nodes: list[Node], edges: list[Edge], ctx: RenderContext) -> Image.Image:
    """Draw nodes and edges onto a new RGB image.

    Back to front: background, edge lines, node boxes with labels, then
    arrowheads so they stay visible on top of the boxes.

    Args:
        nodes: Nodes with positions.
        edges: Edges; those with an unknown endpoint label are skipped.
        ctx: Scale and offset for the canvas.

    Returns:
        The rendered image.
    """
    settings = ctx.settings
    image = Image.new("RGB", ctx.image_size, settings.background)
    draw = ImageDraw.Draw(image)

    resolved = resolve_edges(nodes, edges)

    edge_px = _stroke(ctx, ctx.edge_width)
    for _edge, source, target in resolved:
        draw.line(
            [ctx.to_pixel(source.position), ctx.to_pixel(target.position)],
            fill=settings.edge_color,
            width=edge_px,
        )

    font = load_font(ctx.to_pixels(ctx.font_size))
    border_px = _stroke(ctx, ctx.border_width)
    half_w = settings.node_width / 2
    half_h = settings.node_height / 2
    for node in nodes:
        x, y = node.position
        x0, y0 = ctx.to_pixel((x - half_w, y - half_h))
        x1, y1 = ctx.to_pixel((x + half_w, y + half_h))
        draw.rectangle(
            [x0, y0, x1, y1],
            fill=settings.node_fill,
            outline=settings.node_border,
            width=border_px,
        )
        draw.text(
            ctx.to_pixel(node.position),
            str(node.label),
            fill=settings.text_color,
            font=font,
            anchor="mm",
        )

    for _edge, source, target in resolved:
        triangle = edge_arrowhead(source.position, target.position, ctx)
        draw.polygon([ctx.to_pixel(p) for p in triangle], fill=settings.arrow_color)

    return image


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
