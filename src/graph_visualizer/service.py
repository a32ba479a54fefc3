"""Request handlers for the visualizer, independent of any HTTP framework.

Each handler takes a decoded JSON body and returns a ServiceResponse that a
web layer can send back as-is.
"""

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .graph import GraphValidationError, parse_graph
from .settings import LayoutSettings, RenderSettings
from .visualize import layout_graph, to_graph_description, to_image

SERVICE_NAME = "visualizer"


@dataclass
class ServiceResponse:
    """Status code, body and content type of a handler result."""

    status: int
    body: Any
    content_type: str = "application/json"

    @property
    def ok(self) -> bool:
        return self.status < 400


def _client_error(err: GraphValidationError) -> ServiceResponse:
    return ServiceResponse(status=400, body={"error": str(err)})


def _server_error(message: str, err: Exception) -> ServiceResponse:
    print(f"{message}: {err}", file=sys.stderr)
    return ServiceResponse(status=500, body={"error": message, "details": str(err)})


def generate_visual(
    payload: Any,
    settings: LayoutSettings | None = None,
) -> ServiceResponse:
    """Lay out the graph in ``payload`` and return its description."""
    settings = settings or LayoutSettings()
    try:
        graph = parse_graph(payload, max_nodes=settings.max_nodes)
    except GraphValidationError as err:
        return _client_error(err)

    print(f"Generating visualization for {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    try:
        description = to_graph_description(layout_graph(graph, settings), graph.edges)
    except Exception as e:
        return _server_error("Failed to generate visualization", e)
    return ServiceResponse(status=200, body=description)


def export_graph_image(
    payload: Any,
    layout_settings: LayoutSettings | None = None,
    render_settings: RenderSettings | None = None,
) -> ServiceResponse:
    """Render the graph in ``payload`` as a PNG image."""
    layout_settings = layout_settings or LayoutSettings()
    try:
        graph = parse_graph(payload, max_nodes=layout_settings.max_nodes)
    except GraphValidationError as err:
        return _client_error(err)

    try:
        png = to_image(graph, layout_settings, render_settings)
    except Exception as e:
        return _server_error("Failed to export graph image", e)
    return ServiceResponse(status=200, body=png, content_type="image/png")


def health() -> dict:
    """Liveness probe."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
