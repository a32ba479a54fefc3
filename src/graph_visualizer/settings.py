"""Layout and render settings, optionally loaded from a YAML config file."""

import math
from dataclasses import dataclass, fields
from pathlib import Path


@dataclass
class LayoutSettings:
    """Parameters of the layout engine."""

    width: float = 800
    height: float = 600
    padding: float = 50
    circular_threshold: int = 8  # graphs with at most this many nodes go on a circle
    iterations: int = 50
    repulsion: float = 30.0
    attraction: float = 0.3
    max_step: float = 10.0  # per-axis velocity clamp
    seed: int | None = None
    max_nodes: int | None = None


@dataclass
class RenderSettings:
    """Parameters of the image and HTML exporters.

    Sizes are given in canvas units at scale 1; the image exporter divides
    them by the downscale factor so they keep their size relative to nodes.
    """

    node_width: float = 100
    node_height: float = 50
    padding: float = 50
    max_size: float = 2000
    min_image_size: int = 300
    edge_width: float = 2
    border_width: float = 1
    font_size: float = 16
    arrow_length: float = 20
    arrow_angle: float = math.pi / 6
    background: str = "#ffffff"
    edge_color: str = "#555555"
    node_fill: str = "#f0f0f0"
    node_border: str = "#000000"
    text_color: str = "#000000"
    arrow_color: str = "#000000"


def _apply_section(target: object, section: dict, name: str) -> None:
    if not isinstance(section, dict):
        raise ValueError(f"Section {name} must be a mapping")
    known = {f.name for f in fields(target)}
    for key, value in section.items():
        attr = key.replace("-", "_")
        if attr not in known:
            raise ValueError(f"Unknown {name} setting: {key}")
        setattr(target, attr, value)


def load_config(config_path: Path) -> tuple[LayoutSettings, RenderSettings]:
    """Load settings from a YAML file.

    The file may contain ``layout:`` and ``render:`` sections whose keys map
    onto LayoutSettings and RenderSettings fields.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Tuple of (layout_settings, render_settings).
    """
    import yaml

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as err:
            raise ValueError(f"Invalid YAML in {config_path}: {err}") from err

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    layout = LayoutSettings()
    render = RenderSettings()
    for key, section in config.items():
        if key == "layout":
            _apply_section(layout, section or {}, "layout")
        elif key == "render":
            _apply_section(render, section or {}, "render")
        else:
            raise ValueError(f"Unknown config section: {key}")

    return layout, render
