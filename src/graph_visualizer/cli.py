"""CLI for graph-visualizer."""

import argparse
import json
import sys
from pathlib import Path

from .graph import GraphValidationError, LayoutError, VisualGraph, parse_graph, resolve_edges
from .settings import LayoutSettings, RenderSettings, load_config
from .visualize import generate_html, generate_json, generate_png


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("input", type=Path, help="JSON file with 'nodes' and 'edges'")
    parser.add_argument("-o", "--output", type=Path, help="Output file")
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for force-directed layout (graphs with more than 8 nodes)",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        help="Reject graphs with more nodes than this",
    )


def resolve_settings(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> tuple[LayoutSettings, RenderSettings]:
    """Load config file if given, then apply explicit flags on top."""
    if args.config:
        try:
            layout, render = load_config(args.config)
        except (OSError, ValueError) as err:
            parser.error(f"invalid config {args.config}: {err}")
    else:
        layout, render = LayoutSettings(), RenderSettings()

    if args.seed is not None:
        layout.seed = args.seed
    if args.max_nodes is not None:
        layout.max_nodes = args.max_nodes
    return layout, render


def load_graph(path: Path, layout: LayoutSettings) -> VisualGraph:
    """Read and validate the input graph."""
    with open(path) as f:
        payload = json.load(f)
    graph = parse_graph(payload, max_nodes=layout.max_nodes)

    print(f"Loaded {len(graph.nodes)} nodes, {len(graph.edges)} edges from {path}")
    skipped = len(graph.edges) - len(resolve_edges(graph.nodes, graph.edges))
    if skipped:
        print(f"Skipping {skipped} edge(s) with unknown endpoint labels")
    return graph


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Write the graph description with computed positions."""
    layout, _render = resolve_settings(args, parser)
    output = args.output or Path("graph.json")
    graph = load_graph(args.input, layout)
    description = generate_json(graph, output, layout)
    density = description["metadata"]["graphDensity"]
    print(f"Graph density: {density:.3f}")
    print(f"Wrote {output}")


def cmd_image(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Write the graph as a PNG image."""
    layout, render = resolve_settings(args, parser)
    output = args.output or Path("graph.png")
    graph = load_graph(args.input, layout)
    if not graph.has_positions:
        print("Computing layout (input nodes have no positions)")
    generate_png(graph, output, layout, render)
    print(f"Wrote {output}")


def cmd_html(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Write the graph as an interactive HTML page."""
    layout, render = resolve_settings(args, parser)
    output = args.output or Path("graph.html")
    graph = load_graph(args.input, layout)
    generate_html(graph, output, layout, render)
    print(f"Wrote {output}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for graph-visualizer CLI."""
    parser = argparse.ArgumentParser(
        description="Lay out directed graphs and export them as JSON, PNG or HTML"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute node positions and write the graph description as JSON",
    )
    add_common_args(layout_parser)

    image_parser = subparsers.add_parser(
        "image",
        help="Render the graph to PNG (uses node positions from the input if all are given)",
    )
    add_common_args(image_parser)

    html_parser = subparsers.add_parser(
        "html",
        help="Render the graph to an interactive HTML page",
    )
    add_common_args(html_parser)

    args = parser.parse_args(argv)

    commands = {
        "layout": (cmd_layout, layout_parser),
        "image": (cmd_image, image_parser),
        "html": (cmd_html, html_parser),
    }
    if args.command not in commands:
        # No subcommand provided - show help
        parser.print_help()
        return 0

    handler, sub_parser = commands[args.command]
    try:
        handler(args, sub_parser)
    except (OSError, json.JSONDecodeError, GraphValidationError, LayoutError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
