"""CLI for djgraph."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from pathlib import Path

import click

from djgraph import __version__
from djgraph.layout import compute_layout
from djgraph.layout.constants import ATTACHMENT_RESOLUTION, BASE_RADIUS
from djgraph.parser import parse_setlist
from djgraph.parser.model import ConnectionKind, TrackGraph
from djgraph.render import render_svg
from djgraph.themes import THEMES


def _load(input_file: Path) -> TrackGraph:
    try:
        return parse_setlist(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log layout and routing details.")
def cli(verbose: bool) -> None:
    """djgraph: Render DJ track connections as a routed node-link graph."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--width", type=int, default=None, help="SVG width in pixels")
@click.option("--height", type=int, default=None, help="SVG height in pixels")
@click.option("--radius", type=float, default=BASE_RADIUS,
              help=f"Layout ring radius (default: {BASE_RADIUS:g})")
@click.option("--resolution", type=click.IntRange(min=1), default=ATTACHMENT_RESOLUTION,
              help=f"Attachment points per node side (default: {ATTACHMENT_RESOLUTION})")
@click.option("--seed", type=int, default=None,
              help="Seed for layout jitter, for reproducible output")
@click.option("--debug", is_flag=True, help="Mark chosen attachment points")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    width: int | None,
    height: int | None,
    radius: float,
    resolution: int,
    seed: int | None,
    debug: bool,
) -> None:
    """Render a set list to SVG."""
    graph = _load(input_file)
    layout = compute_layout(graph, base_radius=radius, resolution=resolution, seed=seed)

    svg = render_svg(layout, THEMES[theme], title=graph.title,
                     width=width, height=height, debug=debug)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(layout.nodes)} tracks, "
               f"{len(layout.routes)} connections -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a set list."""
    graph = _load(input_file)

    warnings = []
    seen: set[tuple[str, str]] = set()
    for conn in graph.connections:
        pair = (conn.track_a, conn.track_b)
        if conn.track_a == conn.track_b:
            warnings.append(f"Track '{conn.track_a}' is connected to itself")
        if pair in seen:
            warnings.append(f"Duplicate connection {conn.track_a} -> {conn.track_b} "
                            f"will be drawn once")
        seen.add(pair)

    for warning in warnings:
        click.echo(f"  - {warning}", err=True)

    click.echo(f"Valid: {len(graph.tracks)} tracks, "
               f"{len(graph.connections)} connections")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a set list."""
    graph = _load(input_file)

    click.echo(f"Title: {graph.title or '(none)'}")
    click.echo(f"Tracks: {len(graph.tracks)}")
    click.echo(f"Connections: {len(graph.connections)}")
    for kind in ConnectionKind:
        count = sum(1 for c in graph.connections if c.kind is kind)
        click.echo(f"  {kind.value}: {count}")

    ranked = sorted(
        graph.tracks.values(),
        key=lambda t: -len(graph.track_connections(t.id)),
    )
    if ranked:
        click.echo("Hubs:")
        for track in ranked[:5]:
            degree = len(graph.track_connections(track.id))
            click.echo(f"  {track.title} - {track.artist}: {degree} connections")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-n", "--limit", type=click.IntRange(min=1), default=5,
              help="Number of connections to show (default: 5)")
def recent(input_file: Path, limit: int) -> None:
    """List the most recently added connections, newest first."""
    graph = _load(input_file)
    now = datetime.now()

    click.echo("Recent connections:")
    for conn in graph.recent_connections(limit):
        a = graph.tracks.get(conn.track_a)
        b = graph.tracks.get(conn.track_b)
        arrow = "→" if conn.kind is ConnectionKind.TRANSITION else "↔"
        click.echo(f"  {a.title if a else 'Unknown'} {arrow} "
                   f"{b.title if b else 'Unknown'} ({_time_ago(conn.created_at, now)})")


def _time_ago(created_at: datetime, now: datetime) -> str:
    minutes = int((now - created_at).total_seconds() // 60)
    return "just now" if minutes < 1 else f"{minutes} min ago"


@cli.command()
@click.option("--nodes", "node_count", type=click.IntRange(min=0), default=50,
              help="Number of synthetic tracks (default: 50)")
@click.option("--edges", "edge_count", type=click.IntRange(min=0), default=100,
              help="Number of synthetic connections (default: 100)")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--resolution", type=click.IntRange(min=1), default=ATTACHMENT_RESOLUTION,
              help=f"Attachment points per node side (default: {ATTACHMENT_RESOLUTION})")
def benchmark(node_count: int, edge_count: int, seed: int | None, resolution: int) -> None:
    """Time edge routing on a synthetic graph."""
    from djgraph.layout.routing.benchmark import benchmark_edge_routing

    result = benchmark_edge_routing(
        node_count, edge_count, rng=random.Random(seed), resolution=resolution
    )
    click.echo(f"Routed {len(result.routes)} of {result.edge_count} edges "
               f"across {result.node_count} nodes in {result.duration_ms:.2f} ms")
    click.echo(f"Throughput: {result.edges_per_second:.0f} edges/second")
    click.echo(f"Average path length improvement: {result.improvement:.1f}%")
