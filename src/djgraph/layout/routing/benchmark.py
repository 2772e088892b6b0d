"""Synthetic graphs, timing and debug dumps for the edge router."""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from djgraph.layout.constants import ATTACHMENT_RESOLUTION
from djgraph.layout.engine import KIND_PRIORITY
from djgraph.layout.routing.attachment import optimize_all_edges
from djgraph.parser.model import ConnectionKind, Edge, Node, OptimizedEdge

logger = logging.getLogger(__name__)

GRID_X_SPACING: float = 150.0
GRID_Y_SPACING: float = 100.0
GRID_WOBBLE: float = 50.0


@dataclass
class BenchmarkResult:
    """Timing and quality figures for one optimization pass."""

    node_count: int
    edge_count: int
    duration_ms: float
    edges_per_second: float
    improvement: float
    """Percent reduction of mean routed length versus center-to-center length."""
    routes: list[OptimizedEdge] = field(default_factory=list, repr=False)


def generate_test_graph(
    node_count: int,
    edge_count: int,
    rng: random.Random | None = None,
) -> tuple[list[Node], list[Edge]]:
    """Build a grid of nodes joined by random edges (no self-loops)."""
    rng = rng or random.Random()
    grid = math.ceil(math.sqrt(node_count)) if node_count else 0

    nodes = [
        Node(
            id=f"node-{i}",
            x=(i % grid) * GRID_X_SPACING + rng.random() * GRID_WOBBLE,
            y=(i // grid) * GRID_Y_SPACING + rng.random() * GRID_WOBBLE,
            width=120.0,
            height=60.0,
            label=f"Track {i}",
            subtitle=f"Artist {i}",
        )
        for i in range(node_count)
    ]

    edges: list[Edge] = []
    if node_count < 2:
        return nodes, edges

    for i in range(edge_count):
        src = rng.randrange(node_count)
        tgt = rng.randrange(node_count - 1)
        if tgt >= src:
            tgt += 1
        kind = rng.choice([ConnectionKind.TRANSITION, ConnectionKind.MASHUP])
        edges.append(
            Edge(
                id=f"edge-{i}",
                source=f"node-{src}",
                target=f"node-{tgt}",
                priority=KIND_PRIORITY[kind],
                kind=kind,
            )
        )
    return nodes, edges


def benchmark_edge_routing(
    node_count: int,
    edge_count: int,
    rng: random.Random | None = None,
    resolution: int = ATTACHMENT_RESOLUTION,
) -> BenchmarkResult:
    """Time a full optimization pass over a synthetic graph."""
    nodes, edges = generate_test_graph(node_count, edge_count, rng)
    logger.info("Benchmarking edge routing with %d nodes and %d edges",
                node_count, len(edges))

    start = time.perf_counter()
    routes = optimize_all_edges(nodes, edges, resolution=resolution)
    duration = (time.perf_counter() - start) * 1000.0

    per_second = len(edges) / (duration / 1000.0) if duration > 0 else 0.0

    node_map = {n.id: n for n in nodes}
    baseline = [
        math.dist(node_map[r.source].center, node_map[r.target].center)
        for r in routes
    ]
    improvement = 0.0
    if routes:
        avg_baseline = sum(baseline) / len(baseline)
        avg_routed = sum(r.path_length for r in routes) / len(routes)
        if avg_baseline > 0:
            improvement = (avg_baseline - avg_routed) / avg_baseline * 100.0

    logger.info("Edge routing completed in %.2f ms (%.0f edges/s, %.1f%% shorter)",
                duration, per_second, improvement)
    return BenchmarkResult(
        node_count=node_count,
        edge_count=len(edges),
        duration_ms=duration,
        edges_per_second=per_second,
        improvement=improvement,
        routes=routes,
    )


def describe_routes(routes: Sequence[OptimizedEdge]) -> list[dict[str, object]]:
    """Summarize routed edges, one row per edge, and log them at DEBUG."""
    rows: list[dict[str, object]] = []
    for i, route in enumerate(routes, start=1):
        src, tgt = route.source_attachment, route.target_attachment
        row = {
            "id": route.id,
            "source": route.source,
            "target": route.target,
            "path_length": round(route.path_length, 2),
            "source_side": src.side.value,
            "source_point": (round(src.x, 1), round(src.y, 1)),
            "target_side": tgt.side.value,
            "target_point": (round(tgt.x, 1), round(tgt.y, 1)),
        }
        logger.debug("Edge %d: %s", i, row)
        rows.append(row)
    return rows
