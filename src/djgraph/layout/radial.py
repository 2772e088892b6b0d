"""Radial node placement (X/Y positioning).

Single-pass heuristic: nodes sit on a ring, evenly spaced by index, and
each node's radius shrinks with its degree so hubs cluster toward the
center. No iterative relaxation.
"""

from __future__ import annotations

__all__ = ["node_degrees", "radial_layout"]

import logging
import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import replace

import networkx as nx

from djgraph.layout.constants import (
    BASE_RADIUS,
    CENTER_X,
    CENTER_Y,
    JITTER,
    MIN_RADIUS_FACTOR,
    RADIUS_FALLOFF,
)
from djgraph.parser.model import Edge, Node

logger = logging.getLogger(__name__)


def node_degrees(edges: Iterable[Edge]) -> dict[str, int]:
    """Count incident edges per node id.

    Parallel edges each count, and a self-loop counts twice (once as
    source, once as target).
    """
    G = nx.MultiGraph()
    for edge in edges:
        G.add_edge(edge.source, edge.target)
    return dict(G.degree())


def radial_layout(
    nodes: Sequence[Node],
    edges: Iterable[Edge],
    center: tuple[float, float] = (CENTER_X, CENTER_Y),
    base_radius: float = BASE_RADIUS,
    jitter: float = JITTER,
    rng: random.Random | None = None,
) -> list[Node]:
    """Place nodes on a ring with hubs pulled toward the center.

    Returns new Node instances in input order with position set and
    width/height filled in with the track defaults where unspecified.
    Pass a seeded ``rng`` for reproducible jitter.
    """
    if not nodes:
        return []

    rng = rng or random.Random()
    degrees = node_degrees(edges)
    cx, cy = center
    limit = base_radius + jitter
    n = len(nodes)

    placed: list[Node] = []
    for index, node in enumerate(nodes):
        degree = degrees.get(node.id, 0)
        angle = (index / n) * 2 * math.pi
        radius = base_radius * max(MIN_RADIUS_FACTOR, 1 - degree * RADIUS_FALLOFF)

        dx = math.cos(angle) * radius + rng.uniform(-jitter, jitter)
        dy = math.sin(angle) * radius + rng.uniform(-jitter, jitter)

        # Jitter on both axes can push a ring node past the outer bound
        dist = math.hypot(dx, dy)
        if dist > limit:
            dx *= limit / dist
            dy *= limit / dist

        placed.append(
            replace(
                node,
                x=cx + dx,
                y=cy + dy,
                width=node.resolved_width,
                height=node.resolved_height,
            )
        )

    logger.debug("Placed %d nodes around (%s, %s)", n, cx, cy)
    return placed
