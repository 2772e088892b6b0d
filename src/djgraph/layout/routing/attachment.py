"""Attachment point selection for edges between rectangular nodes.

Every node boundary is sampled into a ring of candidate points. For each
edge the optimizer tries every (source candidate, target candidate) pair
and keeps the cheapest, where cost is straight-line length plus a
penalty for crowding attachment points already used on the same node and
for crossing edges that were routed earlier in the same pass.

Routing is greedy: an edge only sees the edges routed before it, so the
input order (by priority) decides who gets the uncluttered points.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from djgraph.layout.constants import (
    ATTACHMENT_RADIUS,
    ATTACHMENT_RESOLUTION,
    CLUSTER_WEIGHT,
    COST_TOLERANCE,
    CROSSING_PENALTY,
)
from djgraph.layout.routing.geometry import angle, distance, segments_intersect
from djgraph.parser.model import (
    AttachmentPoint,
    Edge,
    Node,
    NodeBounds,
    OptimizedEdge,
    Side,
    node_bounds,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttachmentChoice:
    """The cheapest attachment pair found for one edge."""

    source: AttachmentPoint
    target: AttachmentPoint
    path_length: float


def generate_attachment_points(
    bounds: NodeBounds,
    resolution: int = ATTACHMENT_RESOLUTION,
) -> list[AttachmentPoint]:
    """Sample candidate attachment points around a node rectangle.

    Walks the perimeter clockwise (in SVG axes): top left->right, right
    top->bottom, bottom right->left, left bottom->top, emitting
    ``resolution + 1`` points per side. Corners therefore appear twice,
    once for each side they belong to.
    """
    if resolution < 1:
        raise ValueError(f"resolution must be at least 1, got {resolution}")

    x, y = bounds.x, bounds.y
    w, h = bounds.width, bounds.height
    steps = range(resolution + 1)

    walk: list[tuple[float, float, Side]] = []
    walk += [(x + w * i / resolution, y, Side.TOP) for i in steps]
    walk += [(x + w, y + h * i / resolution, Side.RIGHT) for i in steps]
    walk += [(x + w * i / resolution, y + h, Side.BOTTOM) for i in reversed(steps)]
    walk += [(x, y + h * i / resolution, Side.LEFT) for i in reversed(steps)]

    return [
        AttachmentPoint(
            x=px,
            y=py,
            side=side,
            angle=angle(bounds.center_x, bounds.center_y, px, py),
        )
        for px, py, side in walk
    ]


def used_attachments(
    node_id: str, prior_edges: Iterable[OptimizedEdge], role: str = "source"
) -> list[AttachmentPoint]:
    """Attachment points earlier edges claimed on a node in the same role.

    With ``role="source"`` only earlier edges leaving ``node_id`` count,
    with ``role="target"`` only earlier edges entering it. An exit point
    is never pushed away from an entry point on the same node.
    """
    if role == "source":
        return [e.source_attachment for e in prior_edges if e.source == node_id]
    if role == "target":
        return [e.target_attachment for e in prior_edges if e.target == node_id]
    raise ValueError(f"role must be 'source' or 'target', got {role!r}")


def clustering_penalty(
    point: AttachmentPoint,
    used: Iterable[AttachmentPoint],
    radius: float = ATTACHMENT_RADIUS,
    weight: float = CLUSTER_WEIGHT,
) -> float:
    """Linear penalty for sitting within ``radius`` of used points.

    Zero at the radius boundary, ``radius * weight`` when coincident.
    """
    penalty = 0.0
    for other in used:
        d = distance(point.x, point.y, other.x, other.y)
        if d < radius:
            penalty += (radius - d) * weight
    return penalty


def crossing_penalty(
    source_point: AttachmentPoint,
    target_point: AttachmentPoint,
    prior_edges: Iterable[OptimizedEdge],
    penalty: float = CROSSING_PENALTY,
) -> float:
    """Flat penalty for each earlier edge the candidate segment crosses."""
    total = 0.0
    for edge in prior_edges:
        if segments_intersect(
            source_point.x, source_point.y, target_point.x, target_point.y,
            edge.source_attachment.x, edge.source_attachment.y,
            edge.target_attachment.x, edge.target_attachment.y,
        ):
            total += penalty
    return total


def conflict_penalty(
    source_point: AttachmentPoint,
    target_point: AttachmentPoint,
    prior_edges: Sequence[OptimizedEdge],
    source_id: str,
    target_id: str,
) -> float:
    """Total penalty of a candidate pair against earlier routed edges."""
    src_used = used_attachments(source_id, prior_edges, "source")
    tgt_used = used_attachments(target_id, prior_edges, "target")
    return (
        clustering_penalty(source_point, src_used)
        + clustering_penalty(target_point, tgt_used)
        + crossing_penalty(source_point, target_point, prior_edges)
    )


def find_optimal_attachment_points(
    source: Node,
    target: Node,
    prior_edges: Sequence[OptimizedEdge] = (),
    resolution: int = ATTACHMENT_RESOLUTION,
) -> AttachmentChoice:
    """Pick the cheapest pair of boundary points connecting two nodes.

    Brute force over all candidate pairs. Cost is Euclidean length plus
    :func:`conflict_penalty`. Equal costs are resolved in favour of the
    pair whose points sit closer to their node centers (side midpoints
    over corners); anything still tied goes to the pair enumerated first.
    The returned ``path_length`` is the winning total cost.
    """
    src_bounds = node_bounds(source)
    tgt_bounds = node_bounds(target)
    src_points = generate_attachment_points(src_bounds, resolution)
    tgt_points = generate_attachment_points(tgt_bounds, resolution)

    # Clustering only depends on one endpoint, so score each candidate once
    src_used = used_attachments(source.id, prior_edges, "source")
    tgt_used = used_attachments(target.id, prior_edges, "target")
    tgt_scored = [
        (
            p,
            clustering_penalty(p, tgt_used),
            distance(tgt_bounds.center_x, tgt_bounds.center_y, p.x, p.y),
        )
        for p in tgt_points
    ]

    best_source = src_points[0]
    best_target = tgt_points[0]
    best_cost = math.inf
    best_offset = math.inf

    for sp in src_points:
        src_cluster = clustering_penalty(sp, src_used)
        src_offset = distance(src_bounds.center_x, src_bounds.center_y, sp.x, sp.y)
        for tp, tgt_cluster, tgt_offset in tgt_scored:
            cost = (
                distance(sp.x, sp.y, tp.x, tp.y)
                + src_cluster
                + tgt_cluster
                + crossing_penalty(sp, tp, prior_edges)
            )
            offset = src_offset + tgt_offset
            if cost < best_cost - COST_TOLERANCE or (
                cost <= best_cost + COST_TOLERANCE
                and offset < best_offset - COST_TOLERANCE
            ):
                best_cost = cost
                best_offset = offset
                best_source = sp
                best_target = tp

    return AttachmentChoice(
        source=best_source, target=best_target, path_length=best_cost
    )


def order_edges(edges: Iterable[Edge]) -> list[Edge]:
    """Stable sort by routing priority (lowest first)."""
    return sorted(edges, key=lambda e: e.priority)


def optimize_all_edges(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    resolution: int = ATTACHMENT_RESOLUTION,
) -> list[OptimizedEdge]:
    """Run one optimization pass over all edges.

    Edges are routed one at a time in priority order, each against the
    edges routed before it. Edges with a missing endpoint are skipped, and
    only the first edge per ordered (source, target) pair is routed.
    """
    node_map = {node.id: node for node in nodes}
    optimized: list[OptimizedEdge] = []
    seen: set[tuple[str, str]] = set()

    for edge in order_edges(edges):
        src = node_map.get(edge.source)
        tgt = node_map.get(edge.target)
        if src is None or tgt is None:
            logger.debug(
                "Skipping edge %s: missing node %s",
                edge.id,
                edge.source if src is None else edge.target,
            )
            continue

        pair = (edge.source, edge.target)
        if pair in seen:
            logger.debug("Skipping edge %s: duplicate of %s -> %s", edge.id, *pair)
            continue
        seen.add(pair)

        choice = find_optimal_attachment_points(src, tgt, optimized, resolution)
        optimized.append(
            OptimizedEdge(
                edge=edge,
                source_attachment=choice.source,
                target_attachment=choice.target,
                path_length=choice.path_length,
            )
        )

    logger.debug("Routed %d edges across %d nodes", len(optimized), len(node_map))
    return optimized
