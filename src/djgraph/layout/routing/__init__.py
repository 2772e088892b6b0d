"""Edge routing subpackage.

Public API:
- optimize_all_edges: One greedy optimization pass over an edge list
- find_optimal_attachment_points: Best attachment pair for a single edge
- generate_attachment_points: Candidate points around a node rectangle
- EdgeRoutingManager: Cached, throttled wrapper for interactive use
- generate_edge_path: SVG path data for a routed edge
"""

from djgraph.layout.routing.attachment import (
    AttachmentChoice,
    conflict_penalty,
    find_optimal_attachment_points,
    generate_attachment_points,
    optimize_all_edges,
)
from djgraph.layout.routing.cache import EdgeRoutingManager, routing_cache_key
from djgraph.layout.routing.geometry import segments_intersect
from djgraph.layout.routing.paths import edge_control_points, generate_edge_path

__all__ = [
    "AttachmentChoice",
    "EdgeRoutingManager",
    "conflict_penalty",
    "edge_control_points",
    "find_optimal_attachment_points",
    "generate_attachment_points",
    "generate_edge_path",
    "optimize_all_edges",
    "routing_cache_key",
    "segments_intersect",
]
