"""Layout coordinator: builds the node/edge graph, places nodes, routes edges."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from djgraph.layout.constants import (
    ATTACHMENT_RESOLUTION,
    BASE_RADIUS,
    CENTER_X,
    CENTER_Y,
    JITTER,
)
from djgraph.layout.radial import radial_layout
from djgraph.layout.routing import optimize_all_edges
from djgraph.parser.model import (
    Connection,
    ConnectionKind,
    Edge,
    Node,
    OptimizedEdge,
    Track,
    TrackGraph,
)

# Transitions are routed before mashups so they get the cleaner attachment points.
KIND_PRIORITY: dict[ConnectionKind, int] = {
    ConnectionKind.TRANSITION: 0,
    ConnectionKind.MASHUP: 1,
}


@dataclass
class GraphLayout:
    """Positioned nodes, their edges, and the routed edges."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    routes: list[OptimizedEdge] = field(default_factory=list)

    def node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


def build_graph(
    tracks: Iterable[Track],
    connections: Iterable[Connection],
) -> tuple[list[Node], list[Edge]]:
    """Map tracks and connections onto generic layout nodes and edges.

    Nodes come out unpositioned and unsized; edges carry the connection's
    kind and its routing priority.
    """
    nodes = [
        Node(id=track.id, label=track.title, subtitle=track.artist)
        for track in tracks
    ]
    edges = [
        Edge(
            id=conn.id,
            source=conn.track_a,
            target=conn.track_b,
            priority=KIND_PRIORITY.get(conn.kind, len(KIND_PRIORITY)),
            kind=conn.kind,
        )
        for conn in connections
    ]
    return nodes, edges


def compute_layout(
    graph: TrackGraph,
    center: tuple[float, float] = (CENTER_X, CENTER_Y),
    base_radius: float = BASE_RADIUS,
    jitter: float = JITTER,
    resolution: int = ATTACHMENT_RESOLUTION,
    seed: int | None = None,
) -> GraphLayout:
    """Compute node positions and edge attachment points for a track graph."""
    nodes, edges = build_graph(graph.tracks.values(), graph.connections)
    placed = radial_layout(
        nodes,
        edges,
        center=center,
        base_radius=base_radius,
        jitter=jitter,
        rng=random.Random(seed),
    )
    routes = optimize_all_edges(placed, edges, resolution=resolution)
    return GraphLayout(nodes=placed, edges=edges, routes=routes)
