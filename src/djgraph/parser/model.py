"""Data model for track connection graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DEFAULT_NODE_WIDTH: float = 120.0
"""Width of a track node when none is given."""

DEFAULT_NODE_HEIGHT: float = 60.0
"""Height of a track node when none is given."""


class ConnectionKind(Enum):
    """How two tracks relate to each other."""

    TRANSITION = "transition"
    MASHUP = "mashup"


class Side(Enum):
    """Side of a node rectangle where an edge can attach."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def normal(self) -> tuple[float, float]:
        """Unit vector pointing away from the node on this side (SVG axes)."""
        return _SIDE_NORMALS[self]


_SIDE_NORMALS = {
    Side.TOP: (0.0, -1.0),
    Side.RIGHT: (1.0, 0.0),
    Side.BOTTOM: (0.0, 1.0),
    Side.LEFT: (-1.0, 0.0),
}


@dataclass
class Track:
    """A music track."""

    id: str
    title: str
    artist: str


@dataclass
class Connection:
    """A recorded relationship between two tracks."""

    id: str
    kind: ConnectionKind
    track_a: str
    track_b: str
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class TrackGraph:
    """Tracks and connections as read from a set list."""

    title: str = ""
    tracks: dict[str, Track] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)

    def add_track(self, track: Track) -> None:
        self.tracks.setdefault(track.id, track)

    def add_connection(self, connection: Connection) -> None:
        self.connections.append(connection)

    def track_connections(self, track_id: str) -> list[Connection]:
        """Return connections touching a track, in insertion order."""
        return [
            c
            for c in self.connections
            if c.track_a == track_id or c.track_b == track_id
        ]

    def recent_connections(self, limit: int = 5) -> list[Connection]:
        """Return the newest connections first.

        Connections created at the same instant are ordered by insertion,
        later ones counting as newer.
        """
        ranked = sorted(
            enumerate(self.connections),
            key=lambda item: (item[1].created_at, item[0]),
            reverse=True,
        )
        return [conn for _, conn in ranked[:limit]]


@dataclass
class Node:
    """A node in the layout plane.

    ``x``/``y`` is the top-left corner. A width or height of ``None`` means
    the caller did not specify one and the default track size applies.
    """

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    label: str = ""
    subtitle: str = ""

    @property
    def resolved_width(self) -> float:
        return DEFAULT_NODE_WIDTH if self.width is None else self.width

    @property
    def resolved_height(self) -> float:
        return DEFAULT_NODE_HEIGHT if self.height is None else self.height

    @property
    def center(self) -> tuple[float, float]:
        return (
            self.x + self.resolved_width / 2,
            self.y + self.resolved_height / 2,
        )


@dataclass(frozen=True)
class Edge:
    """A directed edge between two nodes.

    ``priority`` decides routing order: lower values are routed first and
    get first pick of uncluttered attachment points.
    """

    id: str
    source: str
    target: str
    priority: int = 0
    kind: ConnectionKind | None = None


@dataclass(frozen=True)
class NodeBounds:
    """Rectangle of a node plus its derived center."""

    x: float
    y: float
    width: float
    height: float
    center_x: float
    center_y: float


def node_bounds(node: Node) -> NodeBounds:
    """Compute the bounds of a node, applying default sizes."""
    width = node.resolved_width
    height = node.resolved_height
    return NodeBounds(
        x=node.x,
        y=node.y,
        width=width,
        height=height,
        center_x=node.x + width / 2,
        center_y=node.y + height / 2,
    )


@dataclass(frozen=True)
class AttachmentPoint:
    """A candidate point on a node boundary where an edge may terminate."""

    x: float
    y: float
    side: Side
    angle: float


@dataclass(frozen=True)
class OptimizedEdge:
    """An edge with its chosen attachment points (populated by routing)."""

    edge: Edge
    source_attachment: AttachmentPoint
    target_attachment: AttachmentPoint
    path_length: float

    @property
    def id(self) -> str:
        return self.edge.id

    @property
    def source(self) -> str:
        return self.edge.source

    @property
    def target(self) -> str:
        return self.edge.target

    @property
    def priority(self) -> int:
        return self.edge.priority

    @property
    def kind(self) -> ConnectionKind | None:
        return self.edge.kind
