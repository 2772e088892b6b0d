"""In-memory track store.

Implements the storage interface the graph view reads from. Nothing is
written to disk; a fresh store starts empty.
"""

from __future__ import annotations

from datetime import datetime

from djgraph.parser.model import Connection, ConnectionKind, Track, TrackGraph
from djgraph.parser.setlist import new_connection_id, parse_track


class TrackStore:
    """Tracks keyed by id plus connections in insertion order."""

    def __init__(self) -> None:
        self._tracks: dict[str, Track] = {}
        self._connections: dict[str, Connection] = {}

    def list_tracks(self) -> list[Track]:
        return list(self._tracks.values())

    def list_connections(self) -> list[Connection]:
        return list(self._connections.values())

    def put_track(self, track: Track) -> None:
        self._tracks[track.id] = track

    def put_connection(self, connection: Connection) -> None:
        self._connections[connection.id] = connection

    def delete_connection(self, connection_id: str) -> None:
        """Remove a connection; unknown ids are ignored."""
        self._connections.pop(connection_id, None)

    def clear(self) -> None:
        self._tracks.clear()
        self._connections.clear()

    def find_or_create_track(self, text: str) -> Track:
        """Return the stored track for ``"Title - Artist"``, adding it if new."""
        track = parse_track(text)
        existing = self._tracks.get(track.id)
        if existing is not None:
            return existing
        self.put_track(track)
        return track

    def add_connection(
        self,
        track_a: str,
        track_b: str,
        kind: ConnectionKind,
        created_at: datetime | None = None,
    ) -> Connection:
        """Record a connection between two tracks given as entry text."""
        a = self.find_or_create_track(track_a)
        b = self.find_or_create_track(track_b)
        connection = Connection(
            id=new_connection_id(),
            kind=kind,
            track_a=a.id,
            track_b=b.id,
            created_at=created_at or datetime.now(),
        )
        self.put_connection(connection)
        return connection

    def to_graph(self, title: str = "") -> TrackGraph:
        """Snapshot the store as a TrackGraph."""
        return TrackGraph(
            title=title,
            tracks=dict(self._tracks),
            connections=self.list_connections(),
        )

    @classmethod
    def from_graph(cls, graph: TrackGraph) -> TrackStore:
        store = cls()
        for track in graph.tracks.values():
            store.put_track(track)
        for connection in graph.connections:
            store.put_connection(connection)
        return store
