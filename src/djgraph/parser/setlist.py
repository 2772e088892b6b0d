"""Parser for plain-text set lists.

Uses a simple line-by-line approach:

    %%djgraph title: Friday warm-up
    %% comments start with two percent signs
    Blue Monday - New Order --> Bizarre Love Triangle - New Order
    One More Time - Daft Punk === Music Sounds Better With You - Stardust
    Windowlicker - Aphex Twin

``-->`` records a transition (directed), ``===`` a mashup, and a line
without an arrow just declares a track.
"""

from __future__ import annotations

import re
import uuid

from djgraph.parser.model import Connection, ConnectionKind, Track, TrackGraph

ARROWS: dict[str, ConnectionKind] = {
    "-->": ConnectionKind.TRANSITION,
    "===": ConnectionKind.MASHUP,
}

_ARROW_PATTERN = re.compile(r"\s*(-->|===)\s*")


def parse_track(text: str) -> Track:
    """Parse ``"Title - Artist"`` into a Track with a slug id.

    Missing parts fall back to ``Unknown Track`` / ``Unknown Artist``.
    """
    parts = text.split(" - ")
    title = parts[0].strip() or "Unknown Track"
    artist = (parts[1].strip() if len(parts) > 1 else "") or "Unknown Artist"
    return Track(id=track_slug(title, artist), title=title, artist=artist)


def track_slug(title: str, artist: str) -> str:
    """Lowercase, dash-joined id; characters outside [a-z0-9-] are dropped."""
    slug = re.sub(r"\s+", "-", f"{title}-{artist}".lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def new_connection_id() -> str:
    return uuid.uuid4().hex[:12]


def parse_setlist(text: str) -> TrackGraph:
    """Parse a set list into tracks and connections."""
    _check_unsupported_input(text)

    graph = TrackGraph()
    for lineno, line in enumerate(text.strip().split("\n"), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith("%%djgraph"):
            _parse_directive(stripped, graph)
            continue

        if stripped.startswith("%%"):
            continue

        if _ARROW_PATTERN.search(stripped):
            _parse_connection(stripped, graph, lineno)
            continue

        graph.add_track(parse_track(stripped))

    return graph


def _check_unsupported_input(text: str) -> None:
    """Detect formats that look like graphs but are not set lists."""
    first = next((ln.strip() for ln in text.split("\n") if ln.strip()), "")
    if first.startswith(("graph ", "flowchart ", "digraph")):
        raise ValueError(
            "This looks like a Mermaid or Graphviz graph, not a set list. "
            "Write one connection per line, e.g. "
            "'Track A - Artist --> Track B - Artist'."
        )


def _parse_directive(line: str, graph: TrackGraph) -> None:
    """Parse a %%djgraph directive line."""
    content = line[len("%%djgraph") :].strip()
    if content.startswith("title:"):
        graph.title = content[len("title:") :].strip()


def _parse_connection(line: str, graph: TrackGraph, lineno: int) -> None:
    """Parse ``A --> B`` or ``A === B``. Chains like ``A --> B --> C`` are allowed."""
    pieces = _ARROW_PATTERN.split(line)
    # split keeps the captured arrows: [track, arrow, track, arrow, track, ...]
    tracks = pieces[0::2]
    arrows = pieces[1::2]
    if any(not t.strip() for t in tracks):
        raise ValueError(f"Line {lineno}: arrow without a track on both sides: {line!r}")

    parsed = [parse_track(t) for t in tracks]
    for track in parsed:
        graph.add_track(track)

    for (a, b), arrow in zip(zip(parsed, parsed[1:]), arrows):
        graph.add_connection(
            Connection(
                id=new_connection_id(),
                kind=ARROWS[arrow],
                track_a=a.id,
                track_b=b.id,
            )
        )
