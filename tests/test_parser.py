"""Tests for the set-list parser."""

import pytest

from djgraph.parser.model import ConnectionKind
from djgraph.parser.setlist import parse_setlist, parse_track, track_slug


def test_parse_title():
    graph = parse_setlist("%%djgraph title: Friday Warm-up\n")
    assert graph.title == "Friday Warm-up"


def test_comments_and_blank_lines_skipped():
    graph = parse_setlist("%% just a note\n\n   \nA - B\n")
    assert list(graph.tracks) == ["a-b"]
    assert graph.connections == []


def test_parse_track_title_and_artist():
    track = parse_track("Blue Monday - New Order")
    assert track.title == "Blue Monday"
    assert track.artist == "New Order"
    assert track.id == "blue-monday-new-order"


def test_parse_track_fallbacks():
    assert parse_track("Untitled").artist == "Unknown Artist"
    assert parse_track(" - Someone").title == "Unknown Track"


def test_slug_drops_punctuation():
    assert track_slug("Don't Stop", "Fleetwood  Mac!") == "dont-stop-fleetwood-mac"


def test_transition_line():
    graph = parse_setlist("Blue Monday - New Order --> Digital Love - Daft Punk\n")
    assert len(graph.tracks) == 2
    (conn,) = graph.connections
    assert conn.kind is ConnectionKind.TRANSITION
    assert conn.track_a == "blue-monday-new-order"
    assert conn.track_b == "digital-love-daft-punk"


def test_mashup_line():
    graph = parse_setlist("A - X === B - Y\n")
    (conn,) = graph.connections
    assert conn.kind is ConnectionKind.MASHUP


def test_chained_connections():
    graph = parse_setlist("A - X --> B - Y === C - Z\n")
    kinds = [(c.track_a, c.track_b, c.kind) for c in graph.connections]
    assert kinds == [
        ("a-x", "b-y", ConnectionKind.TRANSITION),
        ("b-y", "c-z", ConnectionKind.MASHUP),
    ]


def test_repeated_track_created_once():
    graph = parse_setlist("A - X --> B - Y\nB - Y --> A - X\n")
    assert len(graph.tracks) == 2
    assert len(graph.connections) == 2
    assert graph.connections[0].id != graph.connections[1].id


def test_track_connections():
    graph = parse_setlist("A - X --> B - Y\nC - Z --> A - X\nB - Y --> C - Z\n")
    assert len(graph.track_connections("a-x")) == 2


def test_dangling_arrow_rejected():
    with pytest.raises(ValueError, match="Line 2"):
        parse_setlist("A - X --> B - Y\nC - Z -->\n")


def test_graph_syntax_rejected():
    with pytest.raises(ValueError, match="set list"):
        parse_setlist("graph LR\n    a --> b\n")
