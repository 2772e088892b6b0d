"""Tests for attachment point generation and edge optimization."""

import math
import random

import pytest

from djgraph.layout.routing import (
    conflict_penalty,
    find_optimal_attachment_points,
    generate_attachment_points,
    optimize_all_edges,
    segments_intersect,
)
from djgraph.layout.routing.attachment import clustering_penalty, used_attachments
from djgraph.parser.model import (
    AttachmentPoint,
    ConnectionKind,
    Edge,
    Node,
    OptimizedEdge,
    Side,
    node_bounds,
)
from routing_validator import on_perimeter, validate_routes


def _node(node_id, x, y, width=120.0, height=60.0):
    return Node(id=node_id, x=x, y=y, width=width, height=height)


def _point(x, y, side=Side.TOP):
    return AttachmentPoint(x=x, y=y, side=side, angle=0.0)


# --- Candidate generation ---


def test_generate_point_count():
    """Default resolution yields 9 points per side, 36 in total."""
    points = generate_attachment_points(node_bounds(_node("a", 0, 0)))
    assert len(points) == 36
    for side in Side:
        assert sum(1 for p in points if p.side is side) == 9


def test_generate_custom_resolution():
    points = generate_attachment_points(node_bounds(_node("a", 0, 0)), resolution=4)
    assert len(points) == 20


def test_generate_rejects_zero_resolution():
    with pytest.raises(ValueError):
        generate_attachment_points(node_bounds(_node("a", 0, 0)), resolution=0)


def test_perimeter_walk_order():
    """Points walk top, right, bottom, left as one continuous outline."""
    points = generate_attachment_points(node_bounds(_node("a", 10, 20)))
    assert (points[0].x, points[0].y, points[0].side) == (10, 20, Side.TOP)
    assert (points[8].x, points[8].y) == (130, 20)
    assert (points[9].x, points[9].y, points[9].side) == (130, 20, Side.RIGHT)
    assert (points[17].x, points[17].y) == (130, 80)
    assert (points[18].x, points[18].y, points[18].side) == (130, 80, Side.BOTTOM)
    assert (points[26].x, points[26].y) == (10, 80)
    assert (points[27].x, points[27].y, points[27].side) == (10, 80, Side.LEFT)
    assert (points[35].x, points[35].y) == (10, 20)


def test_point_angles_from_center():
    points = generate_attachment_points(node_bounds(_node("a", 0, 0)))
    right_mid = points[13]
    top_mid = points[4]
    assert (right_mid.x, right_mid.y) == (120, 30)
    assert right_mid.angle == pytest.approx(0.0)
    assert (top_mid.x, top_mid.y) == (60, 0)
    assert top_mid.angle == pytest.approx(-math.pi / 2)


def test_boundary_containment():
    """Every candidate lies on the outline of its node."""
    rng = random.Random(7)
    for _ in range(25):
        node = _node(
            "n",
            rng.uniform(-500, 500),
            rng.uniform(-500, 500),
            width=rng.uniform(1, 300),
            height=rng.uniform(1, 300),
        )
        bounds = node_bounds(node)
        for point in generate_attachment_points(bounds, resolution=rng.randint(1, 12)):
            assert on_perimeter(point, bounds), point


def test_default_node_size():
    """Unsized nodes use the 120 x 60 track size."""
    bounds = node_bounds(Node(id="a", x=5, y=5))
    assert (bounds.width, bounds.height) == (120, 60)
    assert (bounds.center_x, bounds.center_y) == (65, 35)


# --- Geometry ---


def test_segments_cross():
    assert segments_intersect(0, 0, 10, 10, 0, 10, 10, 0)


def test_segments_apart():
    assert not segments_intersect(0, 0, 10, 0, 0, 5, 10, 6)


def test_parallel_segments_never_intersect():
    assert not segments_intersect(0, 0, 10, 0, 0, 0, 10, 0)
    assert not segments_intersect(0, 0, 10, 10, 0, 1, 10, 11)


def test_touching_endpoints_intersect():
    assert segments_intersect(0, 0, 10, 0, 10, 0, 10, 10)


# --- Penalties ---


def test_clustering_penalty_linear():
    used = [_point(0, 0)]
    assert clustering_penalty(_point(0, 0), used) == pytest.approx(50.0)
    assert clustering_penalty(_point(4, 0), used) == pytest.approx(30.0)
    assert clustering_penalty(_point(10, 0), used) == 0.0
    assert clustering_penalty(_point(25, 0), used) == 0.0


def test_crossing_penalty_monotonicity():
    """A crossing pair costs at least 50 more than an equal-length clear pair."""
    prior = OptimizedEdge(
        edge=Edge(id="p", source="p", target="q"),
        source_attachment=_point(50, -50, Side.BOTTOM),
        target_attachment=_point(50, 50, Side.TOP),
        path_length=100.0,
    )
    crossing = conflict_penalty(_point(0, 0, Side.RIGHT), _point(100, 0, Side.LEFT),
                                [prior], "a", "b")
    clear = conflict_penalty(_point(0, 200, Side.RIGHT), _point(100, 200, Side.LEFT),
                             [prior], "a", "b")
    assert crossing - clear >= 50.0


def test_clustering_ignores_other_edge_role():
    """An entry point on a node does not repel an exit candidate."""
    prior = OptimizedEdge(
        edge=Edge(id="p", source="x", target="a"),
        source_attachment=_point(500, 500),
        target_attachment=_point(0, 0),
        path_length=0.0,
    )
    penalty = conflict_penalty(_point(0, 0), _point(900, 900), [prior], "a", "b")
    assert penalty == 0.0


def test_clustering_counts_same_edge_role():
    """Earlier exits repel exit candidates, earlier entries repel entry candidates."""
    leaving = OptimizedEdge(
        edge=Edge(id="p", source="a", target="x"),
        source_attachment=_point(0, 0),
        target_attachment=_point(500, 500),
        path_length=0.0,
    )
    entering = OptimizedEdge(
        edge=Edge(id="q", source="y", target="b"),
        source_attachment=_point(-500, 700),
        target_attachment=_point(900, 900),
        path_length=0.0,
    )
    exit_penalty = conflict_penalty(_point(0, 0), _point(2000, 0), [leaving], "a", "b")
    entry_penalty = conflict_penalty(_point(0, 2000), _point(900, 900), [entering], "a", "b")
    assert exit_penalty == pytest.approx(50.0)
    assert entry_penalty == pytest.approx(50.0)


def test_used_attachments_by_role():
    prior = [OptimizedEdge(
        edge=Edge(id="ab", source="a", target="b"),
        source_attachment=_point(120, 30, Side.RIGHT),
        target_attachment=_point(300, 30, Side.LEFT),
        path_length=180.0,
    )]
    assert used_attachments("b", prior, "source") == []
    assert used_attachments("b", prior, "target") == [prior[0].target_attachment]
    assert used_attachments("a", prior) == [prior[0].source_attachment]
    with pytest.raises(ValueError):
        used_attachments("a", prior, "both")


# --- Single edge ---


def test_two_nodes_side_by_side():
    """Aligned nodes connect right side midpoint to left side midpoint."""
    a = _node("a", 0, 0)
    b = _node("b", 300, 0)
    choice = find_optimal_attachment_points(a, b, [])
    assert choice.source.side is Side.RIGHT
    assert choice.target.side is Side.LEFT
    assert (choice.source.x, choice.source.y) == (120, 30)
    assert (choice.target.x, choice.target.y) == (300, 30)
    assert choice.path_length == pytest.approx(180.0)


def test_stacked_nodes_use_bottom_and_top():
    a = _node("a", 0, 0)
    b = _node("b", 0, 200)
    choice = find_optimal_attachment_points(a, b)
    assert choice.source.side is Side.BOTTOM
    assert choice.target.side is Side.TOP
    assert choice.path_length == pytest.approx(140.0)


def test_optimizer_is_deterministic():
    a = _node("a", 13, 47)
    b = _node("b", 377, 211)
    first = find_optimal_attachment_points(a, b, [])
    second = find_optimal_attachment_points(a, b, [])
    assert first == second


def test_self_loop_has_zero_length():
    """A self-loop degenerates to a zero-length edge rather than failing."""
    a = _node("a", 0, 0)
    choice = find_optimal_attachment_points(a, a, [])
    assert choice.path_length == pytest.approx(0.0)
    assert (choice.source.x, choice.source.y) == (choice.target.x, choice.target.y)


def test_zero_size_node_still_routes():
    dot = _node("dot", 50, 50, width=0, height=0)
    b = _node("b", 300, 0)
    choice = find_optimal_attachment_points(dot, b)
    assert (choice.source.x, choice.source.y) == (50, 50)
    assert math.isfinite(choice.path_length)


# --- Full pass ---


def test_shared_source_edges_spread_out():
    """Edges leaving the same node claim attachment points at least 10 apart."""
    src = _node("s", 0, 0)
    targets = [_node("t1", 400, 0), _node("t2", 600, 0), _node("t3", 800, 0)]
    edges = [Edge(id=f"e{i}", source="s", target=t.id) for i, t in enumerate(targets)]

    routes = optimize_all_edges([src, *targets], edges)

    points = [(r.source_attachment.x, r.source_attachment.y) for r in routes]
    assert len(points) == 3
    for i in range(3):
        for j in range(i + 1, 3):
            assert math.dist(points[i], points[j]) > 10.0
    # The first edge is unconstrained and keeps the straight midpoint route
    assert points[0] == (120, 30)


def test_reverse_edge_reuses_entry_point():
    """b -> a may leave b where a -> b entered it."""
    a = _node("a", 0, 0)
    b = _node("b", 300, 0)
    edges = [Edge(id="ab", source="a", target="b"), Edge(id="ba", source="b", target="a")]

    forward, back = optimize_all_edges([a, b], edges)

    assert (forward.target_attachment.x, forward.target_attachment.y) == (300, 30)
    assert (back.source_attachment.x, back.source_attachment.y) == (300, 30)
    assert (back.target_attachment.x, back.target_attachment.y) == (120, 30)
    assert back.path_length == pytest.approx(180.0)


def test_missing_node_is_skipped():
    nodes = [_node("a", 0, 0), _node("b", 300, 0)]
    edges = [
        Edge(id="ok", source="a", target="b"),
        Edge(id="ghost", source="a", target="nowhere"),
    ]
    routes = optimize_all_edges(nodes, edges)
    assert [r.id for r in routes] == ["ok"]


def test_duplicate_pairs_routed_once():
    nodes = [_node("a", 0, 0), _node("b", 300, 0)]
    edges = [
        Edge(id="first", source="a", target="b"),
        Edge(id="again", source="a", target="b"),
        Edge(id="back", source="b", target="a"),
    ]
    routes = optimize_all_edges(nodes, edges)
    assert [r.id for r in routes] == ["first", "back"]


def test_priority_orders_routing():
    """Lower priority values are routed (and returned) first; ties keep input order."""
    nodes = [_node("a", 0, 0), _node("b", 300, 0), _node("c", 0, 300)]
    edges = [
        Edge(id="m1", source="a", target="b", priority=1, kind=ConnectionKind.MASHUP),
        Edge(id="t1", source="a", target="c", priority=0, kind=ConnectionKind.TRANSITION),
        Edge(id="m2", source="b", target="c", priority=1, kind=ConnectionKind.MASHUP),
        Edge(id="t2", source="c", target="b", priority=0, kind=ConnectionKind.TRANSITION),
    ]
    routes = optimize_all_edges(nodes, edges)
    assert [r.id for r in routes] == ["t1", "t2", "m1", "m2"]


def test_routes_pass_validation():
    rng = random.Random(3)
    nodes = [_node(f"n{i}", rng.uniform(0, 800), rng.uniform(0, 600)) for i in range(8)]
    edges = [
        Edge(id=f"e{i}", source=f"n{rng.randrange(8)}", target=f"n{rng.randrange(8)}")
        for i in range(15)
    ]
    routes = optimize_all_edges(nodes, edges)
    assert validate_routes(nodes, routes) == []


def test_empty_pass():
    assert optimize_all_edges([], []) == []
    assert optimize_all_edges([_node("a", 0, 0)], []) == []
