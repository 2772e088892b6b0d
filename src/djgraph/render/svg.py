"""SVG generation for track graphs using drawsvg."""

from __future__ import annotations

from collections.abc import Sequence

import drawsvg as draw

from djgraph.layout.engine import GraphLayout
from djgraph.layout.radial import node_degrees
from djgraph.layout.routing import generate_edge_path
from djgraph.parser.model import ConnectionKind, Node, OptimizedEdge
from djgraph.render.constants import (
    ARROW_SIZE,
    CANVAS_PADDING,
    HUB_BADGE_FONT_SIZE,
    HUB_BADGE_RADIUS,
    HUB_THRESHOLD,
    LABEL_CHAR_WIDTH_RATIO,
    LEGEND_LINE_HEIGHT,
    LEGEND_SWATCH_WIDTH,
    LEGEND_TEXT_GAP,
    NODE_TEXT_INSET,
    TITLE_HEIGHT,
)
from djgraph.render.style import Theme


def render_svg(
    layout: GraphLayout,
    theme: Theme,
    title: str = "",
    width: int | None = None,
    height: int | None = None,
    padding: float = CANVAS_PADDING,
    debug: bool = False,
) -> str:
    """Render a laid-out track graph to an SVG string.

    Layout coordinates are shifted so the graph's bounding box starts at
    ``padding``. Tracks with at least ``HUB_THRESHOLD`` connections get the
    hub colours and a count badge. With ``debug`` the chosen attachment
    points are marked.
    """
    if not layout.nodes:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    min_x = min(n.x for n in layout.nodes)
    min_y = min(n.y for n in layout.nodes)
    max_x = max(n.x + n.resolved_width for n in layout.nodes)
    max_y = max(n.y + n.resolved_height for n in layout.nodes)

    top = padding + (TITLE_HEIGHT if title else 0.0)
    legend_height = _legend_height(layout.routes)

    svg_width = width or int(max_x - min_x + padding * 2)
    svg_height = height or int(max_y - min_y + top + padding + legend_height)

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            padding, padding,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    graph = draw.Group(transform=f"translate({padding - min_x:g},{top - min_y:g})")

    # Edges behind nodes
    _render_edges(graph, layout.routes, theme)
    _render_nodes(graph, layout.nodes, theme, node_degrees(layout.edges))
    if debug:
        _render_attachment_points(graph, layout.routes, theme)
    d.append(graph)

    _render_legend(d, layout.routes, theme, padding, top + (max_y - min_y) + padding / 2)

    return d.as_svg()


def _arrow_marker(color: str) -> draw.Marker:
    arrow = draw.Marker(-0.1, -0.5, 1.0, 0.5, scale=ARROW_SIZE, orient="auto")
    arrow.append(draw.Lines(-0.1, 0.5, -0.1, -0.5, 0.9, 0, fill=color, close=True))
    return arrow


def _render_edges(
    group: draw.Group,
    routes: Sequence[OptimizedEdge],
    theme: Theme,
) -> None:
    """Render routed edges as cubic curves between their attachment points.

    Transitions are dashed with an arrow head; mashups are solid.
    """
    markers: dict[str, draw.Marker] = {}
    for route in routes:
        color = theme.edge_color(route.kind)
        extra: dict[str, object] = {}
        if route.kind is not ConnectionKind.MASHUP:
            if color not in markers:
                markers[color] = _arrow_marker(color)
            extra["marker_end"] = markers[color]
            extra["stroke_dasharray"] = theme.transition_dash

        group.append(draw.Path(
            d=generate_edge_path(route.source_attachment, route.target_attachment),
            stroke=color,
            stroke_width=theme.edge_width,
            fill="none",
            stroke_linecap="round",
            **extra,
        ))


def _render_nodes(
    group: draw.Group,
    nodes: Sequence[Node],
    theme: Theme,
    degrees: dict[str, int],
) -> None:
    """Render track nodes as rounded rectangles with title and artist."""
    for node in nodes:
        w = node.resolved_width
        h = node.resolved_height
        degree = degrees.get(node.id, 0)
        is_hub = degree >= HUB_THRESHOLD
        group.append(draw.Rectangle(
            node.x, node.y, w, h,
            rx=theme.node_corner_radius, ry=theme.node_corner_radius,
            fill=theme.hub_fill if is_hub else theme.node_fill,
            stroke=theme.hub_stroke if is_hub else theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))
        if is_hub:
            _render_hub_badge(group, node.x + w, node.y, degree, theme)

        text_x = node.x + NODE_TEXT_INSET
        inner = w - NODE_TEXT_INSET * 2
        group.append(draw.Text(
            _truncate(node.label or node.id, inner, theme.label_font_size),
            theme.label_font_size,
            text_x, node.y + h * 0.4,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            font_weight="bold",
            dominant_baseline="central",
        ))
        if node.subtitle:
            group.append(draw.Text(
                _truncate(node.subtitle, inner, theme.subtitle_font_size),
                theme.subtitle_font_size,
                text_x, node.y + h * 0.7,
                fill=theme.subtitle_color,
                font_family=theme.label_font_family,
                dominant_baseline="central",
            ))


def _render_hub_badge(
    group: draw.Group, x: float, y: float, count: int, theme: Theme
) -> None:
    """Connection-count badge centered on a hub's top-right corner."""
    group.append(draw.Circle(x, y, HUB_BADGE_RADIUS, fill=theme.hub_badge_color))
    group.append(draw.Text(
        str(count),
        HUB_BADGE_FONT_SIZE,
        x, y,
        fill=theme.hub_badge_text_color,
        font_family=theme.label_font_family,
        font_weight="bold",
        text_anchor="middle",
        dominant_baseline="central",
    ))


def _render_attachment_points(
    group: draw.Group,
    routes: Sequence[OptimizedEdge],
    theme: Theme,
) -> None:
    for route in routes:
        for point, color in (
            (route.source_attachment, theme.debug_source_color),
            (route.target_attachment, theme.debug_target_color),
        ):
            group.append(draw.Circle(
                point.x, point.y, theme.debug_point_radius,
                fill=color, opacity=0.7,
            ))


def _legend_entries(routes: Sequence[OptimizedEdge]) -> list[ConnectionKind]:
    kinds = {route.kind or ConnectionKind.TRANSITION for route in routes}
    return [kind for kind in ConnectionKind if kind in kinds]


def _legend_height(routes: Sequence[OptimizedEdge]) -> float:
    entries = _legend_entries(routes)
    return LEGEND_LINE_HEIGHT * len(entries) if entries else 0.0


def _render_legend(
    d: draw.Drawing,
    routes: Sequence[OptimizedEdge],
    theme: Theme,
    x: float,
    y: float,
) -> None:
    """Render one swatch per connection kind present in the graph."""
    for i, kind in enumerate(_legend_entries(routes)):
        entry_y = y + i * LEGEND_LINE_HEIGHT + LEGEND_LINE_HEIGHT / 2
        swatch: dict[str, object] = {}
        if kind is ConnectionKind.TRANSITION:
            swatch["stroke_dasharray"] = theme.transition_dash
        d.append(draw.Line(
            x, entry_y, x + LEGEND_SWATCH_WIDTH, entry_y,
            stroke=theme.edge_color(kind),
            stroke_width=theme.edge_width,
            **swatch,
        ))
        d.append(draw.Text(
            kind.value.capitalize(),
            theme.legend_font_size,
            x + LEGEND_SWATCH_WIDTH + LEGEND_TEXT_GAP, entry_y,
            fill=theme.legend_text_color,
            font_family=theme.label_font_family,
            dominant_baseline="central",
        ))


def _truncate(text: str, max_width: float, font_size: float) -> str:
    """Clip text to roughly fit ``max_width``, ending in an ellipsis."""
    max_chars = int(max_width / (font_size * LABEL_CHAR_WIDTH_RATIO))
    if max_chars <= 1 or len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + "…"
