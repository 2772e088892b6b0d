"""Theme and style constants for graph rendering."""

from __future__ import annotations

from dataclasses import dataclass

from djgraph.parser.model import ConnectionKind


@dataclass
class Theme:
    """Visual theme for a track graph."""

    name: str
    background_color: str
    node_fill: str
    node_stroke: str
    node_stroke_width: float
    node_corner_radius: float
    label_color: str
    subtitle_color: str
    label_font_family: str
    label_font_size: float
    subtitle_font_size: float
    title_color: str
    title_font_size: float
    transition_color: str
    mashup_color: str
    edge_width: float
    legend_text_color: str
    legend_font_size: float
    transition_dash: str = "5 5"
    # Hub tracks (many connections)
    hub_fill: str = "rgba(245, 158, 11, 0.1)"
    hub_stroke: str = "rgba(245, 158, 11, 0.5)"
    hub_badge_color: str = "#f59e0b"
    hub_badge_text_color: str = "#000000"
    # Debug overlay (chosen attachment points)
    debug_source_color: str = "#ff6b6b"
    debug_target_color: str = "#51cf66"
    debug_point_radius: float = 2.0

    def edge_color(self, kind: ConnectionKind | None) -> str:
        if kind is ConnectionKind.MASHUP:
            return self.mashup_color
        return self.transition_color
