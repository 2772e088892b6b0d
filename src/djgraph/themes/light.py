"""Light theme."""

from djgraph.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    node_fill="#ffffff",
    node_stroke="#333333",
    node_stroke_width=1.5,
    node_corner_radius=8.0,
    label_color="#111111",
    subtitle_color="#666666",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    subtitle_font_size=10.0,
    title_color="#111111",
    title_font_size=22.0,
    transition_color="#059669",
    mashup_color="#7c3aed",
    edge_width=2.0,
    legend_text_color="#333333",
    legend_font_size=13.0,
    debug_source_color="#dc2626",
    debug_target_color="#16a34a",
    hub_fill="#fffbeb",
    hub_stroke="#d97706",
    hub_badge_color="#d97706",
    hub_badge_text_color="#ffffff",
)
