"""Dark theme (the default)."""

from djgraph.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#0a0a0a",
    node_fill="#1f2937",
    node_stroke="rgba(255, 255, 255, 0.15)",
    node_stroke_width=1.0,
    node_corner_radius=8.0,
    label_color="#ffffff",
    subtitle_color="rgba(255, 255, 255, 0.6)",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    subtitle_font_size=10.0,
    title_color="#ffffff",
    title_font_size=22.0,
    transition_color="#10b981",
    mashup_color="#8b5cf6",
    edge_width=2.0,
    legend_text_color="#e0e0e0",
    legend_font_size=13.0,
)
