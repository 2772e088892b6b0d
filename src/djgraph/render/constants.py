"""Render constants used by svg.py.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 60.0
"""Padding around the drawn graph."""

TITLE_HEIGHT: float = 40.0
"""Vertical space reserved above the graph when a title is shown."""

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------
NODE_TEXT_INSET: float = 10.0
"""Horizontal inset of labels inside a node."""

LABEL_CHAR_WIDTH_RATIO: float = 0.55
"""Approximate character width as a fraction of font size, for truncation."""

HUB_THRESHOLD: int = 5
"""Connection count at which a track is drawn as a hub."""

HUB_BADGE_RADIUS: float = 9.0
"""Radius of the connection-count badge on a hub's top-right corner."""

HUB_BADGE_FONT_SIZE: float = 10.0
"""Font size of the count inside the hub badge."""

# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------
ARROW_SIZE: float = 4.0
"""Arrow head length in units of stroke width."""

# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
LEGEND_LINE_HEIGHT: float = 22.0
"""Vertical height per legend entry."""

LEGEND_SWATCH_WIDTH: float = 24.0
"""Width of the swatch line in the legend."""

LEGEND_TEXT_GAP: float = 10.0
"""Gap between swatch end and label text."""
