"""SVG rendering of routed track graphs."""

from djgraph.render.svg import render_svg

__all__ = ["render_svg"]
