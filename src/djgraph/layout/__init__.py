"""Node placement and edge routing."""

from djgraph.layout.engine import GraphLayout, build_graph, compute_layout
from djgraph.layout.radial import radial_layout

__all__ = ["GraphLayout", "build_graph", "compute_layout", "radial_layout"]
