"""Curved path geometry for routed edges."""

from __future__ import annotations

from djgraph.layout.constants import CURVATURE
from djgraph.layout.routing.geometry import distance
from djgraph.parser.model import AttachmentPoint


def edge_control_points(
    source: AttachmentPoint,
    target: AttachmentPoint,
    curvature: float = CURVATURE,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Cubic Bezier control points for an edge between two attachments.

    Each control point is pushed out from its attachment along the side's
    outward normal by ``curvature`` times the attachment-to-attachment
    distance, so curves leave and enter nodes perpendicular to the side.
    """
    reach = distance(source.x, source.y, target.x, target.y) * curvature
    snx, sny = source.side.normal
    tnx, tny = target.side.normal
    return (
        (source.x + snx * reach, source.y + sny * reach),
        (target.x + tnx * reach, target.y + tny * reach),
    )


def _fmt(value: float) -> str:
    # 174.0 -> "174", 1234.5678 -> "1234.568"
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def generate_edge_path(
    source: AttachmentPoint,
    target: AttachmentPoint,
    curvature: float = CURVATURE,
) -> str:
    """SVG path data for the curved edge: ``M sx,sy C c1 c2 tx,ty``."""
    (c1x, c1y), (c2x, c2y) = edge_control_points(source, target, curvature)
    return (
        f"M {_fmt(source.x)},{_fmt(source.y)} "
        f"C {_fmt(c1x)},{_fmt(c1y)} {_fmt(c2x)},{_fmt(c2y)} "
        f"{_fmt(target.x)},{_fmt(target.y)}"
    )
