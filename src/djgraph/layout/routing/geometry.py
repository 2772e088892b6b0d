"""Small planar geometry helpers shared by the routing modules."""

from __future__ import annotations

import math

from djgraph.layout.constants import PARALLEL_EPSILON


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def angle(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle in radians of the vector from (x1, y1) to (x2, y2)."""
    return math.atan2(y2 - y1, x2 - x1)


def segments_intersect(
    x1: float, y1: float, x2: float, y2: float,
    x3: float, y3: float, x4: float, y4: float,
    epsilon: float = PARALLEL_EPSILON,
) -> bool:
    """Check whether segment (1-2) intersects segment (3-4).

    Parametric line-line test: the segments intersect when both line
    parameters fall in [0, 1]. Touching endpoints count as intersecting.
    Parallel (and collinear) segments never intersect.
    """
    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < epsilon:
        return False

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    return 0 <= t <= 1 and 0 <= u <= 1
