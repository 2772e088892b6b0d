"""Layout and routing constants.

Centralizes magic numbers from radial.py, routing/attachment.py,
routing/cache.py and routing/paths.py.
"""

# ---------------------------------------------------------------------------
# Radial layout
# ---------------------------------------------------------------------------
CENTER_X: float = 400.0
"""X coordinate the radial layout is centered on."""

CENTER_Y: float = 300.0
"""Y coordinate the radial layout is centered on."""

BASE_RADIUS: float = 250.0
"""Ring radius for nodes with no connections."""

RADIUS_FALLOFF: float = 0.06
"""Fraction of the base radius removed per incident edge."""

MIN_RADIUS_FACTOR: float = 0.4
"""Floor on the radius multiplier; reached at degree 10."""

JITTER: float = 20.0
"""Maximum absolute random offset on each axis."""

# ---------------------------------------------------------------------------
# Attachment optimizer
# ---------------------------------------------------------------------------
ATTACHMENT_RESOLUTION: int = 8
"""Subdivisions per node side; each side yields resolution + 1 candidates."""

ATTACHMENT_RADIUS: float = 10.0
"""Attachment points closer than this on the same node are penalized."""

CLUSTER_WEIGHT: float = 5.0
"""Penalty per unit of distance inside the attachment radius."""

CROSSING_PENALTY: float = 50.0
"""Flat penalty for crossing an already routed edge."""

PARALLEL_EPSILON: float = 1e-10
"""Determinant magnitude below which two segments count as parallel."""

COST_TOLERANCE: float = 1e-9
"""Costs closer than this are treated as a tie."""

# ---------------------------------------------------------------------------
# Routing cache
# ---------------------------------------------------------------------------
UPDATE_THROTTLE_MS: float = 16.0
"""Minimum gap between accepted position updates (one 60Hz frame)."""

# ---------------------------------------------------------------------------
# Edge paths
# ---------------------------------------------------------------------------
CURVATURE: float = 0.3
"""Control point distance as a fraction of the attachment-to-attachment span."""
