"""Cached, throttled edge routing for interactive redraws.

An :class:`EdgeRoutingManager` sits between the presentation layer and
:func:`optimize_all_edges`. It memoizes whole optimization passes under a
string key built from node positions and edge endpoints, and drops every
cached pass as soon as a node is seen to have moved. Position checks are
throttled to one per frame.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence

from djgraph.layout.constants import ATTACHMENT_RESOLUTION, UPDATE_THROTTLE_MS
from djgraph.layout.routing.attachment import optimize_all_edges
from djgraph.parser.model import Edge, Node, NodeBounds, OptimizedEdge, node_bounds

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def routing_cache_key(nodes: Iterable[Node], edges: Iterable[Edge]) -> str:
    """Serialize node positions and edge endpoints into a cache key.

    ``"a:0,0|b:300,0::a-b"``: node ``id:x,y`` entries joined by ``|``, then
    ``::``, then edge ``source-target`` entries joined by ``|``.
    """
    node_part = "|".join(f"{n.id}:{_num(n.x)},{_num(n.y)}" for n in nodes)
    edge_part = "|".join(f"{e.source}-{e.target}" for e in edges)
    return f"{node_part}::{edge_part}"


def _num(value: float) -> str:
    # 300.0 and 300 describe the same position
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class EdgeRoutingManager:
    """Owns the routing caches for one graph view.

    Construct one per view and call :meth:`destroy` when the view goes
    away. Instances never share state.
    """

    def __init__(
        self,
        on_edges_update: Callable[[list[OptimizedEdge]], None] | None = None,
        throttle_ms: float = UPDATE_THROTTLE_MS,
        clock: Callable[[], float] | None = None,
        resolution: int = ATTACHMENT_RESOLUTION,
    ) -> None:
        self.on_edges_update = on_edges_update
        self.throttle_ms = throttle_ms
        self.resolution = resolution
        self._clock = clock or _monotonic_ms
        self._node_positions: dict[str, NodeBounds] = {}
        self._edge_cache: dict[str, list[OptimizedEdge]] = {}
        self._last_update: float | None = None
        self._destroyed = False

    @property
    def cached_passes(self) -> int:
        """Number of optimization passes currently held."""
        return len(self._edge_cache)

    @property
    def tracked_nodes(self) -> int:
        """Number of nodes whose positions are currently recorded."""
        return len(self._node_positions)

    def update_node_positions(self, nodes: Iterable[Node]) -> bool:
        """Record current node positions, invalidating on any movement.

        Calls arriving within ``throttle_ms`` of the last accepted update
        are ignored. An update is accepted when it sees at least one node
        that is new or whose ``(x, y)`` changed; the whole edge cache is
        then cleared. Returns True when the cache was invalidated.
        """
        self._check_alive()
        now = self._clock()
        if self._last_update is not None and now - self._last_update < self.throttle_ms:
            logger.debug("Position update throttled (%.1f ms since last)",
                         now - self._last_update)
            return False

        changed = False
        positions: dict[str, NodeBounds] = {}
        for node in nodes:
            bounds = node_bounds(node)
            cached = self._node_positions.get(node.id)
            if cached is None or cached.x != bounds.x or cached.y != bounds.y:
                changed = True
            positions[node.id] = bounds
        # Only the nodes of this update are tracked, removed ones are forgotten
        self._node_positions = positions

        if changed:
            self._invalidate()
            self._last_update = now
        return changed

    def optimize_edges(
        self, nodes: Sequence[Node], edges: Sequence[Edge]
    ) -> list[OptimizedEdge]:
        """Return routed edges, reusing the cached pass for identical input.

        A cache hit returns the very list produced by the earlier pass.
        """
        self._check_alive()
        key = routing_cache_key(nodes, edges)
        cached = self._edge_cache.get(key)
        if cached is not None:
            logger.debug("Routing cache hit (%d edges)", len(cached))
            return cached

        logger.debug("Routing cache miss, optimizing %d edges", len(edges))
        optimized = optimize_all_edges(nodes, edges, resolution=self.resolution)
        self._edge_cache[key] = optimized
        if self.on_edges_update is not None:
            self.on_edges_update(optimized)
        return optimized

    def destroy(self) -> None:
        """Release all cached state. The manager cannot be used afterwards."""
        if self._destroyed:
            return
        self._node_positions.clear()
        self._edge_cache.clear()
        self.on_edges_update = None
        self._destroyed = True

    def _invalidate(self) -> None:
        if self._edge_cache:
            logger.debug("Node moved, dropping %d cached passes", len(self._edge_cache))
        self._edge_cache.clear()

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("EdgeRoutingManager has been destroyed")
