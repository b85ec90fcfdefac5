"""Recompute the mirrored overlay when its inputs change.

The driver owns three inputs and derives one output:

    source ring ─┐
    angle ───────┼─> rotate ─> project ─> Overlay
    target ──────┘

Inputs are immutable and replaced wholesale, so there is nothing to lock.
Setters never compute; they only mark the driver dirty. ``poll()`` is
called once per rendering frame and recomputes at most once per
``frame_interval`` with whatever the inputs are at that moment, so a burst
of target updates while the second map is being dragged collapses into a
single recompute instead of a queue of stale ones.

Usage:
    driver = RecomputeDriver(target=(-74.006, 40.7128))
    driver.set_source(ring)
    driver.set_angle(30)
    overlay = driver.snapshot()
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from app.core.geometry.mirror import project
from app.core.geometry.rotation import IDENTITY_EPSILON_DEG, rotate
from app.core.geometry.spherical import (
    DegenerateInputError,
    LonLat,
    Ring,
    distinct_vertex_count,
)

logger = logging.getLogger(__name__)

_Inputs = tuple[Optional[tuple[LonLat, ...]], float, LonLat]


@dataclass(frozen=True)
class Overlay:
    """Result of one recompute epoch.

    ``rotated`` is drawn on the source map, ``mirrored`` on the target map.
    Both are None when there is no shape to show.
    """

    epoch: int
    rotated: Ring | None
    mirrored: Ring | None
    angle: float
    target: LonLat

    @property
    def empty(self) -> bool:
        return self.mirrored is None


class RecomputeDriver:
    """Single-session owner of the mirror inputs."""

    def __init__(
        self,
        target: LonLat,
        angle: float = 0.0,
        frame_interval: float = 1 / 60,
        identity_epsilon: float = IDENTITY_EPSILON_DEG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source: tuple[LonLat, ...] | None = None
        self._angle = float(angle)
        self._target: LonLat = (float(target[0]), float(target[1]))
        self._frame_interval = frame_interval
        self._epsilon = identity_epsilon
        self._clock = clock

        self._dirty = True
        self._last_run: float | None = None
        self._last_inputs: _Inputs | None = None
        self._overlay: Overlay | None = None
        self._epoch = 0
        self._subscribers: list[Callable[[Overlay], None]] = []

    # ── Inputs ───────────────────────────────────────────────────────────

    @property
    def source(self) -> Ring | None:
        return list(self._source) if self._source is not None else None

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def target(self) -> LonLat:
        return self._target

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def epoch(self) -> int:
        """Number of recomputes so far; 0 before the first."""
        return self._epoch

    def set_source(self, ring: Ring) -> None:
        """Replace the current shape. The previous one is discarded."""
        self._source = tuple((float(lon), float(lat)) for lon, lat in ring)
        self._dirty = True

    def clear_source(self) -> None:
        """A new drawing has started: drop the shape and its overlay now."""
        self._source = None
        self._dirty = True
        if self._overlay is not None and not self._overlay.empty:
            self._publish(self._compute(self._inputs()))

    def set_angle(self, angle: float) -> None:
        self._angle = float(angle)
        self._dirty = True

    def reset_angle(self) -> None:
        self.set_angle(0.0)

    def set_target(self, target: LonLat) -> None:
        self._target = (float(target[0]), float(target[1]))
        self._dirty = True

    # ── Output ───────────────────────────────────────────────────────────

    def subscribe(self, callback: Callable[[Overlay], None]) -> Callable[[], None]:
        """Call ``callback`` with every new overlay. Returns an unsubscribe."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def poll(self) -> Overlay | None:
        """Frame tick. Returns a new overlay, or None if nothing is due."""
        if not self._dirty:
            return None
        now = self._clock()
        if self._last_run is not None and now - self._last_run < self._frame_interval:
            return None
        self._last_run = now
        overlay = self._compute(self._inputs())
        return overlay if self._publish(overlay) else None

    def snapshot(self) -> Overlay:
        """Overlay for the latest inputs, recomputing now if needed."""
        if self._dirty or self._overlay is None:
            self._last_run = self._clock()
            self._publish(self._compute(self._inputs()))
        return self._overlay

    # ── Internals ────────────────────────────────────────────────────────

    def _inputs(self) -> _Inputs:
        return (self._source, self._angle, self._target)

    def _compute(self, inputs: _Inputs) -> Overlay:
        self._dirty = False
        if inputs == self._last_inputs and self._overlay is not None:
            return self._overlay

        source, angle, target = inputs
        self._last_inputs = inputs
        self._epoch += 1

        if source is None:
            return Overlay(self._epoch, None, None, angle, target)

        ring = list(source)
        distinct = distinct_vertex_count(ring)
        if distinct < 3:
            logger.warning(
                "No overlay for epoch %d: %s", self._epoch, DegenerateInputError(distinct),
            )
            return Overlay(self._epoch, None, None, angle, target)

        rotated = rotate(ring, angle, epsilon=self._epsilon)
        mirrored = project(rotated, target)

        logger.debug(
            "Epoch %d: %d vertices, angle %.1f, target (%.5f, %.5f)",
            self._epoch, len(mirrored), angle, target[0], target[1],
        )
        return Overlay(self._epoch, list(rotated), mirrored, angle, target)

    def _publish(self, overlay: Overlay) -> bool:
        changed = overlay is not self._overlay
        self._overlay = overlay
        if changed:
            for callback in list(self._subscribers):
                callback(overlay)
        return changed
