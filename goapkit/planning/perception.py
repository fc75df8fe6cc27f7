"""Perception system for agent awareness.

A Sensor answers "is something I care about within range, and where is it?"
It makes no behavioral decisions; agents consume it through sensor-derived
beliefs and react to target changes by re-planning.

Detection is omnidirectional. A candidate is detected when its distance to the
sensor origin is strictly less than ``detection_radius``; the closest
detected candidate becomes the target. The host decides which candidates to
offer (spatial index query, physics overlap, team filter...).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

import numpy as np

from goapkit import config
from goapkit.types import Point3

logger = logging.getLogger(__name__)


class Trackable(Protocol):
    """Anything with a world position."""

    @property
    def position(self) -> Point3: ...


class Sensor:
    """Radius-based perception provider.

    Attributes:
        detection_radius: Candidates at or beyond this distance are ignored.
        target: The currently tracked candidate, or None.
        target_position: Last known position of the tracked target. Kept after
            the target is lost so "go where it was last seen" stays possible.
    """

    def __init__(
        self, detection_radius: float = config.DEFAULT_DETECTION_RADIUS
    ) -> None:
        if detection_radius <= 0:
            msg = "detection_radius must be positive"
            raise ValueError(msg)
        self.detection_radius = detection_radius
        self.target: Trackable | None = None
        self.target_position: Point3 | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def is_target_in_range(self) -> bool:
        return self.target is not None

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the tracked target changes."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def update(self, origin: Point3, candidates: Sequence[Trackable]) -> None:
        """Re-run detection from ``origin`` against ``candidates``."""
        closest: Trackable | None = None
        if candidates:
            positions = np.asarray([c.position for c in candidates], dtype=np.float64)
            distances = np.linalg.norm(positions - np.asarray(origin), axis=1)
            index = int(np.argmin(distances))
            if distances[index] < self.detection_radius:
                closest = candidates[index]

        previous = self.target
        self.target = closest
        if closest is not None:
            self.target_position = closest.position

        if closest is not previous:
            logger.debug(f"Sensor target changed: {previous!r} -> {closest!r}")
            for callback in list(self._listeners):
                callback()
