"""Beliefs: named boolean facts about the world.

A Belief wraps a zero-argument predicate. The planner only ever calls
``evaluate()``, and calls it every time it needs the answer, so predicates can
read live, externally mutated state (an agent's position, a sensor's target,
a stat value) without any cache invalidation.

BeliefRegistry is the per-agent store. It owns the helpers that build the
three common kinds of belief (plain, located, sensor-derived) and rejects
duplicate names, since two beliefs answering to one name would silently
corrupt which actions the planner thinks satisfy a goal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING

import numpy as np

from goapkit.types import Point3, PointSource

if TYPE_CHECKING:
    from .perception import Sensor

logger = logging.getLogger(__name__)

type Condition = Callable[[], bool]
type LocationAccessor = Callable[[], Point3]


def distance_between(a: Point3, b: Point3) -> float:
    """Euclidean distance between two world points."""
    return float(np.linalg.norm(np.subtract(a, b, dtype=np.float64)))


def _as_accessor(source: PointSource) -> LocationAccessor:
    if callable(source):
        return source
    point = (float(source[0]), float(source[1]), float(source[2]))
    return lambda: point


class Belief:
    """A named predicate over world state, with an optional location hint.

    Equality and hashing are by identity: an Action's precondition set holds
    the Belief objects themselves, never their names.
    """

    __slots__ = ("_condition", "_location", "name")

    def __init__(
        self,
        name: str,
        condition: Condition,
        location: LocationAccessor | None = None,
    ) -> None:
        if not name:
            msg = "Belief name must be non-empty"
            raise ValueError(msg)
        self.name = name
        self._condition = condition
        self._location = location

    def evaluate(self) -> bool:
        return bool(self._condition())

    @property
    def location(self) -> Point3 | None:
        """Where this fact is anchored in the world, for debug/consumer use."""
        if self._location is None:
            return None
        return self._location()

    def __repr__(self) -> str:
        return f"Belief({self.name!r})"


class BeliefRegistry:
    """Per-agent belief store with construction helpers.

    Args:
        position: Accessor for the owning agent's current position. Required
            only by ``add_location_belief``.
        shared: Read-only beliefs common to several agents (world-level facts
            such as "is night"). Passed explicitly so that multiple agents and
            planners never couple through hidden global state. Lookups fall
            back to it; registering a name it already holds is rejected.
    """

    def __init__(
        self,
        position: Callable[[], Point3] | None = None,
        shared: Mapping[str, Belief] | None = None,
    ) -> None:
        self._position = position
        self._shared: Mapping[str, Belief] = shared if shared is not None else {}
        self._beliefs: dict[str, Belief] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, belief: Belief) -> Belief:
        """Register an already constructed belief and return it."""
        if belief.name in self._beliefs or belief.name in self._shared:
            raise ValueError(f"Belief '{belief.name}' already registered")
        self._beliefs[belief.name] = belief
        return belief

    def add_belief(self, name: str, condition: Condition) -> Belief:
        return self.add(Belief(name, condition))

    def add_location_belief(
        self, name: str, distance: float, location: PointSource
    ) -> Belief:
        """Register "the agent is within ``distance`` of ``location``".

        ``location`` may be a fixed point or an accessor; an accessor is
        called on every evaluation so moving targets are tracked.
        """
        if self._position is None:
            msg = "add_location_belief requires a registry created with position"
            raise ValueError(msg)
        if distance < 0:
            msg = "distance must be non-negative"
            raise ValueError(msg)

        position = self._position
        target = _as_accessor(location)

        def in_range() -> bool:
            return distance_between(position(), target()) < distance

        return self.add(Belief(name, in_range, target))

    def add_sensor_belief(self, name: str, sensor: Sensor) -> Belief:
        """Register a belief that mirrors what ``sensor`` currently detects."""

        def target_position() -> Point3:
            point = sensor.target_position
            # Last-known position is unset until the sensor first sees a target.
            return point if point is not None else (0.0, 0.0, 0.0)

        return self.add(
            Belief(name, lambda: sensor.is_target_in_range, target_position)
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __getitem__(self, name: str) -> Belief:
        belief = self.get(name)
        if belief is None:
            raise KeyError(f"Unknown belief '{name}'")
        return belief

    def get(self, name: str) -> Belief | None:
        belief = self._beliefs.get(name)
        if belief is None:
            belief = self._shared.get(name)
        return belief

    def __contains__(self, name: object) -> bool:
        return name in self._beliefs or name in self._shared

    def __iter__(self) -> Iterator[Belief]:
        """Iterate this registry's own beliefs in registration order."""
        return iter(self._beliefs.values())

    def __len__(self) -> int:
        return len(self._beliefs)

    def names(self) -> list[str]:
        return list(self._beliefs)

    def snapshot(self) -> dict[str, bool]:
        """Evaluate every visible belief (shared first, then own).

        Intended for debug overlays and logging, not for planning: the
        planner must read beliefs lazily at the moment it needs them.
        """
        values = {name: belief.evaluate() for name, belief in self._shared.items()}
        values.update({name: b.evaluate() for name, b in self._beliefs.items()})
        logger.debug(f"Belief snapshot: {values}")
        return values
