"""Action strategies: how an action does its work once the plan reaches it.

The planner never touches strategies. Only the executing GoapAgent drives
them, through the lifecycle:

    start() -> update(dt) ... until complete -> stop()

Movement strategies talk to a Navigator, the host's path-finding agent. The
package does no path-finding itself; the Navigator protocol is the seam.
"""

from __future__ import annotations

import abc
import math
from typing import Protocol

from goapkit import config
from goapkit.types import DeltaTime, Point3, PointSource
from goapkit.util import rng
from goapkit.util.timers import CountdownTimer

_rng = rng.get("planning.wander")


class Navigator(Protocol):
    """Host-side path-following agent (a nav-mesh agent or similar)."""

    @property
    def position(self) -> Point3: ...

    @property
    def has_path(self) -> bool: ...

    @property
    def path_pending(self) -> bool: ...

    @property
    def remaining_distance(self) -> float: ...

    def set_destination(self, point: Point3) -> None: ...

    def reset_path(self) -> None: ...

    def sample_position(self, point: Point3, max_distance: float) -> Point3 | None:
        """Return the closest reachable point within max_distance, or None."""
        ...


class ActionStrategy(abc.ABC):
    """Per-action execution behavior."""

    @property
    @abc.abstractmethod
    def can_perform(self) -> bool:
        """Whether update() should still be called this tick."""
        ...

    @property
    @abc.abstractmethod
    def complete(self) -> bool: ...

    def start(self) -> None:
        return

    def update(self, delta_time: DeltaTime | float) -> None:
        _ = delta_time
        return

    def stop(self) -> None:
        return


class InstantStrategy(ActionStrategy):
    """Completes as soon as it is started. Default for actions without one."""

    def __init__(self) -> None:
        self._started = False

    @property
    def can_perform(self) -> bool:
        return True

    @property
    def complete(self) -> bool:
        return self._started

    def start(self) -> None:
        self._started = True

    def stop(self) -> None:
        self._started = False


class IdleStrategy(ActionStrategy):
    """Do nothing for ``duration`` seconds."""

    def __init__(self, duration: float) -> None:
        self._complete = False
        self.timer = CountdownTimer(duration)
        self.timer.on_start.append(self._on_timer_start)
        self.timer.on_stop.append(self._on_timer_stop)

    def _on_timer_start(self) -> None:
        self._complete = False

    def _on_timer_stop(self) -> None:
        self._complete = True

    @property
    def can_perform(self) -> bool:
        return True

    @property
    def complete(self) -> bool:
        return self._complete

    def start(self) -> None:
        self.timer.start()
        # A zero-length idle finishes on the spot.
        if self.timer.is_finished:
            self.timer.stop()

    def update(self, delta_time: DeltaTime | float) -> None:
        self.timer.tick(delta_time)


def _arrived(navigator: Navigator, arrival_distance: float) -> bool:
    return navigator.remaining_distance <= arrival_distance and not (
        navigator.path_pending
    )


class WanderStrategy(ActionStrategy):
    """Walk to a random reachable point within ``wander_radius``.

    On start, up to ``attempts`` random horizontal offsets are tried; the first
    one the navigator can snap onto reachable ground becomes the destination.
    If none can, the strategy is already "arrived" and completes immediately.
    """

    def __init__(
        self,
        navigator: Navigator,
        wander_radius: float,
        *,
        attempts: int = config.WANDER_ATTEMPTS,
        arrival_distance: float = config.ARRIVAL_DISTANCE,
    ) -> None:
        if wander_radius <= 0:
            msg = "wander_radius must be positive"
            raise ValueError(msg)
        if attempts <= 0:
            msg = "attempts must be positive"
            raise ValueError(msg)
        self.navigator = navigator
        self.wander_radius = wander_radius
        self.attempts = attempts
        self.arrival_distance = arrival_distance
        self.destination: Point3 | None = None

    @property
    def can_perform(self) -> bool:
        return not self.complete

    @property
    def complete(self) -> bool:
        return _arrived(self.navigator, self.arrival_distance)

    def _random_offset(self) -> Point3:
        # Uniform inside the disc on the ground plane (y stays 0).
        angle = _rng.uniform(0.0, math.tau)
        radius = self.wander_radius * math.sqrt(_rng.random())
        return (radius * math.cos(angle), 0.0, radius * math.sin(angle))

    def start(self) -> None:
        origin = self.navigator.position
        for _ in range(self.attempts):
            dx, dy, dz = self._random_offset()
            candidate = (origin[0] + dx, origin[1] + dy, origin[2] + dz)
            hit = self.navigator.sample_position(candidate, self.wander_radius)
            if hit is not None:
                self.destination = hit
                self.navigator.set_destination(hit)
                return
        self.destination = None


class MoveToStrategy(ActionStrategy):
    """Walk to a fixed point or to wherever an accessor says, read on start."""

    def __init__(
        self,
        navigator: Navigator,
        destination: PointSource,
        *,
        arrival_distance: float = config.ARRIVAL_DISTANCE,
    ) -> None:
        self.navigator = navigator
        self._destination = destination
        self.arrival_distance = arrival_distance

    @property
    def destination(self) -> Point3:
        if callable(self._destination):
            return self._destination()
        return self._destination

    @property
    def can_perform(self) -> bool:
        return not self.complete

    @property
    def complete(self) -> bool:
        return _arrived(self.navigator, self.arrival_distance)

    def start(self) -> None:
        self.navigator.set_destination(self.destination)

    def stop(self) -> None:
        self.navigator.reset_path()
