from __future__ import annotations

import math
from collections.abc import Iterator

import pytest

from goapkit.events import reset_event_bus_for_testing
from goapkit.planning.beliefs import Belief
from goapkit.planning.strategies import ActionStrategy
from goapkit.types import Point3
from goapkit.util import rng


@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    """Give every test a fresh event bus and deterministic RNG streams."""
    reset_event_bus_for_testing()
    rng.init(12345)
    yield
    reset_event_bus_for_testing()


class World:
    """Mutable boolean facts, standing in for a game's live world state."""

    def __init__(self) -> None:
        self.facts: dict[str, bool] = {}
        self.reads: dict[str, int] = {}

    def belief(self, name: str, value: bool = False) -> Belief:
        self.facts[name] = value
        self.reads[name] = 0

        def condition() -> bool:
            self.reads[name] += 1
            return self.facts[name]

        return Belief(name, condition)

    def set(self, name: str, value: bool = True) -> None:
        self.facts[name] = value

    def strategy(self, *names: str) -> SetFactsStrategy:
        return SetFactsStrategy(self, *names)


class SetFactsStrategy(ActionStrategy):
    """Completes on start and makes the given facts true, like a real effect."""

    def __init__(self, world: World, *names: str) -> None:
        self.world = world
        self.names = names
        self.started = 0
        self.stopped = 0
        self._done = False

    @property
    def can_perform(self) -> bool:
        return True

    @property
    def complete(self) -> bool:
        return self._done

    def start(self) -> None:
        self.started += 1
        for name in self.names:
            self.world.set(name)
        self._done = True

    def stop(self) -> None:
        self.stopped += 1
        self._done = False


class FakeNavigator:
    """Straight-line navigator: no obstacles, arrival on demand."""

    def __init__(
        self, position: Point3 = (0.0, 0.0, 0.0), *, reachable: bool = True
    ) -> None:
        self.position = position
        self.destination: Point3 | None = None
        self.path_pending = False
        self.reachable = reachable
        self.sample_calls = 0

    @property
    def has_path(self) -> bool:
        return self.destination is not None

    @property
    def remaining_distance(self) -> float:
        if self.destination is None:
            return 0.0
        return math.dist(self.position, self.destination)

    def set_destination(self, point: Point3) -> None:
        self.destination = point

    def reset_path(self) -> None:
        self.destination = None

    def sample_position(self, point: Point3, max_distance: float) -> Point3 | None:
        self.sample_calls += 1
        return point if self.reachable else None

    def arrive(self) -> None:
        assert self.destination is not None
        self.position = self.destination


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def navigator() -> FakeNavigator:
    return FakeNavigator()
