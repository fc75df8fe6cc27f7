"""Tests for Belief and BeliefRegistry."""

import pytest

from goapkit.planning.beliefs import Belief, BeliefRegistry, distance_between
from goapkit.planning.perception import Sensor


class _Point:
    def __init__(self, position: tuple[float, float, float]) -> None:
        self.position = position


def test_belief_evaluates_condition_every_time(world) -> None:
    belief = world.belief("door_open")

    assert belief.evaluate() is False
    world.set("door_open")
    assert belief.evaluate() is True
    assert world.reads["door_open"] == 2


def test_belief_without_location_reports_none() -> None:
    belief = Belief("nothing", lambda: False)
    assert belief.location is None


def test_belief_requires_name() -> None:
    with pytest.raises(ValueError):
        Belief("", lambda: True)


def test_beliefs_compare_by_identity() -> None:
    a = Belief("same", lambda: True)
    b = Belief("same", lambda: True)
    assert a != b
    assert len({a, b}) == 2


def test_distance_between() -> None:
    assert distance_between((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)


class TestBeliefRegistry:
    def test_add_and_lookup(self) -> None:
        registry = BeliefRegistry()
        belief = registry.add_belief("AgentIdle", lambda: True)

        assert registry["AgentIdle"] is belief
        assert registry.get("missing") is None
        assert "AgentIdle" in registry
        assert len(registry) == 1
        assert registry.names() == ["AgentIdle"]
        assert list(registry) == [belief]

    def test_unknown_name_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            BeliefRegistry()["missing"]

    def test_duplicate_name_is_rejected(self) -> None:
        registry = BeliefRegistry()
        original = registry.add_belief("Nothing", lambda: False)

        with pytest.raises(ValueError, match="already registered"):
            registry.add_belief("Nothing", lambda: True)
        assert registry["Nothing"] is original

    def test_location_belief_with_fixed_point(self) -> None:
        position = [(0.0, 0.0, 0.0)]
        registry = BeliefRegistry(position=lambda: position[0])
        near_shack = registry.add_location_belief("AtFoodShack", 3.0, (5.0, 0.0, 0.0))

        assert near_shack.evaluate() is False
        assert near_shack.location == (5.0, 0.0, 0.0)

        position[0] = (3.0, 0.0, 0.0)
        assert near_shack.evaluate() is True

    def test_location_belief_is_strictly_less_than_distance(self) -> None:
        registry = BeliefRegistry(position=lambda: (0.0, 0.0, 0.0))
        edge = registry.add_location_belief("Edge", 2.0, (2.0, 0.0, 0.0))
        assert edge.evaluate() is False

    def test_location_belief_follows_moving_target(self) -> None:
        target = _Point((10.0, 0.0, 0.0))
        registry = BeliefRegistry(position=lambda: (0.0, 0.0, 0.0))
        near = registry.add_location_belief("NearTarget", 2.0, lambda: target.position)

        assert near.evaluate() is False
        target.position = (1.0, 0.0, 1.0)
        assert near.evaluate() is True
        assert near.location == (1.0, 0.0, 1.0)

    def test_location_belief_requires_position(self) -> None:
        with pytest.raises(ValueError):
            BeliefRegistry().add_location_belief("Near", 1.0, (0.0, 0.0, 0.0))

    def test_location_belief_rejects_negative_distance(self) -> None:
        registry = BeliefRegistry(position=lambda: (0.0, 0.0, 0.0))
        with pytest.raises(ValueError):
            registry.add_location_belief("Near", -1.0, (0.0, 0.0, 0.0))

    def test_sensor_belief_mirrors_sensor(self) -> None:
        sensor = Sensor(detection_radius=5.0)
        registry = BeliefRegistry()
        in_range = registry.add_sensor_belief("PlayerInChaseRange", sensor)

        assert in_range.evaluate() is False
        assert in_range.location == (0.0, 0.0, 0.0)

        sensor.update((0.0, 0.0, 0.0), [_Point((2.0, 0.0, 0.0))])
        assert in_range.evaluate() is True
        assert in_range.location == (2.0, 0.0, 0.0)

    def test_shared_beliefs_are_visible_but_not_overridable(self) -> None:
        night = Belief("IsNight", lambda: True)
        shared = {"IsNight": night}
        guard = BeliefRegistry(shared=shared)
        thief = BeliefRegistry(shared=shared)

        assert guard["IsNight"] is night
        assert thief["IsNight"] is night
        assert "IsNight" in guard
        assert len(guard) == 0
        with pytest.raises(ValueError):
            guard.add_belief("IsNight", lambda: False)

    def test_snapshot_evaluates_every_visible_belief(self, world) -> None:
        shared = {"IsNight": Belief("IsNight", lambda: True)}
        registry = BeliefRegistry(shared=shared)
        registry.add(world.belief("Hungry"))

        assert registry.snapshot() == {"IsNight": True, "Hungry": False}
