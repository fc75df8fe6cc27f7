"""Goal-oriented action planning (GOAP) for game agents."""

from goapkit.planning import (
    Action,
    Belief,
    BeliefRegistry,
    Goal,
    GoapAgent,
    GoapPlanner,
    Plan,
    Sensor,
)

__all__ = [
    "Action",
    "Belief",
    "BeliefRegistry",
    "Goal",
    "GoapAgent",
    "GoapPlanner",
    "Plan",
    "Sensor",
]
