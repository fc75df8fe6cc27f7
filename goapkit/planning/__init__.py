"""
Goal-oriented action planning for autonomous agents.

Package structure:
    beliefs     - Belief predicates and the per-agent BeliefRegistry.
    actions     - Action: cost, preconditions, effects, execution strategy.
    goals       - Goal: priority plus desired beliefs.
    plan        - Plan: the ordered, costed output of a planning pass.
    planner     - GoapPlanner: backward-chaining search.
    strategies  - ActionStrategy variants (instant, idle, wander, move-to).
    perception  - Sensor: radius-based target detection.
    agent       - GoapAgent that plans and executes, tick by tick.
"""

from .actions import Action
from .agent import GoapAgent
from .beliefs import Belief, BeliefRegistry
from .goals import Goal
from .perception import Sensor, Trackable
from .plan import Plan
from .planner import GoapPlanner, Planner, SearchStats
from .strategies import (
    ActionStrategy,
    IdleStrategy,
    InstantStrategy,
    MoveToStrategy,
    Navigator,
    WanderStrategy,
)

__all__ = [
    "Action",
    "ActionStrategy",
    "Belief",
    "BeliefRegistry",
    "Goal",
    "GoapAgent",
    "GoapPlanner",
    "IdleStrategy",
    "InstantStrategy",
    "MoveToStrategy",
    "Navigator",
    "Plan",
    "Planner",
    "SearchStats",
    "Sensor",
    "Trackable",
    "WanderStrategy",
]
