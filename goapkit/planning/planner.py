"""
Backward-chaining GOAP planner.

Search starts from a goal's desired beliefs and works backwards: any action
whose effects cover a still-required belief is a candidate, and choosing it
swaps the beliefs it resolves for its own preconditions. Beliefs that already
hold in the world drop out for free. A branch succeeds once nothing is left to
require.

The search builds an AND/OR tree (OR over the actions that can provide a
requirement, AND over the preconditions each action introduces), then reads a
plan off it by repeatedly stepping into the cheapest successful child. That
extraction is greedy per level, not a global shortest path: a cheap first step
can lead into a more expensive chain than a pricier first step would have.
Agents tuned against this behavior depend on it, so it is kept as is.

Key classes:
    Planner: Abstract planner interface the GoapAgent depends on.
    GoapPlanner: The backward-chaining implementation.
    SearchStats: Diagnostics for the most recent plan() call.
"""

from __future__ import annotations

import abc
import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from goapkit import config
from goapkit.util.metrics import MostRecentNVar

from .actions import Action
from .beliefs import Belief
from .goals import Goal
from .plan import Plan

logger = logging.getLogger(__name__)


class Planner(abc.ABC):
    """Turns an action pool and candidate goals into a Plan."""

    @abc.abstractmethod
    def plan(
        self,
        actions: Iterable[Action],
        goals: Iterable[Goal],
        most_recent_goal: Goal | None = None,
    ) -> Plan | None:
        """Return a plan for the best achievable goal, or None.

        None is the normal "nothing to do / nothing reachable" outcome, not
        an error.
        """
        ...


@dataclass(slots=True)
class _Node:
    """One state of the backward search. Lives only for a single plan() call."""

    parent: _Node | None
    action: Action | None
    required: set[Belief]
    cost: float
    leaves: list[_Node] = field(default_factory=list)


@dataclass(slots=True)
class SearchStats:
    """Diagnostics describing the last plan() call."""

    goals_considered: int = 0
    goals_searched: int = 0
    nodes_expanded: int = 0
    elapsed_ms: float = 0.0
    budget_exhausted: bool = False
    chosen_goal: str | None = None


class _SearchBudgetExhausted(Exception):
    """Raised inside the search when the node ceiling is hit."""


class GoapPlanner(Planner):
    """Backward-chaining planner with greedy cheapest-leaf extraction.

    Each GoapPlanner keeps only diagnostics between calls; all search state is
    local to plan(), so agents may share one instance or own one each.

    Args:
        max_nodes: Ceiling on nodes expanded per plan() call. Exceeding it
            abandons the call and reports no plan.
        most_recent_goal_penalty: Subtracted from the priority of
            ``most_recent_goal`` when ordering goals, so ties rotate.
    """

    def __init__(
        self,
        max_nodes: int = config.MAX_SEARCH_NODES,
        most_recent_goal_penalty: float = config.MOST_RECENT_GOAL_PENALTY,
    ) -> None:
        if max_nodes <= 0:
            msg = "max_nodes must be positive"
            raise ValueError(msg)
        self.max_nodes = max_nodes
        self.most_recent_goal_penalty = most_recent_goal_penalty
        self.last_stats = SearchStats()
        self.nodes_metric = MostRecentNVar(config.PLANNER_METRIC_SAMPLES)
        self.time_ms_metric = MostRecentNVar(config.PLANNER_METRIC_SAMPLES)

    def plan(
        self,
        actions: Iterable[Action],
        goals: Iterable[Goal],
        most_recent_goal: Goal | None = None,
    ) -> Plan | None:
        start = time.perf_counter()
        stats = SearchStats()
        action_pool = list(actions)
        ordered_goals = self.order_goals(goals, most_recent_goal)
        stats.goals_considered = len(ordered_goals)

        result: Plan | None = None
        try:
            for goal in ordered_goals:
                stats.goals_searched += 1
                result = self._plan_for_goal(goal, action_pool, stats)
                if result is not None:
                    stats.chosen_goal = goal.name
                    break
                logger.debug(f"No path for goal {goal.name}")
        except _SearchBudgetExhausted:
            stats.budget_exhausted = True
            result = None
            logger.warning(
                f"Planner gave up after expanding {stats.nodes_expanded} nodes "
                f"(max_nodes={self.max_nodes})"
            )

        stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.last_stats = stats
        self.nodes_metric.record(stats.nodes_expanded)
        self.time_ms_metric.record(stats.elapsed_ms)

        if result is None:
            logger.debug("No plan found")
        else:
            logger.debug(f"Planned {result!r} ({stats.nodes_expanded} nodes)")
        return result

    def order_goals(
        self, goals: Iterable[Goal], most_recent_goal: Goal | None = None
    ) -> list[Goal]:
        """Drop satisfied goals and sort the rest by effective priority.

        A goal is worth planning for only if at least one desired belief is
        currently false. The sort is stable, so equal priorities keep the
        caller's order.
        """

        def effective_priority(goal: Goal) -> float:
            if goal is most_recent_goal:
                return goal.priority - self.most_recent_goal_penalty
            return goal.priority

        unsatisfied = [
            goal
            for goal in goals
            if any(not belief.evaluate() for belief in goal.desired_effects)
        ]
        return sorted(unsatisfied, key=effective_priority, reverse=True)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _plan_for_goal(
        self, goal: Goal, action_pool: Sequence[Action], stats: SearchStats
    ) -> Plan | None:
        root = _Node(
            parent=None, action=None, required=set(goal.desired_effects), cost=0.0
        )
        if not self._find_path(root, action_pool, stats) or not root.leaves:
            return None

        # Walk down the cheapest successful child at each level. min() keeps
        # the first of equally cheap leaves, i.e. the first one found.
        chain: list[Action] = []
        node = root
        while node.leaves:
            node = min(node.leaves, key=lambda leaf: leaf.cost)
            assert node.action is not None
            chain.append(node.action)

        # The deepest action needs nothing the world lacks, so it goes first.
        chain.reverse()
        return Plan(goal, chain, node.cost)

    def _find_path(
        self, parent: _Node, actions: Sequence[Action], stats: SearchStats
    ) -> bool:
        stats.nodes_expanded += 1
        if stats.nodes_expanded > self.max_nodes:
            raise _SearchBudgetExhausted

        required = parent.required
        required.difference_update([b for b in required if b.evaluate()])
        if not required:
            return True

        # Read costs once per expansion; hosts may re-price between calls.
        costs = {id(action): action.cost for action in actions}
        ordered = sorted(actions, key=lambda action: costs[id(action)])

        for action in ordered:
            if action.effects.isdisjoint(required):
                continue

            new_required = (required - action.effects) | action.preconditions
            # An action never appears again below itself, which bounds the
            # depth by the pool size and breaks precondition cycles.
            remaining = [other for other in actions if other is not action]
            child = _Node(
                parent=parent,
                action=action,
                required=set(new_required),
                cost=parent.cost + costs[id(action)],
            )

            if self._find_path(child, remaining, stats):
                parent.leaves.append(child)
                # This action covers everything still required here apart
                # from its own (now satisfied) preconditions.
                if not (new_required - action.preconditions):
                    return True

        return bool(parent.leaves)
