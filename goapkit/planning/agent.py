"""
GoapAgent: the execution side of goal-oriented action planning.

The agent owns an action pool, a goal set and a belief registry, asks its
planner for a Plan whenever it is not busy, and then executes that plan one
action at a time. The host drives it by calling ``tick(dt)`` from whatever
update loop it has; the agent never reads a clock.

Interruption: while an action is running the agent does not plan at all.
Between actions it re-plans, but only against goals of strictly higher
priority than the one it is pursuing, so a more urgent need can take over
without a plan for an equally ranked goal thrashing the current one. Sensors
can force a full re-plan by invalidating the current plan.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from goapkit.events import (
    ActionCompletedEvent,
    ActionStartedEvent,
    PlanCompletedEvent,
    PlanInvalidatedEvent,
    PlanStartedEvent,
    publish_event,
)
from goapkit.types import DeltaTime

from .planner import GoapPlanner, Planner

if TYPE_CHECKING:
    from .actions import Action
    from .beliefs import BeliefRegistry
    from .goals import Goal
    from .perception import Sensor
    from .plan import Plan

logger = logging.getLogger(__name__)


class GoapAgent:
    """Plans for and executes one agent's goals.

    Attributes:
        current_goal: Goal of the plan being executed, if any.
        current_action: Action being executed, if any.
        action_plan: The plan actions are popped from. Kept when re-planning
            finds nothing better.
        last_goal: Goal whose plan completed most recently. Passed to the
            planner as the tie-break penalty goal.
    """

    def __init__(
        self,
        name: str,
        beliefs: BeliefRegistry,
        planner: Planner | None = None,
    ) -> None:
        self.name = name
        self.beliefs = beliefs
        self.planner: Planner = planner if planner is not None else GoapPlanner()
        self._actions: dict[str, Action] = {}
        self._goals: dict[str, Goal] = {}
        self._sensors: list[Sensor] = []

        self.current_goal: Goal | None = None
        self.current_action: Action | None = None
        self.action_plan: Plan | None = None
        self.last_goal: Goal | None = None

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def add_action(self, action: Action) -> Action:
        if action.name in self._actions:
            raise ValueError(f"Action '{action.name}' already registered")
        self._actions[action.name] = action
        return action

    def add_goal(self, goal: Goal) -> Goal:
        if goal.name in self._goals:
            raise ValueError(f"Goal '{goal.name}' already registered")
        self._goals[goal.name] = goal
        return goal

    @property
    def actions(self) -> list[Action]:
        return list(self._actions.values())

    @property
    def goals(self) -> list[Goal]:
        return list(self._goals.values())

    def watch(self, sensor: Sensor) -> None:
        """Invalidate the current plan whenever ``sensor`` changes target."""
        sensor.add_listener(self._on_target_changed)
        self._sensors.append(sensor)

    def unwatch_all(self) -> None:
        for sensor in self._sensors:
            sensor.remove_listener(self._on_target_changed)
        self._sensors.clear()

    def _on_target_changed(self) -> None:
        logger.debug(f"{self.name}: target changed, clearing action and goal")
        self.invalidate(reason="target_changed")

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def invalidate(self, reason: str = "invalidated") -> None:
        """Drop the current action and goal so the next tick re-plans freely.

        Publishes PlanInvalidatedEvent only when there was something to drop.
        """
        had_plan = (
            self.current_goal is not None
            or self.current_action is not None
            or self.action_plan is not None
        )
        goal_name = self.current_goal.name if self.current_goal else None
        action_name = self.current_action.name if self.current_action else None
        if self.current_action is not None:
            self.current_action.stop()
        self.current_action = None
        self.current_goal = None
        self.action_plan = None
        if not had_plan:
            return
        publish_event(
            PlanInvalidatedEvent(
                agent_name=self.name,
                reason=reason,
                goal_name=goal_name,
                action_name=action_name,
            )
        )

    def calculate_plan(self) -> Plan | None:
        """Ask the planner for a new plan and adopt it if one is found.

        With a goal in progress only strictly higher-priority goals are
        candidates. Returns the newly found plan, or None when the planner
        found nothing (the existing plan, if any, is kept).
        """
        goals_to_check = self.goals
        if self.current_goal is not None:
            priority_level = self.current_goal.priority
            logger.debug(
                f"{self.name}: goal in progress, checking goals above "
                f"priority {priority_level}"
            )
            goals_to_check = [g for g in goals_to_check if g.priority > priority_level]

        potential_plan = self.planner.plan(self.actions, goals_to_check, self.last_goal)
        if potential_plan is not None:
            self.action_plan = potential_plan
        return potential_plan

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def tick(self, delta_time: DeltaTime | float) -> None:
        if self.current_action is None:
            logger.debug(f"{self.name}: calculating any potential new plan")
            new_plan = self.calculate_plan()
            if new_plan is not None:
                publish_event(
                    PlanStartedEvent(
                        agent_name=self.name,
                        goal_name=new_plan.goal.name,
                        action_names=new_plan.action_names(),
                        cost=new_plan.cost,
                    )
                )

            if self.action_plan is not None and not self.action_plan.is_empty:
                self._start_next_action(self.action_plan)

        if self.action_plan is None or self.current_action is None:
            return

        action = self.current_action
        action.update(delta_time)
        if not action.complete:
            return

        logger.debug(f"{self.name}: {action.name} complete")
        action.stop()
        self.current_action = None
        publish_event(
            ActionCompletedEvent(agent_name=self.name, action_name=action.name)
        )

        if self.action_plan.is_empty:
            logger.debug(f"{self.name}: plan complete")
            finished = self.current_goal
            self.last_goal = finished
            self.current_goal = None
            self.action_plan = None
            if finished is not None:
                publish_event(
                    PlanCompletedEvent(agent_name=self.name, goal_name=finished.name)
                )

    def _start_next_action(self, plan: Plan) -> None:
        self.current_goal = plan.goal
        action = plan.pop_next()
        if action is None:
            return
        logger.debug(
            f"{self.name}: goal {plan.goal.name} with {len(plan)} actions left, "
            f"popped {action.name}"
        )

        # The world may have moved on since planning; verify before committing.
        if not action.preconditions_met():
            logger.debug(f"{self.name}: preconditions for {action.name} not met")
            self.current_action = None
            self.current_goal = None
            self.action_plan = None
            publish_event(
                PlanInvalidatedEvent(
                    agent_name=self.name,
                    reason="preconditions_failed",
                    goal_name=plan.goal.name,
                    action_name=action.name,
                )
            )
            return

        self.current_action = action
        action.start()
        publish_event(
            ActionStartedEvent(agent_name=self.name, action_name=action.name)
        )
