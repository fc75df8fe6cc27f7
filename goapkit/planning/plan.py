"""Plans: the ordered, costed action sequence returned by the planner."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .actions import Action
    from .goals import Goal


class Plan:
    """An ordered action sequence for one goal, first action at the front.

    The agent consumes it by popping actions one at a time. ``cost`` is the
    cumulative cost computed at planning time; later cost changes on the
    actions do not rewrite it.
    """

    def __init__(self, goal: Goal, actions: Iterable[Action], cost: float) -> None:
        self.goal = goal
        self.actions: deque[Action] = deque(actions)
        self.cost = cost

    def pop_next(self) -> Action | None:
        if not self.actions:
            return None
        return self.actions.popleft()

    def peek(self) -> Action | None:
        return self.actions[0] if self.actions else None

    @property
    def is_empty(self) -> bool:
        return not self.actions

    def action_names(self) -> list[str]:
        return [action.name for action in self.actions]

    def __len__(self) -> int:
        return len(self.actions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return (
            self.goal is other.goal
            and list(self.actions) == list(other.actions)
            and self.cost == other.cost
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Plan(goal={self.goal.name!r}, actions={self.action_names()}, "
            f"cost={self.cost})"
        )
