"""Goals: prioritized sets of beliefs the agent wants to be true."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from goapkit import config

from .beliefs import Belief

type PrioritySource = float | Callable[[], float]


class Goal:
    """A named, prioritized set of desired-effect beliefs.

    Higher priority is more urgent. Like Action.cost, ``priority`` may be a
    number or an accessor owned by some other system (a hunger meter, say); it
    is read every time the planner orders goals.
    """

    def __init__(
        self,
        name: str,
        *,
        priority: PrioritySource = config.DEFAULT_GOAL_PRIORITY,
        desired_effects: Iterable[Belief] = (),
    ) -> None:
        if not name:
            msg = "Goal name must be non-empty"
            raise ValueError(msg)
        self.name = name
        self.desired_effects: frozenset[Belief] = frozenset(desired_effects)
        if not self.desired_effects:
            msg = f"Goal '{name}' must desire at least one belief"
            raise ValueError(msg)
        self._priority: PrioritySource = priority

    @property
    def priority(self) -> float:
        if callable(self._priority):
            return self._priority()
        return self._priority

    @priority.setter
    def priority(self, value: PrioritySource) -> None:
        self._priority = value

    def is_satisfied(self) -> bool:
        """True when every desired effect already holds."""
        return all(belief.evaluate() for belief in self.desired_effects)

    def __repr__(self) -> str:
        return f"Goal({self.name!r}, priority={self._priority!r})"
