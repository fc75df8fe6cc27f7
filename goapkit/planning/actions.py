"""Actions: costed units of change the planner chains together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from goapkit import config
from goapkit.types import DeltaTime

from .beliefs import Belief
from .strategies import ActionStrategy, InstantStrategy

logger = logging.getLogger(__name__)

type CostSource = float | Callable[[], float]


class Action:
    """A named operation with a cost, precondition beliefs and effect beliefs.

    ``cost`` may be a number or a zero-argument callable. Either way the
    planner reads ``action.cost`` at search time, so hosts can re-price an
    action between planning passes (risk-based costing, fatigue...) without
    rebuilding anything.

    Actions are shared by reference between the agent's action pool and every
    Plan that uses them. They reference beliefs but do not own them.
    """

    def __init__(
        self,
        name: str,
        *,
        cost: CostSource = config.DEFAULT_ACTION_COST,
        preconditions: Iterable[Belief] = (),
        effects: Iterable[Belief] = (),
        strategy: ActionStrategy | None = None,
    ) -> None:
        if not name:
            msg = "Action name must be non-empty"
            raise ValueError(msg)
        self.name = name
        self.preconditions: frozenset[Belief] = frozenset(preconditions)
        self.effects: frozenset[Belief] = frozenset(effects)
        if not self.effects:
            msg = f"Action '{name}' must have at least one effect"
            raise ValueError(msg)
        self.strategy: ActionStrategy = (
            strategy if strategy is not None else InstantStrategy()
        )
        self._cost: CostSource = 0.0
        self.cost = cost  # validated by the setter

    @property
    def cost(self) -> float:
        value = self._cost() if callable(self._cost) else self._cost
        if value < 0:
            msg = f"Action '{self.name}' cost must be non-negative, got {value}"
            raise ValueError(msg)
        return value

    @cost.setter
    def cost(self, value: CostSource) -> None:
        if not callable(value) and value < 0:
            msg = f"Action '{self.name}' cost must be non-negative, got {value}"
            raise ValueError(msg)
        self._cost = value

    # ------------------------------------------------------------------
    # Execution hooks (called by GoapAgent, never by the planner)
    # ------------------------------------------------------------------

    @property
    def can_perform(self) -> bool:
        return self.strategy.can_perform

    @property
    def complete(self) -> bool:
        return self.strategy.complete

    def preconditions_met(self) -> bool:
        return all(belief.evaluate() for belief in self.preconditions)

    def start(self) -> None:
        self.strategy.start()

    def update(self, delta_time: DeltaTime | float) -> None:
        if self.strategy.can_perform:
            self.strategy.update(delta_time)

        if not self.strategy.complete:
            return

        # Report which effects actually hold now; a mismatch usually means the
        # strategy finished without really changing the world.
        unmet = [belief.name for belief in self.effects if not belief.evaluate()]
        if unmet:
            logger.debug(f"{self.name} complete but effects still false: {unmet}")

    def stop(self) -> None:
        self.strategy.stop()

    def __repr__(self) -> str:
        return f"Action({self.name!r}, cost={self._cost!r})"
