"""Global event bus for agent lifecycle notifications.

The bus lets hosts observe what agents are doing (for debug overlays, logs,
barks, sound cues) without the agent knowing about any of those systems.

USE FOR:
- Plan adopted / completed / invalidated notifications
- Action started / completed notifications
- Debug tooling that wants a trace of agent decisions

DO NOT USE FOR:
- Feeding the planner. Beliefs are read directly through their predicates.
- Anything that needs a return value or synchronous confirmation.
- Error handling or exception propagation

The bus is fire-and-forget: handlers execute immediately (synchronously), and
a handler that raises is logged and skipped so one broken listener cannot stall
an agent tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class AgentEvent:
    """Base class for all agent events.

    Attributes:
        agent_name: Name of the GoapAgent that published the event.
    """

    agent_name: str


@dataclass
class PlanStartedEvent(AgentEvent):
    """A freshly computed plan was adopted."""

    goal_name: str
    action_names: list[str]
    cost: float


@dataclass
class ActionStartedEvent(AgentEvent):
    action_name: str


@dataclass
class ActionCompletedEvent(AgentEvent):
    action_name: str


@dataclass
class PlanCompletedEvent(AgentEvent):
    """Every action of the plan finished; ``goal_name`` becomes the last goal."""

    goal_name: str


@dataclass
class PlanInvalidatedEvent(AgentEvent):
    """The current action and goal were dropped, forcing a re-plan.

    Attributes:
        reason: Short machine-friendly reason, e.g. "target_changed" or
            "preconditions_failed".
    """

    reason: str
    goal_name: str | None = None
    action_name: str | None = None


class EventBus:
    """Simple event bus for publish/subscribe pattern."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: type, handler: Callable[[Any], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Callable[[Any], None]) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers:
            with suppress(ValueError):
                self._handlers[event_type].remove(handler)

    def publish(self, event: AgentEvent) -> None:
        """Publish an event to all handlers subscribed to its exact type."""
        event_type = type(event)
        if event_type in self._handlers:
            # Copy so handlers may subscribe/unsubscribe during dispatch
            for handler in list(self._handlers[event_type]):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error handling event {event_type.__name__}")


# Global event bus instance
_global_event_bus = EventBus()


def subscribe_to_event(event_type: type, handler: Callable[[Any], None]) -> None:
    """Subscribe to an event type globally."""
    _global_event_bus.subscribe(event_type, handler)


def unsubscribe_from_event(event_type: type, handler: Callable[[Any], None]) -> None:
    """Unsubscribe from an event type globally."""
    _global_event_bus.unsubscribe(event_type, handler)


def publish_event(event: AgentEvent) -> None:
    """Publish an event globally."""
    _global_event_bus.publish(event)


def reset_event_bus_for_testing() -> None:
    """Reset the global event bus. Use only in tests."""
    global _global_event_bus
    _global_event_bus = EventBus()
