"""Tick-driven countdown timer.

Timers never read the wall clock. The owner advances them with the elapsed
time it was given (see ``DeltaTime``), which keeps strategy behavior
deterministic under test.
"""

from collections.abc import Callable

from goapkit.types import DeltaTime


class CountdownTimer:
    """Count down from ``duration`` seconds and fire callbacks on start/stop."""

    def __init__(self, duration: float) -> None:
        if duration < 0:
            msg = "duration must be non-negative"
            raise ValueError(msg)
        self.duration = duration
        self.time_remaining = duration
        self.is_running = False
        self.on_start: list[Callable[[], None]] = []
        self.on_stop: list[Callable[[], None]] = []

    @property
    def is_finished(self) -> bool:
        return self.time_remaining <= 0

    @property
    def progress(self) -> float:
        """Fraction of the countdown still remaining, 1.0 down to 0.0."""
        if self.duration == 0:
            return 0.0
        return max(0.0, self.time_remaining / self.duration)

    def start(self) -> None:
        """Rewind to the full duration and start running."""
        self.time_remaining = self.duration
        if not self.is_running:
            self.is_running = True
            for callback in list(self.on_start):
                callback()

    def stop(self) -> None:
        if self.is_running:
            self.is_running = False
            for callback in list(self.on_stop):
                callback()

    def reset(self, duration: float | None = None) -> None:
        """Rewind without starting. Optionally change the duration."""
        if duration is not None:
            self.duration = duration
        self.time_remaining = self.duration

    def tick(self, delta_time: DeltaTime | float) -> None:
        if self.is_running and self.time_remaining > 0:
            self.time_remaining -= delta_time
        if self.is_running and self.time_remaining <= 0:
            self.stop()
