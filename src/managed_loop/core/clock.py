"""Clocks that drive the managed loop's notion of virtual time."""

from __future__ import annotations

import time
from dataclasses import dataclass


class MonotonicClock:
    """Virtual time backed by the process monotonic clock, in milliseconds."""

    def now(self) -> float:
        return time.monotonic_ns() / 1_000_000

    def poll(self) -> float:
        return self.now()


@dataclass
class SimulatedClock:
    """
    A logical clock that only moves when told to.

    Every ``poll`` (one per driver tick) advances the clock by ``step_ms``,
    so a blocking wait makes progress without touching wall-clock time.
    ``advance_to`` / ``advance_by`` jump instantly, enabling fast test runs.
    """

    step_ms: float = 1.0
    _current: float = 0.0

    def __post_init__(self) -> None:
        # A clock that never moves would make every bounded wait unbounded.
        if not self.step_ms > 0:
            raise ValueError(f"step_ms must be > 0, got {self.step_ms!r}")

    # -- public API ----------------------------------------------------------

    def now(self) -> float:
        """Return the current simulated time in milliseconds."""
        return self._current

    def poll(self) -> float:
        """Advance by one step and return the new time."""
        self._current += self.step_ms
        return self._current

    def advance_to(self, target: float) -> float:
        """Advance the clock to *target* ms. Never moves backwards."""
        if target > self._current:
            self._current = target
        return self._current

    def advance_by(self, delta: float) -> float:
        """Advance the clock by *delta* ms."""
        return self.advance_to(self._current + delta)

    def reset(self) -> None:
        self._current = 0.0
