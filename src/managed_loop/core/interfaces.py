"""Protocol definitions and core data types for the managed loop."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

Handler = Callable[[], Any]


# ---------------------------------------------------------------------------
# Core data types
# ---------------------------------------------------------------------------

class EventKind(str, enum.Enum):
    TIMEOUT = "timeout"
    INTERVAL = "interval"


@dataclass(eq=False)
class ScheduledEvent:
    """A callback registered through the virtual timers.

    Compared and hashed by identity, so two events with the same handler and
    delay are still distinct registry entries.
    """

    handler: Handler
    kind: EventKind
    delay_ms: float
    created_at: float
    last_fired_at: float = field(default=0.0)
    host_handle: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.delay_ms = max(0.0, float(self.delay_ms))
        self.last_fired_at = self.created_at

    @property
    def is_repeating(self) -> bool:
        return self.kind is EventKind.INTERVAL

    @property
    def is_globalized(self) -> bool:
        return self.host_handle is not None

    def is_due(self, now: float) -> bool:
        """Whether the event should fire at virtual time *now* (ms)."""
        since = self.last_fired_at if self.is_repeating else self.created_at
        return now - since >= self.delay_ms

    def run(self) -> Any:
        return self.handler()


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class Clock(Protocol):
    """Source of virtual time in milliseconds."""

    def now(self) -> float:
        """Current time, without side effects."""
        ...

    def poll(self) -> float:
        """Time sample for a new tick of the driver."""
        ...


@runtime_checkable
class HostScheduler(Protocol):
    """
    The real scheduler events get hooked onto while the loop is not blocking.

    Handles returned by ``schedule_once`` / ``schedule_repeating`` are opaque
    and only ever passed back to ``cancel``.
    """

    def schedule_once(self, handler: Handler, delay_ms: float) -> Any:
        ...

    def schedule_repeating(self, handler: Handler, interval_ms: float) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


@runtime_checkable
class TimerAdapter(Protocol):
    """Scheduling entry points used by code under test."""

    def set_timeout(self, handler: Handler | None, delay_ms: float = 0) -> Any:
        ...

    def set_interval(self, handler: Handler | None, interval_ms: float = 0) -> Any:
        ...

    def clear_timeout(self, handle: Any) -> None:
        ...

    def clear_interval(self, handle: Any) -> None:
        ...
