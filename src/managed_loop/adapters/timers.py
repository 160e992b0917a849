"""Timer adapters: where code under test schedules its callbacks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.interfaces import EventKind, Handler, HostScheduler, ScheduledEvent, TimerAdapter

if TYPE_CHECKING:
    from ..loop import ManagedLoop


class PassThroughTimers:
    """Forwards every call straight to the host scheduler."""

    def __init__(self, host: HostScheduler) -> None:
        self.host = host

    def set_timeout(self, handler: Handler | None, delay_ms: float = 0) -> Any:
        if handler is None:
            return None
        return self.host.schedule_once(handler, delay_ms)

    def set_interval(self, handler: Handler | None, interval_ms: float = 0) -> Any:
        if handler is None:
            return None
        return self.host.schedule_repeating(handler, interval_ms)

    def clear_timeout(self, handle: Any) -> None:
        if handle is not None:
            self.host.cancel(handle)

    clear_interval = clear_timeout


class VirtualTimers:
    """
    Routes scheduling through the loop's event registry.

    Events are also hooked on the host while the loop is not blocking, so
    they fire on their own when nobody is driving the loop by hand.
    """

    def __init__(self, loop: ManagedLoop) -> None:
        self.loop = loop

    def set_timeout(self, handler: Handler | None, delay_ms: float = 0) -> ScheduledEvent | None:
        if handler is None:
            return None
        return self.loop.schedule(handler, EventKind.TIMEOUT, delay_ms)

    def set_interval(
        self, handler: Handler | None, interval_ms: float = 0
    ) -> ScheduledEvent | None:
        if handler is None:
            return None
        return self.loop.schedule(handler, EventKind.INTERVAL, interval_ms)

    def clear_timeout(self, handle: Any) -> None:
        if handle is None:
            return
        if isinstance(handle, ScheduledEvent):
            self.loop.cancel(handle)
        else:
            # Scheduled before the loop was managed.
            self.loop.host.cancel(handle)

    clear_interval = clear_timeout


class TimerBinding:
    """
    Holds the active ``TimerAdapter``.

    Code under test receives the binding and schedules through it; the
    harness decides which adapter sits behind it.
    """

    def __init__(self, default: TimerAdapter) -> None:
        self._default = default
        self._active = default

    @property
    def active(self) -> TimerAdapter:
        return self._active

    @property
    def is_default(self) -> bool:
        return self._active is self._default

    def install(self, adapter: TimerAdapter) -> None:
        self._active = adapter

    def restore(self) -> None:
        self._active = self._default

    # -- scheduling entry points ---------------------------------------------

    def set_timeout(self, handler: Handler | None, delay_ms: float = 0) -> Any:
        return self._active.set_timeout(handler, delay_ms)

    def set_interval(self, handler: Handler | None, interval_ms: float = 0) -> Any:
        return self._active.set_interval(handler, interval_ms)

    def clear_timeout(self, handle: Any) -> None:
        self._active.clear_timeout(handle)

    def clear_interval(self, handle: Any) -> None:
        self._active.clear_interval(handle)
