"""Managed event loop: virtual timers that can be driven by hand."""

from __future__ import annotations

import functools
import logging
import math
from typing import Any

from .adapters.hosts import NullHost
from .adapters.timers import PassThroughTimers, TimerBinding, VirtualTimers
from .core.clock import MonotonicClock
from .core.config import LoopConfig, configure_logging
from .core.errors import BlockingStateError
from .core.interfaces import Clock, EventKind, Handler, HostScheduler, ScheduledEvent
from .core.registry import EventRegistry

logger = logging.getLogger(__name__)


class ManagedLoop:
    """
    Event loop driver.

    Every callback scheduled through ``timers`` while the loop is managed is
    kept in a registry. Outside of a blocking wait the callbacks are also
    hooked ("globalized") on the host scheduler, so they fire by themselves.
    During a blocking wait they are unhooked and fire only through ``tick``.

    The blocking state is a depth counter: a handler running inside ``tick``
    may start a nested wait, and only the outermost wait changes hooks.
    """

    def __init__(
        self,
        host: HostScheduler | None = None,
        clock: Clock | None = None,
        *,
        strict_handlers: bool = False,
        default_timeout_ms: float = math.inf,
        manage: bool = True,
    ) -> None:
        self.host: HostScheduler = host if host is not None else NullHost()
        self.clock: Clock = clock if clock is not None else MonotonicClock()
        self.registry = EventRegistry()
        self.strict_handlers = strict_handlers
        self.default_timeout_ms = default_timeout_ms
        self.timers = TimerBinding(PassThroughTimers(self.host))
        self._virtual_timers = VirtualTimers(self)
        self._depth = 0
        if manage:
            self.manage()

    @classmethod
    def from_config(
        cls,
        config: LoopConfig,
        host: HostScheduler | None = None,
        *,
        manage: bool = True,
    ) -> ManagedLoop:
        configure_logging(config)
        return cls(
            host=host,
            clock=config.make_clock(),
            strict_handlers=config.strict_handlers,
            default_timeout_ms=config.default_timeout_ms,
            manage=manage,
        )

    # -- installing the virtual timers ---------------------------------------

    @property
    def managed(self) -> bool:
        return self.timers.active is self._virtual_timers

    def manage(self) -> None:
        """Route ``timers`` through the registry."""
        if not self.managed:
            self.timers.install(self._virtual_timers)
            logger.debug("Virtual timers installed")

    def reset(self) -> None:
        """Put the host's own timers back behind ``timers``."""
        if self.managed:
            self.timers.restore()
            logger.debug("Host timers restored")

    def close(self) -> None:
        """Drop every pending event, unhook it from the host and reset.

        Raises ``BlockingStateError`` while a blocking wait is in progress.
        """
        if self._depth:
            raise BlockingStateError(
                f"close() called with {self._depth} blocking wait(s) active"
            )
        for event in self.registry:
            self._deglobalize(event)
        self.registry.clear()
        self.reset()

    def __enter__(self) -> ManagedLoop:
        self.manage()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- registration --------------------------------------------------------

    def now(self) -> float:
        return self.clock.now()

    @property
    def pending(self) -> list[ScheduledEvent]:
        return list(self.registry)

    def schedule(self, handler: Handler, kind: EventKind, delay_ms: float) -> ScheduledEvent:
        event = ScheduledEvent(
            handler=handler,
            kind=kind,
            delay_ms=delay_ms,
            created_at=self.clock.now(),
        )
        self.registry.add(event)
        if self._depth == 0:
            self._globalize(event)
        logger.debug("Registered %s event after %.3f ms", kind.value, event.delay_ms)
        return event

    def cancel(self, event: ScheduledEvent) -> bool:
        """Forget *event*. Returns ``False`` if it already fired or was cancelled."""
        self._deglobalize(event)
        return self.registry.discard(event)

    # -- blocking mode -------------------------------------------------------

    @property
    def blocking_depth(self) -> int:
        return self._depth

    @property
    def is_blocking(self) -> bool:
        return self._depth > 0

    def set_blocking(self) -> None:
        if self._depth == 0:
            for event in self.registry:
                self._deglobalize(event)
            logger.debug("Entered blocking mode with %d pending event(s)", len(self.registry))
        self._depth += 1

    def reset_blocking(self) -> None:
        if self._depth == 0:
            raise BlockingStateError("reset_blocking() called without a matching set_blocking()")
        self._depth -= 1
        if self._depth == 0:
            for event in self.registry:
                self._globalize(event)
            logger.debug("Left blocking mode with %d pending event(s)", len(self.registry))

    # -- driving -------------------------------------------------------------

    def tick(self) -> float:
        """Fire every due event once and return the sampled time."""
        now = self.clock.poll()
        for event in self.registry.due(now):
            # An earlier handler may have cancelled it, or fired it from a
            # nested wait.
            if event not in self.registry or not event.is_due(now):
                continue
            if event.is_repeating:
                event.last_fired_at = now
            else:
                self.registry.discard(event)
                self._deglobalize(event)
            self._run(event)
        return now

    # -- internals -----------------------------------------------------------

    def _run(self, event: ScheduledEvent) -> None:
        try:
            event.run()
        except Exception:
            if self.strict_handlers:
                raise
            logger.exception("Error in %s handler %r", event.kind.value, event.handler)

    def _fire_from_host(self, event: ScheduledEvent) -> None:
        if event not in self.registry:
            return
        if event.is_repeating:
            event.last_fired_at = self.clock.now()
        else:
            self.registry.discard(event)
            event.host_handle = None
        self._run(event)

    def _globalize(self, event: ScheduledEvent) -> None:
        if event.is_globalized:
            return
        fire = functools.partial(self._fire_from_host, event)
        if event.is_repeating:
            event.host_handle = self.host.schedule_repeating(fire, event.delay_ms)
        else:
            elapsed = self.clock.now() - event.created_at
            event.host_handle = self.host.schedule_once(fire, max(0.0, event.delay_ms - elapsed))

    def _deglobalize(self, event: ScheduledEvent) -> None:
        if not event.is_globalized:
            return
        handle, event.host_handle = event.host_handle, None
        self.host.cancel(handle)
