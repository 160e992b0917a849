"""Host schedulers: the real timer dispatch events are hooked onto."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

from ..core.interfaces import Handler


class AsyncioHost:
    """
    Host scheduler backed by an asyncio event loop.

    When no loop is given the running loop is looked up on first use, so the
    host can be created outside of a coroutine and used inside one.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule_once(self, handler: Handler, delay_ms: float) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay_ms) / 1000, handler)

    def schedule_repeating(self, handler: Handler, interval_ms: float) -> _RepeatingCall:
        return _RepeatingCall(self.loop, handler, max(0.0, interval_ms) / 1000)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()


class _RepeatingCall:
    """Re-arms ``call_later`` every interval until cancelled."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        handler: Handler,
        interval_s: float,
    ) -> None:
        self._loop = loop
        self._handler = handler
        self._interval_s = interval_s
        self._cancelled = False
        self._handle = loop.call_later(interval_s, self._run)

    def _run(self) -> None:
        # Re-arm first so the handler is free to cancel us.
        self._handle = self._loop.call_later(self._interval_s, self._run)
        self._handler()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._cancelled


class NullHost:
    """
    Host that accepts hooks but never fires them.

    With this host events only ever run through ``ManagedLoop.tick``.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def schedule_once(self, handler: Handler, delay_ms: float) -> int:
        return next(self._ids)

    def schedule_repeating(self, handler: Handler, interval_ms: float) -> int:
        return next(self._ids)

    def cancel(self, handle: Any) -> None:
        pass
