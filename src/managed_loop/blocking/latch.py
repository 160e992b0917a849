"""Countdown latch awaited through the managed loop."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING

from .waiter import Await, Timeout

if TYPE_CHECKING:
    from ..loop import ManagedLoop

logger = logging.getLogger(__name__)


class CountdownLatch:
    """
    Releases waiters once ``count_down`` has been called *count* times.

    ``count_down`` at zero is a no-op. ``reset`` restores the initial count
    and, if the latch had already opened, arms a fresh completion signal so
    the next ``wait`` blocks again.
    """

    def __init__(self, count: int, loop: ManagedLoop) -> None:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count!r}")
        self.initial_count = count
        self._count = count
        self._await = Await(loop)
        self._closed = self._new_signal()

    def count_down(self) -> None:
        if self._count == 0:
            logger.debug("count_down() on an open latch ignored")
            return
        self._count -= 1
        if self._count == 0:
            self._closed.set_result(None)

    def get_count(self) -> int:
        return self._count

    def reset(self) -> None:
        self._count = self.initial_count
        if self._closed.done() and self._count > 0:
            self._closed = self._new_signal()

    def wait(self, timeout_ms: Timeout = None) -> bool:
        """Block until the count reaches zero; raises ``AwaitTimeout`` otherwise."""
        self._await.result(self._closed, timeout_ms)
        return True

    def _new_signal(self) -> Future[None]:
        signal: Future[None] = Future()
        if self._count == 0:
            signal.set_result(None)
        return signal
