"""Blocking waiter: synchronously resolve a future by driving the loop."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import math
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from ..core.errors import ExecutionError
from ..core.results import Failed, Ok, Outcome, TimedOut

if TYPE_CHECKING:
    from ..loop import ManagedLoop

logger = logging.getLogger(__name__)

F = TypeVar("F")

Timeout = float | timedelta | None

_CANCELLED = (asyncio.CancelledError, concurrent.futures.CancelledError)


class Await:
    """
    Wait for a future-like value without a real blocking primitive.

    Each wait puts the loop in blocking mode and calls ``tick`` until the
    value settles or the deadline passes. The value is anything with the
    ``concurrent.futures.Future`` / ``asyncio.Future`` inspection methods
    (``done``, ``cancelled``, ``exception``, ``result``).

    Timeouts are in milliseconds (or a ``timedelta``); ``None`` means the
    loop's ``default_timeout_ms``, which is infinite unless configured.
    """

    def __init__(self, loop: ManagedLoop) -> None:
        self.loop = loop

    # -- public API ----------------------------------------------------------

    def result(self, value: Any, timeout_ms: Timeout = None) -> Any:
        """Return the settled value, or raise its error or ``AwaitTimeout``.

        A failure wrapped in ``ExecutionError`` is unwrapped one level.
        """
        return self.outcome(value, timeout_ms).unwrap()

    def ready(self, value: F, timeout_ms: Timeout = None) -> F:
        """Return *value* itself once settled, whatever the outcome."""
        timed_out = self._drive(value, timeout_ms)
        if timed_out is not None:
            timed_out.unwrap()
        return value

    def outcome(self, value: Any, timeout_ms: Timeout = None) -> Outcome:
        """Like ``result`` but reports timeouts and failures as values."""
        timed_out = self._drive(value, timeout_ms)
        if timed_out is not None:
            return timed_out
        return _settled(value)

    # -- internals -----------------------------------------------------------

    def _drive(self, value: Any, timeout_ms: Timeout) -> TimedOut | None:
        if not callable(getattr(value, "done", None)):
            raise TypeError(f"Expected a future-like value, got {type(value).__name__}")
        timeout = self._millis(timeout_ms)
        start = self.loop.now()
        deadline = start + timeout

        self.loop.set_blocking()
        try:
            while True:
                now = self.loop.tick()
                if value.done():
                    return None
                if now > deadline:
                    elapsed = now - start
                    logger.warning(
                        "Wait timed out after %.3f ms (limit %g ms)", elapsed, timeout
                    )
                    return TimedOut(elapsed_ms=elapsed, timeout_ms=timeout)
        finally:
            self.loop.reset_blocking()

    def _millis(self, timeout_ms: Timeout) -> float:
        if timeout_ms is None:
            return self.loop.default_timeout_ms
        if isinstance(timeout_ms, timedelta):
            millis = timeout_ms.total_seconds() * 1000
        else:
            millis = float(timeout_ms)
        if math.isnan(millis) or millis < 0:
            raise ValueError(f"timeout must be >= 0, got {timeout_ms!r}")
        return millis


def _settled(value: Any) -> Outcome:
    if value.cancelled():
        try:
            value.result()
        except _CANCELLED as exc:
            return Failed(exc)
    error = value.exception()
    if error is None:
        return Ok(value.result())
    if isinstance(error, ExecutionError) and error.__cause__ is not None:
        return Failed(error.__cause__)
    return Failed(error)
