"""Exception types raised by the managed loop."""

from __future__ import annotations


class ManagedLoopError(Exception):
    """Base class for every error raised by this package."""


class AwaitTimeout(ManagedLoopError, TimeoutError):
    """An awaited value did not settle within the requested duration."""

    def __init__(self, elapsed_ms: float, timeout_ms: float) -> None:
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timed out after [{timeout_ms:g}] milliseconds "
            f"(elapsed {elapsed_ms:.3f} ms)"
        )


class ExecutionError(ManagedLoopError):
    """
    Wrapper for a failure raised inside asynchronous code.

    The waiter unwraps exactly one layer and surfaces ``__cause__``.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.__cause__ = cause


class BlockingStateError(ManagedLoopError, RuntimeError):
    """``reset_blocking`` was called more times than ``set_blocking``."""


class ConfigError(ManagedLoopError, ValueError):
    """Invalid loop configuration."""
