"""
Managed Loop
============

Synchronous, bounded waits on asynchronous values for test harnesses,
driven by a virtual timer queue instead of the host's own timer dispatch.

Quick start::

    from concurrent.futures import Future
    from managed_loop import Await, ManagedLoop

    with ManagedLoop() as loop:
        value = Future()
        loop.timers.set_timeout(lambda: value.set_result(42), 50)
        assert Await(loop).result(value, timeout_ms=200) == 42
"""

from .core.interfaces import (
    Clock,
    EventKind,
    HostScheduler,
    ScheduledEvent,
    TimerAdapter,
)
from .core.clock import MonotonicClock, SimulatedClock
from .core.registry import EventRegistry
from .core.results import Failed, Ok, Outcome, TimedOut
from .core.errors import (
    AwaitTimeout,
    BlockingStateError,
    ConfigError,
    ExecutionError,
    ManagedLoopError,
)
from .core.config import LoopConfig, configure_logging, load_config

from .adapters.hosts import AsyncioHost, NullHost
from .adapters.timers import PassThroughTimers, TimerBinding, VirtualTimers

from .loop import ManagedLoop

from .blocking.waiter import Await
from .blocking.latch import CountdownLatch

__version__ = "0.1.0"

__all__ = [
    # Core
    "Clock",
    "EventKind",
    "HostScheduler",
    "ScheduledEvent",
    "TimerAdapter",
    "MonotonicClock",
    "SimulatedClock",
    "EventRegistry",
    "Failed",
    "Ok",
    "Outcome",
    "TimedOut",
    "AwaitTimeout",
    "BlockingStateError",
    "ConfigError",
    "ExecutionError",
    "ManagedLoopError",
    "LoopConfig",
    "configure_logging",
    "load_config",
    # Adapters
    "AsyncioHost",
    "NullHost",
    "PassThroughTimers",
    "TimerBinding",
    "VirtualTimers",
    # Driver
    "ManagedLoop",
    # Blocking
    "Await",
    "CountdownLatch",
]
