from .interfaces import (
    Clock,
    EventKind,
    Handler,
    HostScheduler,
    ScheduledEvent,
    TimerAdapter,
)
from .clock import MonotonicClock, SimulatedClock
from .registry import EventRegistry
from .results import Failed, Ok, Outcome, TimedOut
from .errors import (
    AwaitTimeout,
    BlockingStateError,
    ConfigError,
    ExecutionError,
    ManagedLoopError,
)
from .config import LoopConfig, configure_logging, load_config

__all__ = [
    "Clock",
    "EventKind",
    "Handler",
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
]
