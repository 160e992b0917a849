from .hosts import AsyncioHost, NullHost
from .timers import PassThroughTimers, TimerBinding, VirtualTimers

__all__ = ["AsyncioHost", "NullHost", "PassThroughTimers", "TimerBinding", "VirtualTimers"]
