from .manual_host import HostHook, ManualHost
from .asserter import TimerAsserter

__all__ = [
    "HostHook",
    "ManualHost",
    "TimerAsserter",
]
