from .waiter import Await
from .latch import CountdownLatch

__all__ = ["Await", "CountdownLatch"]
