"""pytest fixtures: one managed loop per test, closed afterwards.

Needs pytest, from the ``test`` extra (``pip install managed-loop[test]``).
An installed package registers this module as the ``managed_loop`` pytest
plugin, so the fixtures are available without any import. To use them from
a source checkout instead, import them into a ``conftest.py``::

    from managed_loop.testing.fixtures import manual_host, simulated_loop, virtual_loop
"""

from __future__ import annotations

from typing import Iterator

import pytest

from ..core.clock import SimulatedClock
from ..loop import ManagedLoop
from .manual_host import ManualHost


@pytest.fixture
def manual_host() -> ManualHost:
    return ManualHost()


@pytest.fixture
def virtual_loop(manual_host: ManualHost) -> Iterator[ManagedLoop]:
    """A managed loop on the monotonic clock, hooked on a ``ManualHost``."""
    with ManagedLoop(host=manual_host) as loop:
        yield loop


@pytest.fixture
def simulated_loop(manual_host: ManualHost) -> Iterator[ManagedLoop]:
    """A managed loop whose clock moves 1 ms per tick."""
    with ManagedLoop(host=manual_host, clock=SimulatedClock(step_ms=1.0)) as loop:
        yield loop
