"""Shared pytest fixtures for the managed loop tests."""

from __future__ import annotations

from concurrent.futures import Future

import pytest

from managed_loop.testing.fixtures import manual_host, simulated_loop, virtual_loop  # noqa: F401


@pytest.fixture
def future() -> Future:
    """Return a fresh pending future."""
    return Future()
