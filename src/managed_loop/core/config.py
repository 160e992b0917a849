"""Loop configuration, optionally loaded from a YAML file."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .clock import MonotonicClock, SimulatedClock
from .errors import ConfigError
from .interfaces import Clock

CLOCKS = ("monotonic", "simulated")


@dataclass
class LoopConfig:
    """
    Settings for a ``ManagedLoop``.

    Example YAML::

        managed_loop:
          clock: simulated
          tick_step_ms: 1
          default_timeout_ms: 5000
          strict_handlers: true
          log_level: DEBUG
    """

    clock: str = "monotonic"
    tick_step_ms: float = 1.0
    default_timeout_ms: float = math.inf
    strict_handlers: bool = False
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.clock not in CLOCKS:
            raise ConfigError(f"clock must be one of {CLOCKS}, got {self.clock!r}")
        self.tick_step_ms = _as_millis(self.tick_step_ms, "tick_step_ms")
        self.default_timeout_ms = _as_millis(
            self.default_timeout_ms, "default_timeout_ms"
        )
        if math.isinf(self.tick_step_ms) or self.tick_step_ms <= 0:
            raise ConfigError(
                f"tick_step_ms must be finite and > 0, got {self.tick_step_ms!r}"
            )
        if self.log_level is not None:
            level = logging.getLevelName(str(self.log_level).upper())
            if not isinstance(level, int):
                raise ConfigError(f"Unknown log_level: {self.log_level!r}")
            self.log_level = str(self.log_level).upper()

    # -- construction --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoopConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def make_clock(self) -> Clock:
        if self.clock == "simulated":
            return SimulatedClock(step_ms=self.tick_step_ms)
        return MonotonicClock()


def load_config(path: str | Path) -> LoopConfig:
    """Read a ``LoopConfig`` from YAML.

    Accepts either a top-level ``managed_loop:`` mapping or a flat one.
    An empty file yields the defaults.
    """
    path = Path(path)
    with open(path) as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    section = data.get("managed_loop", data)
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'managed_loop' must be a mapping")
    return LoopConfig.from_dict(section)


def configure_logging(config: LoopConfig) -> None:
    """Apply ``config.log_level`` to the package logger."""
    if config.log_level is not None:
        logging.getLogger("managed_loop").setLevel(config.log_level)


def _as_millis(value: Any, name: str) -> float:
    if value is None:
        return math.inf
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        millis = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if math.isnan(millis) or millis < 0:
        raise ConfigError(f"{name} must be >= 0, got {value!r}")
    return millis
