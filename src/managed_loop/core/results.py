"""Outcome types returned by a bounded wait."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .errors import AwaitTimeout

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The awaited value settled successfully."""

    value: T

    @property
    def passed(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class TimedOut:
    """The deadline passed before the value settled."""

    elapsed_ms: float
    timeout_ms: float

    @property
    def passed(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise AwaitTimeout(self.elapsed_ms, self.timeout_ms)


@dataclass(frozen=True)
class Failed:
    """The awaited value settled with an error (or was cancelled)."""

    cause: BaseException

    @property
    def passed(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.cause


Outcome = Union[Ok[Any], TimedOut, Failed]
