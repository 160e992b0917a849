"""Virtual event registry: every callback that is logically pending."""

from __future__ import annotations

from typing import Iterator

from .interfaces import ScheduledEvent


class EventRegistry:
    """
    Insertion-ordered set of live ``ScheduledEvent`` objects.

    Membership reflects exactly which events are pending; iteration order is
    registration order and is used as the tie-break when several events are
    due in the same tick.
    """

    def __init__(self) -> None:
        self._events: dict[ScheduledEvent, None] = {}

    # -- membership ----------------------------------------------------------

    def add(self, event: ScheduledEvent) -> None:
        self._events[event] = None

    def discard(self, event: ScheduledEvent) -> bool:
        """Remove *event*; returns ``False`` if it was not registered."""
        if event in self._events:
            del self._events[event]
            return True
        return False

    def clear(self) -> None:
        self._events.clear()

    def __contains__(self, event: object) -> bool:
        return event in self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ScheduledEvent]:
        # Snapshot: handlers add and remove events while we iterate.
        return iter(list(self._events))

    # -- queries -------------------------------------------------------------

    def due(self, now: float) -> list[ScheduledEvent]:
        """Events that should fire at *now*, in registration order."""
        return [event for event in self._events if event.is_due(now)]

    def globalized(self) -> list[ScheduledEvent]:
        return [event for event in self._events if event.is_globalized]
