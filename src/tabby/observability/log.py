"""Event log — queryable, thread-safe store of export events.

Stores a bounded ring buffer of ``ExportEvent`` objects for inspection.

Thread Safety:
    All methods are protected by a ``threading.Lock``.

"""

import threading
from collections import deque
from typing import Any

from tabby.observability.events import ExportEvent, ExportEventKind


class EventLog:
    """Bounded event store with query support.

    Events are stored in a ring buffer (deque with maxlen).  When the
    buffer is full, the oldest events are discarded automatically.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[ExportEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: ExportEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        kind: ExportEventKind | None = None,
        detail: str | None = None,
        limit: int = 100,
    ) -> list[ExportEvent]:
        """Query events, oldest first.

        Args:
            kind: Only return events of this kind.
            detail: Only return events whose detail contains this substring.
            limit: Maximum number of events to return.

        """
        with self._lock:
            events = list(self._events)

        results: list[ExportEvent] = []
        for event in events:
            if kind is not None and event.kind != kind:
                continue
            if detail is not None and detail not in event.detail:
                continue
            results.append(event)
            if len(results) >= limit:
                break
        return results

    def recent(self, n: int = 20) -> list[ExportEvent]:
        """Return the N most recent events."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about stored events."""
        with self._lock:
            events = list(self._events)

        kind_counts: dict[str, int] = {}
        for event in events:
            kind_counts[event.kind] = kind_counts.get(event.kind, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_kind": kind_counts,
        }
