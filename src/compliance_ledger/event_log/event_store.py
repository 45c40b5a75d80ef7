"""Append-only in-memory store for ledger events.

Stores LedgerEvent instances sorted by height. All write operations are
append-only: no updates or deletes are permitted.

Heights supplied by the host are monotonic, so appends normally land at the
end of the list; bisect keeps the order correct regardless.
"""

from __future__ import annotations

import bisect

from compliance_ledger.event_log.events import LedgerEvent


class LedgerEventStore:
    """Append-only event store for LedgerEvent instances.

    Maintains a single event list sorted by height with a parallel list of
    heights for bisect-based range queries.
    """

    def __init__(self) -> None:
        """Initialize an empty event store."""
        self._events: list[LedgerEvent] = []
        # Parallel list of heights for bisect operations
        self._heights: list[int] = []

    def append(self, event: LedgerEvent) -> None:
        """Append a LedgerEvent to the store.

        Args:
            event: The immutable event to store. Events with equal heights
                keep their append order.
        """
        index = bisect.bisect_right(self._heights, event.height)
        self._events.insert(index, event)
        self._heights.insert(index, event.height)

    def query_range(
        self,
        start_height: int,
        end_height: int,
        event_types: list[str] | None = None,
    ) -> list[LedgerEvent]:
        """Return events within [start_height, end_height] (inclusive).

        Args:
            start_height: Lower bound height (inclusive).
            end_height: Upper bound height (inclusive).
            event_types: Optional allow-list of event_type values. If None,
                all event types are returned.

        Returns:
            Events sorted by height ascending.
        """
        low = bisect.bisect_left(self._heights, start_height)
        high = bisect.bisect_right(self._heights, end_height)

        result = self._events[low:high]

        if event_types is not None:
            event_type_set = set(event_types)
            result = [e for e in result if e.event_type in event_type_set]

        return result

    def events_for_subject(self, subject: str) -> list[LedgerEvent]:
        """Return every event whose subject matches, in height order."""
        return [e for e in self._events if e.subject == subject]

    def count(self) -> int:
        """Return the total number of stored events."""
        return len(self._events)

    def get_all_events(self) -> list[LedgerEvent]:
        """Return a copy of all events in height order."""
        return list(self._events)
