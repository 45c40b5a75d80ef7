"""Ledger event log: append-only stream of committed mutations.

Downstream indexers follow this stream instead of reading the ledger tables.
"""

from __future__ import annotations

from compliance_ledger.event_log.events import LedgerEvent
from compliance_ledger.event_log.event_store import LedgerEventStore
from compliance_ledger.event_log.publisher import LedgerEventPublisher

__all__ = [
    "LedgerEvent",
    "LedgerEventStore",
    "LedgerEventPublisher",
]
