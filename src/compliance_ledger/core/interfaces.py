"""Abstract interfaces (Protocol classes) for the compliance ledger.

Defines the contract between the service layer and the state adapter using
Python's typing.Protocol. Services depend on these protocols: never on the
concrete in-memory store. This enables swapping the store for a persistent
engine that honours the same transaction boundary.

Protocols defined:
- IStagedState
- ILedgerStore
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol

from compliance_ledger.core.models import (
    AuditTrailEntry,
    ComplianceFramework,
    ComplianceRecord,
    ViolationEntry,
)

if TYPE_CHECKING:
    from compliance_ledger.event_log.events import LedgerEvent


class IStagedState(Protocol):
    """The five ledger tables, the two sequence counters, and the event outbox.

    Attributes:
        officers: identity -> officer membership flag.
        frameworks: framework id -> framework record.
        records: entity -> current compliance record.
        audit_trail: entity -> {sequence: audit entry}.
        violations: entity -> {sequence: violation entry}.
        audit_count: Next audit sequence number (shared across entities).
        violation_count: Next violation sequence number (shared across entities).
        outbox: Events staged during the current transaction.
    """

    officers: dict[str, bool]
    frameworks: dict[str, ComplianceFramework]
    records: dict[str, ComplianceRecord]
    audit_trail: dict[str, dict[int, AuditTrailEntry]]
    violations: dict[str, dict[int, ViolationEntry]]
    audit_count: int
    violation_count: int
    outbox: list[LedgerEvent]


class ILedgerStore(Protocol):
    """Store contract: committed state for reads, staged state for writes."""

    @property
    def state(self) -> IStagedState:
        """Return the committed state. Callers must treat it as read-only."""
        ...

    def transaction(self) -> AbstractContextManager[IStagedState]:
        """Open a transaction over a staged copy of the committed state.

        The staged copy replaces the committed state only if the managed
        block exits normally. Any exception discards every staged write,
        counter increment, and event.
        """
        ...
