"""In-memory ledger state and its transaction boundary.

This module is the ONLY place that replaces committed ledger state. Services
never write to committed state directly; they receive a staged copy from
``LedgerStateStore.transaction()`` and the copy is swapped in on success.

The audit trail and violation ledger are append-only: the store exposes no
update or delete paths for them, and the staged copy shares the immutable
entries of the committed state.

Key exports:
- LedgerState      : the five tables, two counters, and event outbox
- LedgerStateStore : committed state holder with all-or-nothing transactions
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from compliance_ledger.core.models import (
    AuditTrailEntry,
    ComplianceFramework,
    ComplianceRecord,
    ViolationEntry,
)
from compliance_ledger.event_log.event_store import LedgerEventStore
from compliance_ledger.event_log.events import LedgerEvent
from compliance_ledger.observability import get_logger

logger = get_logger(__name__)


@dataclass
class LedgerState:
    """Persisted ledger layout.

    Attributes:
        officers: identity -> officer membership flag.
        frameworks: framework id -> framework record.
        records: entity -> current compliance record.
        audit_trail: entity -> {sequence: audit entry}.
        violations: entity -> {sequence: violation entry}.
        audit_count: Next audit sequence number.
        violation_count: Next violation sequence number.
        outbox: Events staged by the open transaction. Always empty once committed.
    """

    officers: dict[str, bool] = field(default_factory=dict)
    frameworks: dict[str, ComplianceFramework] = field(default_factory=dict)
    records: dict[str, ComplianceRecord] = field(default_factory=dict)
    audit_trail: dict[str, dict[int, AuditTrailEntry]] = field(default_factory=dict)
    violations: dict[str, dict[int, ViolationEntry]] = field(default_factory=dict)
    audit_count: int = 0
    violation_count: int = 0
    outbox: list[LedgerEvent] = field(default_factory=list)

    def stage(self) -> LedgerState:
        """Return a working copy safe to mutate without touching this state.

        Records and entries are frozen models, so copying the containers is
        enough to isolate the copy.
        """
        return LedgerState(
            officers=dict(self.officers),
            frameworks=dict(self.frameworks),
            records=dict(self.records),
            audit_trail={entity: dict(entries) for entity, entries in self.audit_trail.items()},
            violations={entity: dict(entries) for entity, entries in self.violations.items()},
            audit_count=self.audit_count,
            violation_count=self.violation_count,
        )


class LedgerStateStore:
    """Holds committed ledger state and runs all-or-nothing transactions.

    Args:
        event_store: Optional store that receives staged events on commit.
    """

    def __init__(self, event_store: LedgerEventStore | None = None) -> None:
        self._state = LedgerState()
        self._event_store = event_store
        self._in_transaction = False

    @property
    def state(self) -> LedgerState:
        """Return the committed state. Callers must treat it as read-only."""
        return self._state

    @contextmanager
    def transaction(self) -> Iterator[LedgerState]:
        """Yield a staged copy of the committed state and commit it on success.

        Yields:
            LedgerState: The staged working copy.

        Raises:
            RuntimeError: If a transaction is already open. Nested work must
                reuse the staged state of the outer transaction.
        """
        if self._in_transaction:
            raise RuntimeError("A ledger transaction is already open")

        staged = self._state.stage()
        self._in_transaction = True
        try:
            yield staged
        except Exception:
            logger.debug(
                "Ledger transaction rolled back",
                staged_events=len(staged.outbox),
            )
            raise
        else:
            events = staged.outbox
            staged.outbox = []
            self._state = staged
            if self._event_store is not None:
                for event in events:
                    self._event_store.append(event)
            logger.debug(
                "Ledger transaction committed",
                audit_count=staged.audit_count,
                violation_count=staged.violation_count,
                events=len(events),
            )
        finally:
            self._in_transaction = False
