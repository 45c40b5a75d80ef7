"""Tests for the ledger state adapter and the all-or-nothing call boundary.

Tests verify:
- Staged writes become visible only on commit
- Any exception discards staged tables, counters, and events
- Nested transactions are refused
- Failed service calls (including failed escalation) leave no partial state
"""

from collections.abc import Callable

import pytest

from compliance_ledger.adapters.ledger_state import LedgerState, LedgerStateStore
from compliance_ledger.core.models import (
    AuditTrailEntry,
    CallContext,
    ComplianceStatus,
)
from compliance_ledger.core.registry import ComplianceRegistry
from compliance_ledger.event_log.event_store import LedgerEventStore
from compliance_ledger.event_log.publisher import LedgerEventPublisher


def _audit_entry(score: int = 90) -> AuditTrailEntry:
    return AuditTrailEntry(
        timestamp=1,
        previous_status=0,
        new_status=ComplianceStatus.COMPLIANT,
        score=score,
        note="test",
        officer="officer-1",
    )


class TestLedgerState:
    """Tests for LedgerState staging."""

    def test_stage_isolates_nested_tables(self) -> None:
        state = LedgerState()
        state.audit_trail["entity-1"] = {0: _audit_entry()}
        state.audit_count = 1

        staged = state.stage()
        staged.audit_trail["entity-1"][1] = _audit_entry(50)
        staged.audit_trail["entity-2"] = {2: _audit_entry(10)}
        staged.officers["someone"] = True
        staged.audit_count = 3

        assert list(state.audit_trail["entity-1"]) == [0]
        assert "entity-2" not in state.audit_trail
        assert "someone" not in state.officers
        assert state.audit_count == 1

    def test_stage_starts_with_empty_outbox(self) -> None:
        assert LedgerState().stage().outbox == []


class TestLedgerStateStore:
    """Tests for LedgerStateStore transactions."""

    def test_commit_replaces_state(self) -> None:
        store = LedgerStateStore()
        with store.transaction() as state:
            state.officers["officer-1"] = True
            state.violation_count = 4

        assert store.state.officers == {"officer-1": True}
        assert store.state.violation_count == 4

    def test_exception_discards_staged_writes(self) -> None:
        store = LedgerStateStore()
        with pytest.raises(ValueError):
            with store.transaction() as state:
                state.officers["officer-1"] = True
                state.audit_count = 1
                raise ValueError("boom")

        assert store.state.officers == {}
        assert store.state.audit_count == 0

    def test_nested_transaction_is_refused(self) -> None:
        store = LedgerStateStore()
        with store.transaction():
            with pytest.raises(RuntimeError):
                with store.transaction():
                    pass

        with store.transaction() as state:
            state.officers["after"] = True
        assert store.state.officers == {"after": True}

    def test_events_reach_store_only_on_commit(self) -> None:
        events = LedgerEventStore()
        store = LedgerStateStore(event_store=events)
        publisher = LedgerEventPublisher(events, "test")
        ctx = CallContext(caller="owner", height=3)

        with pytest.raises(RuntimeError):
            with store.transaction() as state:
                publisher.stage(state, ctx, "OFFICER_ADDED", "officer-1")
                raise RuntimeError("abort")
        assert events.count() == 0

        with store.transaction() as state:
            publisher.stage(state, ctx, "OFFICER_ADDED", "officer-1")
            publisher.stage(state, ctx, "OFFICER_ADDED", "officer-2")
        assert [e.sequence for e in events.get_all_events()] == [0, 1]
        assert store.state.outbox == []

    def test_store_has_no_log_mutation_methods(self) -> None:
        store = LedgerStateStore()
        for name in ("update", "delete", "remove", "truncate"):
            assert not hasattr(store, name)


class TestCallAtomicity:
    """Failed operations must not leave partial writes behind."""

    def test_failed_escalation_rolls_back_violation(
        self,
        registry: ComplianceRegistry,
        officer_id: str,
        make_ctx: Callable[[str, int], CallContext],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        ctx = make_ctx(officer_id, 10)
        registry.update_compliance(ctx, "entity-1", ComplianceStatus.COMPLIANT, 90, "SOC2", 100)
        record_before = registry.get_compliance("entity-1")
        events_before = registry.events.count()

        def failing_update(*args: object, **kwargs: object) -> None:
            raise RuntimeError("escalation failed")

        monkeypatch.setattr(registry._compliance, "apply_update", failing_update)

        with pytest.raises(RuntimeError, match="escalation failed"):
            registry.record_violation(ctx, "entity-1", "data-breach", 5)

        assert registry.violation_count == 0
        assert registry.get_violations("entity-1") == []
        assert registry.get_compliance("entity-1") == record_before
        assert registry.audit_count == 1
        assert registry.events.count() == events_before

    def test_sequence_has_no_gap_after_failure(
        self,
        registry: ComplianceRegistry,
        officer_id: str,
        make_ctx: Callable[[str, int], CallContext],
    ) -> None:
        ctx = make_ctx(officer_id, 10)
        registry.update_compliance(ctx, "entity-1", ComplianceStatus.COMPLIANT, 90, "SOC2", 10)
        with pytest.raises(Exception):
            registry.update_compliance(ctx, "entity-1", ComplianceStatus.COMPLIANT, 900, "SOC2", 10)
        registry.update_compliance(ctx, "entity-2", ComplianceStatus.COMPLIANT, 90, "SOC2", 10)

        assert registry.audit_count == 2
        assert registry.get_audit_entry("entity-2", 1) is not None
