"""Core business logic services for the compliance ledger.

Six service classes:
- AccessControlService: Owner identity and officer set; guards every mutation
- FrameworkService: Compliance framework registration and lookup
- AuditTrailService: Append-only audit trail write and query
- ComplianceService: Entity compliance records: the single record mutation path
- ViolationService: Append-only violation ledger with severity escalation
- VerificationService: Multi-factor, read-only compliance verification

Services contain no storage code. Every mutating operation opens exactly one
transaction on the injected store; nested work (audit append, violation
escalation) runs against the staged state of that transaction so the whole
call commits or fails as a unit. Events are staged through the publisher and
reach the event log only on commit.
"""

from __future__ import annotations

from compliance_ledger.core import rules
from compliance_ledger.core.interfaces import ILedgerStore, IStagedState
from compliance_ledger.core.models import (
    NO_PREVIOUS_STATUS,
    VIOLATION_FRAMEWORK_ID,
    AuditTrailEntry,
    CallContext,
    ComplianceFramework,
    ComplianceRecord,
    ComplianceStatus,
    RiskLevel,
    VerificationResult,
    ViolationEntry,
)
from compliance_ledger.errors import (
    InvalidScoreError,
    InvalidStatusError,
    NotFoundError,
    OwnerOnlyError,
    UnauthorizedError,
)
from compliance_ledger.event_log.publisher import LedgerEventPublisher
from compliance_ledger.observability import get_logger

logger = get_logger(__name__)

DEFAULT_UPDATE_NOTE = "Compliance status updated"

# Violations at or above this severity force the entity non-compliant
ESCALATION_SEVERITY = 4


class AccessControlService:
    """Owner identity and officer set management.

    The owner is fixed at construction. Owner privilege for owner-gated
    operations never depends on officer membership; officer membership only
    governs compliance-mutating operations.

    Args:
        store: Ledger store implementing ILedgerStore.
        owner: The fixed owner identity.
        publisher: Publisher for ledger events.
    """

    def __init__(self, store: ILedgerStore, owner: str, publisher: LedgerEventPublisher) -> None:
        self._store = store
        self._owner = owner
        self._publisher = publisher

    @property
    def owner(self) -> str:
        """The fixed owner identity."""
        return self._owner

    def require_owner(self, ctx: CallContext, operation: str) -> None:
        """Raise OwnerOnlyError unless the caller is the owner.

        Args:
            ctx: The call context.
            operation: Operation name, for logging.

        Raises:
            OwnerOnlyError: If ctx.caller is not the owner.
        """
        if ctx.caller != self._owner:
            logger.warning("Owner-only operation rejected", caller=ctx.caller, operation=operation)
            raise OwnerOnlyError(f"'{operation}' may only be called by the owner")

    def require_officer(
        self,
        ctx: CallContext,
        operation: str,
        state: IStagedState | None = None,
    ) -> None:
        """Raise UnauthorizedError unless the caller is an officer.

        Args:
            ctx: The call context.
            operation: Operation name, for logging.
            state: State to check membership against. Defaults to committed state.

        Raises:
            UnauthorizedError: If ctx.caller is not an officer.
        """
        officers = (state or self._store.state).officers
        if not officers.get(ctx.caller, False):
            logger.warning("Officer-only operation rejected", caller=ctx.caller, operation=operation)
            raise UnauthorizedError(f"'{operation}' requires compliance officer status")

    def initialize(self, ctx: CallContext) -> None:
        """Grant the owner officer status. Repeated calls re-assert membership.

        Raises:
            OwnerOnlyError: If the caller is not the owner.
        """
        self.require_owner(ctx, "initialize")
        with self._store.transaction() as state:
            state.officers[self._owner] = True
            self._publisher.stage(state, ctx, "OWNER_INITIALIZED", self._owner, {"officer": True})
        logger.info("Compliance ledger initialized", owner=self._owner, height=ctx.height)

    def add_officer(self, ctx: CallContext, identity: str) -> None:
        """Grant officer status. No-op if the identity is already an officer.

        Raises:
            OwnerOnlyError: If the caller is not the owner.
        """
        self.require_owner(ctx, "add_officer")
        if self.is_officer(identity):
            logger.debug("Officer already registered", officer=identity)
            return
        with self._store.transaction() as state:
            state.officers[identity] = True
            self._publisher.stage(state, ctx, "OFFICER_ADDED", identity, {"officer": True})
        logger.info("Officer added", officer=identity, height=ctx.height)

    def remove_officer(self, ctx: CallContext, identity: str) -> None:
        """Revoke officer status. No-op if the identity is not an officer.

        Raises:
            OwnerOnlyError: If the caller is not the owner.
        """
        self.require_owner(ctx, "remove_officer")
        if not self.is_officer(identity):
            logger.debug("Officer not registered: nothing to remove", officer=identity)
            return
        with self._store.transaction() as state:
            state.officers[identity] = False
            self._publisher.stage(state, ctx, "OFFICER_REMOVED", identity, {"officer": False})
        logger.info("Officer removed", officer=identity, height=ctx.height)

    def is_officer(self, identity: str) -> bool:
        """Return True if identity currently holds officer status."""
        return self._store.state.officers.get(identity, False)

    def list_officers(self) -> list[str]:
        """Return all current officers, sorted."""
        return sorted(identity for identity, flag in self._store.state.officers.items() if flag)


class FrameworkService:
    """Compliance framework registry.

    Frameworks are keyed by a short identifier. Registering an existing id
    replaces the stored framework in full; frameworks are never deleted.

    Args:
        store: Ledger store implementing ILedgerStore.
        access: AccessControlService used to gate registration.
        publisher: Publisher for ledger events.
    """

    def __init__(
        self,
        store: ILedgerStore,
        access: AccessControlService,
        publisher: LedgerEventPublisher,
    ) -> None:
        self._store = store
        self._access = access
        self._publisher = publisher

    def register_framework(
        self,
        ctx: CallContext,
        framework_id: str,
        name: str,
        min_score: int,
        validity_period: int,
    ) -> ComplianceFramework:
        """Register or overwrite a compliance framework.

        Args:
            ctx: The call context.
            framework_id: Short framework identifier.
            name: Display name.
            min_score: Minimum acceptable score (0-100).
            validity_period: Validity duration in height units.

        Returns:
            The stored ComplianceFramework.

        Raises:
            OwnerOnlyError: If the caller is not the owner.
            InvalidScoreError: If min_score is outside [0, 100].
        """
        self._access.require_owner(ctx, "register_framework")
        if not rules.is_valid_score(min_score):
            raise InvalidScoreError(f"Framework minimum score {min_score} is outside [0, 100]")

        framework = ComplianceFramework(
            name=name,
            min_score=min_score,
            validity_period=validity_period,
            active=True,
            created_at=ctx.height,
        )

        with self._store.transaction() as state:
            replaced = framework_id in state.frameworks
            state.frameworks[framework_id] = framework
            self._publisher.stage(state, ctx, "FRAMEWORK_REGISTERED", framework_id, framework)

        logger.info(
            "Framework registered",
            framework_id=framework_id,
            min_score=min_score,
            validity_period=validity_period,
            replaced=replaced,
        )
        return framework

    def get_framework(self, framework_id: str) -> ComplianceFramework | None:
        """Return the framework, or None if it is not registered."""
        return self._store.state.frameworks.get(framework_id)

    def list_frameworks(self) -> dict[str, ComplianceFramework]:
        """Return a copy of every registered framework keyed by id."""
        return dict(self._store.state.frameworks)


class AuditTrailService:
    """Append-only audit trail.

    Entries are keyed by (entity, sequence). The sequence counter is shared
    across all entities. There is no update or delete path.

    Args:
        store: Ledger store implementing ILedgerStore.
    """

    def __init__(self, store: ILedgerStore) -> None:
        self._store = store

    def append(
        self,
        state: IStagedState,
        ctx: CallContext,
        entity: str,
        previous_status: int,
        new_status: ComplianceStatus,
        score: int,
        note: str,
    ) -> int:
        """Append an entry to the staged audit trail and advance the counter.

        Returns:
            The sequence number of the new entry.
        """
        sequence = state.audit_count
        state.audit_trail.setdefault(entity, {})[sequence] = AuditTrailEntry(
            timestamp=ctx.height,
            previous_status=previous_status,
            new_status=new_status,
            score=score,
            note=note,
            officer=ctx.caller,
        )
        state.audit_count = sequence + 1
        return sequence

    def get_entry(self, entity: str, sequence: int) -> AuditTrailEntry | None:
        """Return the audit entry for (entity, sequence), or None."""
        return self._store.state.audit_trail.get(entity, {}).get(sequence)

    def get_trail(self, entity: str) -> list[tuple[int, AuditTrailEntry]]:
        """Return (sequence, entry) pairs for one entity in sequence order."""
        return sorted(self._store.state.audit_trail.get(entity, {}).items())

    @property
    def count(self) -> int:
        """The next audit sequence number, equal to the number of entries written."""
        return self._store.state.audit_count


class ComplianceService:
    """Entity compliance records.

    ``apply_update`` is the single mutation point for records. Direct updates
    and violation escalation both go through it.

    Args:
        store: Ledger store implementing ILedgerStore.
        access: AccessControlService used to gate updates.
        audit: AuditTrailService that records every transition.
        publisher: Publisher for ledger events.
    """

    def __init__(
        self,
        store: ILedgerStore,
        access: AccessControlService,
        audit: AuditTrailService,
        publisher: LedgerEventPublisher,
    ) -> None:
        self._store = store
        self._access = access
        self._audit = audit
        self._publisher = publisher

    def update_compliance(
        self,
        ctx: CallContext,
        entity: str,
        status: int,
        score: int,
        framework_id: str,
        validity_period: int,
        note: str = DEFAULT_UPDATE_NOTE,
    ) -> ComplianceRecord:
        """Write a new compliance record for an entity.

        Args:
            ctx: The call context.
            entity: Entity identifier.
            status: Compliance status code.
            score: Compliance score (0-100).
            framework_id: Framework the entity was assessed against.
            validity_period: Height units until the record expires.
            note: Free-text note for the audit trail.

        Returns:
            The new ComplianceRecord.

        Raises:
            UnauthorizedError: If the caller is not an officer.
            InvalidStatusError: If status is not a valid status code.
            InvalidScoreError: If score is outside [0, 100].
        """
        with self._store.transaction() as state:
            return self.apply_update(
                state, ctx, entity, status, score, framework_id, validity_period, note
            )

    def apply_update(
        self,
        state: IStagedState,
        ctx: CallContext,
        entity: str,
        status: int,
        score: int,
        framework_id: str,
        validity_period: int,
        note: str = DEFAULT_UPDATE_NOTE,
    ) -> ComplianceRecord:
        """Validate and apply a compliance update to staged state.

        Appends the audit entry before overwriting the record. The caller owns
        the transaction.
        """
        self._access.require_officer(ctx, "update_compliance", state)
        if not rules.is_valid_status(status):
            raise InvalidStatusError(f"Status code {status!r} is not a valid compliance status")
        if not rules.is_valid_score(score):
            raise InvalidScoreError(f"Compliance score {score} is outside [0, 100]")

        new_status = ComplianceStatus(status)
        previous = state.records.get(entity)
        previous_status = int(previous.status) if previous is not None else NO_PREVIOUS_STATUS

        sequence = self._audit.append(
            state, ctx, entity, previous_status, new_status, score, note
        )

        record = ComplianceRecord(
            status=new_status,
            score=score,
            last_check=ctx.height,
            expiry=ctx.height + validity_period,
            framework_id=framework_id,
            risk_level=rules.derive_risk_level(score),
            verified_by=ctx.caller,
        )
        state.records[entity] = record

        self._publisher.stage(
            state,
            ctx,
            "COMPLIANCE_UPDATED",
            entity,
            {**record.model_dump(mode="json"), "audit_sequence": sequence},
        )

        logger.info(
            "Compliance record updated",
            entity=entity,
            previous_status=previous_status,
            status=new_status.name,
            score=score,
            risk_level=record.risk_level.name,
            expiry=record.expiry,
            audit_sequence=sequence,
            officer=ctx.caller,
        )
        return record

    def is_compliant(self, entity: str, height: int) -> bool:
        """Return True iff a record exists, is Compliant, and has not expired at height."""
        record = self._store.state.records.get(entity)
        if record is None:
            return False
        return record.status == ComplianceStatus.COMPLIANT and not rules.is_expired(
            record.expiry, height
        )

    def get_compliance(self, entity: str) -> ComplianceRecord | None:
        """Return the entity's current record, or None."""
        return self._store.state.records.get(entity)


class ViolationService:
    """Append-only violation ledger.

    Violations of severity 4 or 5 escalate through the compliance update path
    within the same transaction, forcing the entity non-compliant with a
    score of zero and an already-elapsed compliance window.

    Args:
        store: Ledger store implementing ILedgerStore.
        access: AccessControlService used to gate recording.
        compliance: ComplianceService used for escalation.
        publisher: Publisher for ledger events.
    """

    def __init__(
        self,
        store: ILedgerStore,
        access: AccessControlService,
        compliance: ComplianceService,
        publisher: LedgerEventPublisher,
    ) -> None:
        self._store = store
        self._access = access
        self._compliance = compliance
        self._publisher = publisher

    def record_violation(
        self,
        ctx: CallContext,
        entity: str,
        violation_type: str,
        severity: int,
    ) -> int:
        """Record a violation and escalate critical ones.

        Args:
            ctx: The call context.
            entity: Entity identifier.
            violation_type: Violation label.
            severity: Severity from 1 to 5.

        Returns:
            The sequence number of the new violation entry.

        Raises:
            UnauthorizedError: If the caller is not an officer.
            InvalidStatusError: If severity is outside [1, 5].
        """
        self._access.require_officer(ctx, "record_violation")
        if not rules.is_valid_severity(severity):
            raise InvalidStatusError(f"Violation severity {severity!r} is outside [1, 5]")

        with self._store.transaction() as state:
            sequence = state.violation_count
            entry = ViolationEntry(
                violation_type=violation_type,
                severity=severity,
                timestamp=ctx.height,
            )
            state.violations.setdefault(entity, {})[sequence] = entry
            state.violation_count = sequence + 1
            self._publisher.stage(
                state,
                ctx,
                "VIOLATION_RECORDED",
                entity,
                {**entry.model_dump(mode="json"), "violation_sequence": sequence},
            )

            logger.info(
                "Violation recorded",
                entity=entity,
                violation_type=violation_type,
                severity=severity,
                violation_sequence=sequence,
                officer=ctx.caller,
            )

            if severity >= ESCALATION_SEVERITY:
                logger.warning(
                    "Critical violation: forcing entity non-compliant",
                    entity=entity,
                    severity=severity,
                )
                self._compliance.apply_update(
                    state,
                    ctx,
                    entity,
                    ComplianceStatus.NON_COMPLIANT,
                    0,
                    VIOLATION_FRAMEWORK_ID,
                    0,
                    note=f"Critical violation: {violation_type}",
                )

        return sequence

    def get_violation(self, entity: str, sequence: int) -> ViolationEntry | None:
        """Return the violation for (entity, sequence), or None."""
        return self._store.state.violations.get(entity, {}).get(sequence)

    def get_violations(self, entity: str) -> list[tuple[int, ViolationEntry]]:
        """Return (sequence, entry) pairs for one entity in sequence order."""
        return sorted(self._store.state.violations.get(entity, {}).items())

    @property
    def count(self) -> int:
        """The next violation sequence number, equal to the number of entries written."""
        return self._store.state.violation_count


class VerificationService:
    """Multi-factor compliance verification. Reads committed state only.

    Args:
        store: Ledger store implementing ILedgerStore.
        access: AccessControlService used to gate verification.
    """

    def __init__(self, store: ILedgerStore, access: AccessControlService) -> None:
        self._store = store
        self._access = access

    def verify_comprehensive(
        self,
        ctx: CallContext,
        entity: str,
        framework_id: str,
        required_min_score: int,
    ) -> VerificationResult:
        """Evaluate an entity's stored record against a framework and a required score.

        Args:
            ctx: The call context. ctx.height is the expiry reference.
            entity: Entity identifier.
            framework_id: Framework the record must match.
            required_min_score: Caller-supplied minimum score.

        Returns:
            VerificationResult with every check and the combined verdict.

        Raises:
            UnauthorizedError: If the caller is not an officer.
            NotFoundError: If the entity record or the framework does not exist.
        """
        self._access.require_officer(ctx, "verify_comprehensive")

        state = self._store.state
        record = state.records.get(entity)
        framework = state.frameworks.get(framework_id)
        if record is None or framework is None:
            missing = "entity record" if record is None else "framework"
            raise NotFoundError(
                f"Cannot verify '{entity}' against '{framework_id}': {missing} not found"
            )

        meets_required_score = record.score >= required_min_score
        meets_framework_score = record.score >= framework.min_score
        not_expired = not rules.is_expired(record.expiry, ctx.height)
        status_compliant = record.status == ComplianceStatus.COMPLIANT
        framework_matches = record.framework_id == framework_id
        risk_acceptable = record.risk_level <= RiskLevel.MEDIUM

        compliant = all(
            (
                meets_required_score,
                meets_framework_score,
                not_expired,
                status_compliant,
                framework_matches,
                risk_acceptable,
            )
        )

        logger.debug(
            "Comprehensive verification evaluated",
            entity=entity,
            framework_id=framework_id,
            compliant=compliant,
        )

        return VerificationResult(
            is_officer=True,
            records_exist=True,
            meets_required_score=meets_required_score,
            meets_framework_score=meets_framework_score,
            not_expired=not_expired,
            status_compliant=status_compliant,
            framework_matches=framework_matches,
            risk_acceptable=risk_acceptable,
            compliant=compliant,
        )
