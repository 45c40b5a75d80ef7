"""ComplianceRegistry: the operation surface of the compliance ledger.

Wires one LedgerStateStore, one LedgerEventStore, and the six services
together, and exposes every ledger operation as a method taking an explicit
CallContext. The host (ledger runtime, API layer, test) builds the context
from its authenticated caller and current height.
"""

from __future__ import annotations

from compliance_ledger.adapters.ledger_state import LedgerStateStore
from compliance_ledger.core.models import (
    AuditTrailEntry,
    CallContext,
    ComplianceFramework,
    ComplianceRecord,
    VerificationResult,
    ViolationEntry,
)
from compliance_ledger.core.services import (
    DEFAULT_UPDATE_NOTE,
    AccessControlService,
    AuditTrailService,
    ComplianceService,
    FrameworkService,
    VerificationService,
    ViolationService,
)
from compliance_ledger.event_log.event_store import LedgerEventStore
from compliance_ledger.event_log.publisher import LedgerEventPublisher
from compliance_ledger.observability import configure_logging, get_logger
from compliance_ledger.settings import Settings

logger = get_logger(__name__)


class ComplianceRegistry:
    """Ledger-backed compliance registry.

    Args:
        owner: The fixed owner identity.
        source_service: Service name recorded on emitted ledger events.
    """

    def __init__(self, owner: str, source_service: str = "compliance-ledger") -> None:
        self.events = LedgerEventStore()
        self._store = LedgerStateStore(event_store=self.events)
        publisher = LedgerEventPublisher(self.events, source_service)

        self._access = AccessControlService(self._store, owner, publisher)
        self._frameworks = FrameworkService(self._store, self._access, publisher)
        self._audit = AuditTrailService(self._store)
        self._compliance = ComplianceService(self._store, self._access, self._audit, publisher)
        self._violations = ViolationService(
            self._store, self._access, self._compliance, publisher
        )
        self._verification = VerificationService(self._store, self._access)

    # ------------------------------------------------------------------
    # Access control
    # ------------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._access.owner

    def initialize(self, ctx: CallContext) -> None:
        self._access.initialize(ctx)

    def add_officer(self, ctx: CallContext, identity: str) -> None:
        self._access.add_officer(ctx, identity)

    def remove_officer(self, ctx: CallContext, identity: str) -> None:
        self._access.remove_officer(ctx, identity)

    def is_officer(self, identity: str) -> bool:
        return self._access.is_officer(identity)

    def list_officers(self) -> list[str]:
        return self._access.list_officers()

    # ------------------------------------------------------------------
    # Framework registry
    # ------------------------------------------------------------------

    def register_framework(
        self,
        ctx: CallContext,
        framework_id: str,
        name: str,
        min_score: int,
        validity_period: int,
    ) -> ComplianceFramework:
        return self._frameworks.register_framework(
            ctx, framework_id, name, min_score, validity_period
        )

    def get_framework(self, framework_id: str) -> ComplianceFramework | None:
        return self._frameworks.get_framework(framework_id)

    def list_frameworks(self) -> dict[str, ComplianceFramework]:
        return self._frameworks.list_frameworks()

    # ------------------------------------------------------------------
    # Entity compliance records and audit trail
    # ------------------------------------------------------------------

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
        return self._compliance.update_compliance(
            ctx, entity, status, score, framework_id, validity_period, note
        )

    def is_compliant(self, entity: str, height: int) -> bool:
        return self._compliance.is_compliant(entity, height)

    def get_compliance(self, entity: str) -> ComplianceRecord | None:
        return self._compliance.get_compliance(entity)

    def get_audit_entry(self, entity: str, sequence: int) -> AuditTrailEntry | None:
        return self._audit.get_entry(entity, sequence)

    def get_audit_trail(self, entity: str) -> list[tuple[int, AuditTrailEntry]]:
        return self._audit.get_trail(entity)

    @property
    def audit_count(self) -> int:
        return self._audit.count

    # ------------------------------------------------------------------
    # Violation ledger
    # ------------------------------------------------------------------

    def record_violation(
        self,
        ctx: CallContext,
        entity: str,
        violation_type: str,
        severity: int,
    ) -> int:
        return self._violations.record_violation(ctx, entity, violation_type, severity)

    def get_violation(self, entity: str, sequence: int) -> ViolationEntry | None:
        return self._violations.get_violation(entity, sequence)

    def get_violations(self, entity: str) -> list[tuple[int, ViolationEntry]]:
        return self._violations.get_violations(entity)

    @property
    def violation_count(self) -> int:
        return self._violations.count

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_comprehensive(
        self,
        ctx: CallContext,
        entity: str,
        framework_id: str,
        required_min_score: int,
    ) -> VerificationResult:
        return self._verification.verify_comprehensive(
            ctx, entity, framework_id, required_min_score
        )


def create_registry(settings: Settings | None = None) -> ComplianceRegistry:
    """Create a ComplianceRegistry from settings.

    Configures structured logging and builds an empty registry owned by
    ``settings.owner_id``. The owner must still call ``initialize`` to
    become an officer.

    Args:
        settings: Settings instance. Loaded from the environment if None.

    Returns:
        A ready-to-use ComplianceRegistry.
    """
    settings = settings or Settings()  # type: ignore[call-arg]
    configure_logging(settings.log_level, settings.log_json)
    logger.info(
        "Creating compliance registry",
        service=settings.service_name,
        owner=settings.owner_id,
    )
    return ComplianceRegistry(owner=settings.owner_id, source_service=settings.service_name)
