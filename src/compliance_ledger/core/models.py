"""Domain models for the compliance ledger.

All records are immutable pydantic models. A record is never edited in place:
entity compliance records are replaced wholesale on every update, and audit
and violation entries are written once and never touched again.

Models:
- CallContext         : caller identity + host height threaded through every call
- ComplianceFramework : named compliance standard with minimum score and validity period
- ComplianceRecord    : current compliance state of one entity
- AuditTrailEntry     : one status transition, keyed by (entity, sequence)
- ViolationEntry      : one infraction, keyed by (entity, sequence)
- VerificationResult  : outcome of a multi-factor compliance verification
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

# Status code stored as previous_status when an entity had no record yet
NO_PREVIOUS_STATUS = 0

# Framework id written by violation escalation
VIOLATION_FRAMEWORK_ID = "VIOLATION"


class ComplianceStatus(IntEnum):
    """Compliance status codes. Zero is reserved for "no status"."""

    COMPLIANT = 1
    NON_COMPLIANT = 2
    PENDING_REVIEW = 3
    SUSPENDED = 4


class RiskLevel(IntEnum):
    """Risk tier derived from the compliance score. Ordered Low < Medium < High."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class CallContext(BaseModel):
    """Host-supplied context for a single operation.

    Attributes:
        caller: Identity of the caller, as authenticated by the host.
        height: Host-provided monotonically increasing logical clock.
    """

    model_config = ConfigDict(frozen=True)

    caller: str = Field(..., min_length=1, description="Caller identity supplied by the host")
    height: int = Field(..., ge=0, description="Current host height")


class ComplianceFramework(BaseModel):
    """A named compliance standard.

    Attributes:
        name: Display name of the framework.
        min_score: Minimum acceptable compliance score (0-100).
        validity_period: Validity duration in height units.
        active: Whether the framework is active. Always True on registration.
        created_at: Height at which the framework was (re-)registered.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    min_score: int = Field(..., ge=0, le=100)
    validity_period: int
    active: bool = True
    created_at: int


class ComplianceRecord(BaseModel):
    """Current compliance state of one entity.

    Attributes:
        status: Current compliance status.
        score: Compliance score (0-100).
        last_check: Height of the update that wrote this record.
        expiry: last_check plus the validity period supplied with the update.
        framework_id: Framework the entity was assessed against.
        risk_level: Risk tier derived from score.
        verified_by: Officer identity that wrote this record.
    """

    model_config = ConfigDict(frozen=True)

    status: ComplianceStatus
    score: int = Field(..., ge=0, le=100)
    last_check: int
    expiry: int
    framework_id: str
    risk_level: RiskLevel
    verified_by: str


class AuditTrailEntry(BaseModel):
    """Immutable record of one compliance status transition.

    Attributes:
        timestamp: Height at which the transition was recorded.
        previous_status: Prior status code, or 0 if the entity had no record.
        new_status: Status code written by the transition.
        score: Score written by the transition.
        note: Free-text note.
        officer: Officer identity that performed the transition.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    previous_status: int
    new_status: ComplianceStatus
    score: int
    note: str
    officer: str


class ViolationEntry(BaseModel):
    """Immutable record of one compliance infraction.

    Attributes:
        violation_type: Free-form violation label.
        severity: Severity from 1 (minor) to 5 (critical).
        timestamp: Height at which the violation was recorded.
        resolved: Always False at creation.
        resolution_date: Height of resolution, None while unresolved.
    """

    model_config = ConfigDict(frozen=True)

    violation_type: str
    severity: int = Field(..., ge=1, le=5)
    timestamp: int
    resolved: bool = False
    resolution_date: int | None = None


class VerificationResult(BaseModel):
    """Outcome of a comprehensive compliance verification.

    ``is_officer`` and ``records_exist`` are preconditions: a result is only
    produced when both hold. ``compliant`` is the conjunction of the six
    remaining checks.
    """

    model_config = ConfigDict(frozen=True)

    is_officer: bool
    records_exist: bool
    meets_required_score: bool
    meets_framework_score: bool
    not_expired: bool
    status_compliant: bool
    framework_matches: bool
    risk_acceptable: bool
    compliant: bool
