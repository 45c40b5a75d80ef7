"""compliance-ledger: ledger-backed registry of entity compliance state.

Tracks regulatory compliance records per entity, gates writes behind an
owner/officer access model, and keeps an append-only audit trail and
violation ledger. Identity and height are supplied by the host through an
explicit CallContext on every call.
"""

from compliance_ledger.core.models import (
    AuditTrailEntry,
    CallContext,
    ComplianceFramework,
    ComplianceRecord,
    ComplianceStatus,
    RiskLevel,
    VerificationResult,
    ViolationEntry,
)
from compliance_ledger.core.registry import ComplianceRegistry, create_registry
from compliance_ledger.errors import ComplianceLedgerError, ErrorKind
from compliance_ledger.settings import Settings

__all__ = [
    "AuditTrailEntry",
    "CallContext",
    "ComplianceFramework",
    "ComplianceLedgerError",
    "ComplianceRecord",
    "ComplianceRegistry",
    "ComplianceStatus",
    "ErrorKind",
    "RiskLevel",
    "Settings",
    "VerificationResult",
    "ViolationEntry",
    "create_registry",
]
