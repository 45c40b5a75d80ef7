"""Validation rules: pure functions with no dependencies on ledger state."""

from compliance_ledger.core.models import ComplianceStatus, RiskLevel

MIN_SCORE = 0
MAX_SCORE = 100
MIN_SEVERITY = 1
MAX_SEVERITY = 5

# Score thresholds for risk derivation
LOW_RISK_THRESHOLD = 80
MEDIUM_RISK_THRESHOLD = 50

_VALID_STATUS_CODES = frozenset(int(status) for status in ComplianceStatus)


def is_valid_score(score: int) -> bool:
    """Return True if score lies in [0, 100]."""
    return MIN_SCORE <= score <= MAX_SCORE


def is_valid_status(status: int) -> bool:
    """Return True if status is one of the four compliance status codes."""
    return status in _VALID_STATUS_CODES


def is_valid_severity(severity: int) -> bool:
    """Return True if severity lies in [1, 5]."""
    return MIN_SEVERITY <= severity <= MAX_SEVERITY


def is_expired(expiry: int, height: int) -> bool:
    """Return True once height has passed expiry. The expiry height itself is still valid."""
    return height > expiry


def derive_risk_level(score: int) -> RiskLevel:
    """Derive the risk tier from a compliance score.

    Args:
        score: Compliance score (0-100).

    Returns:
        LOW for score >= 80, MEDIUM for 50 <= score < 80, HIGH otherwise.
    """
    if score >= LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH
