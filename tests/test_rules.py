"""Tests for the pure validation rules."""

import pytest

from compliance_ledger.core.models import ComplianceStatus, RiskLevel
from compliance_ledger.core.rules import (
    derive_risk_level,
    is_expired,
    is_valid_score,
    is_valid_severity,
    is_valid_status,
)


@pytest.mark.parametrize("score", [-100, -1, 0, 1, 50, 99, 100, 101, 1000])
def test_is_valid_score_matches_closed_range(score: int) -> None:
    assert is_valid_score(score) == (0 <= score <= 100)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (100, RiskLevel.LOW),
        (80, RiskLevel.LOW),
        (79, RiskLevel.MEDIUM),
        (50, RiskLevel.MEDIUM),
        (49, RiskLevel.HIGH),
        (0, RiskLevel.HIGH),
    ],
)
def test_derive_risk_level_boundaries(score: int, expected: RiskLevel) -> None:
    assert derive_risk_level(score) is expected


def test_risk_levels_are_ordered() -> None:
    assert RiskLevel.LOW < RiskLevel.MEDIUM < RiskLevel.HIGH


def test_is_valid_status_accepts_the_four_codes() -> None:
    for status in ComplianceStatus:
        assert is_valid_status(int(status))
        assert is_valid_status(status)


@pytest.mark.parametrize("status", [0, 5, -1, 99])
def test_is_valid_status_rejects_unknown_codes(status: int) -> None:
    assert not is_valid_status(status)


@pytest.mark.parametrize(("severity", "expected"), [(0, False), (1, True), (3, True), (5, True), (6, False)])
def test_is_valid_severity(severity: int, expected: bool) -> None:
    assert is_valid_severity(severity) is expected


def test_is_expired_treats_expiry_height_as_still_valid() -> None:
    assert not is_expired(expiry=110, height=109)
    assert not is_expired(expiry=110, height=110)
    assert is_expired(expiry=110, height=111)
