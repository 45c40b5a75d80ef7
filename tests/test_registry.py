"""Tests for settings, the registry factory, and error kinds."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from compliance_ledger import ComplianceRegistry, Settings, create_registry
from compliance_ledger.core.models import CallContext
from compliance_ledger.errors import (
    AlreadyExistsError,
    ComplianceLedgerError,
    ErrorKind,
    ExpiredError,
    InvalidScoreError,
    InvalidStatusError,
    NotFoundError,
    OwnerOnlyError,
    UnauthorizedError,
)
from compliance_ledger.observability import configure_logging


class TestSettings:
    def test_settings_read_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMPLIANCE_LEDGER_OWNER_ID", "env-owner")
        monkeypatch.setenv("COMPLIANCE_LEDGER_LOG_JSON", "false")

        settings = Settings()  # type: ignore[call-arg]

        assert settings.owner_id == "env-owner"
        assert settings.log_json is False
        assert settings.service_name == "compliance-ledger"

    def test_owner_id_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COMPLIANCE_LEDGER_OWNER_ID", raising=False)
        with pytest.raises(PydanticValidationError):
            Settings()  # type: ignore[call-arg]


class TestCreateRegistry:
    def test_create_registry_uses_settings_owner(self) -> None:
        registry = create_registry(Settings(owner_id="deployer", log_level="DEBUG", log_json=False))

        assert isinstance(registry, ComplianceRegistry)
        assert registry.owner == "deployer"

        registry.initialize(CallContext(caller="deployer", height=0))
        assert registry.is_officer("deployer")
        assert registry.events.get_all_events()[0].source_service == "compliance-ledger"

    def test_configure_logging_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging("CHATTY")


class TestCallContext:
    def test_negative_height_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            CallContext(caller="someone", height=-1)

    def test_empty_caller_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            CallContext(caller="", height=0)


@pytest.mark.parametrize(
    ("error_cls", "kind"),
    [
        (OwnerOnlyError, ErrorKind.OWNER_ONLY),
        (NotFoundError, ErrorKind.NOT_FOUND),
        (AlreadyExistsError, ErrorKind.ALREADY_EXISTS),
        (UnauthorizedError, ErrorKind.UNAUTHORIZED),
        (InvalidStatusError, ErrorKind.INVALID_STATUS),
        (InvalidScoreError, ErrorKind.INVALID_SCORE),
        (ExpiredError, ErrorKind.EXPIRED),
    ],
)
def test_error_kinds(error_cls: type[ComplianceLedgerError], kind: ErrorKind) -> None:
    error = error_cls("failure")
    assert isinstance(error, ComplianceLedgerError)
    assert error.kind is kind
    assert str(error) == "failure"
