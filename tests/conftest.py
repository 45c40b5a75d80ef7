"""Test fixtures for compliance-ledger.

Provides:
- owner_id / officer_id / outsider_id: fixed identities
- make_ctx: factory for CallContext values
- registry: a ComplianceRegistry with the owner initialized, one extra
  officer, and the SOC2 framework registered
"""

from collections.abc import Callable

import pytest

from compliance_ledger.core.models import CallContext
from compliance_ledger.core.registry import ComplianceRegistry
from compliance_ledger.observability import configure_logging

SOC2 = "SOC2"


@pytest.fixture(autouse=True, scope="session")
def _configure_logging() -> None:
    """Route structlog through the console renderer at DEBUG for the test run."""
    configure_logging("DEBUG", json_output=False)


@pytest.fixture()
def owner_id() -> str:
    """Return the fixed owner identity.

    Returns:
        The identity the test registry is deployed with.
    """
    return "owner-0001"


@pytest.fixture()
def officer_id() -> str:
    """Return an identity that is granted officer status by the registry fixture."""
    return "officer-0002"


@pytest.fixture()
def outsider_id() -> str:
    """Return an identity that never holds any privilege."""
    return "outsider-0003"


@pytest.fixture()
def make_ctx() -> Callable[[str, int], CallContext]:
    """Return a factory building CallContext values.

    Returns:
        Callable taking (caller, height) and returning a CallContext.
    """

    def _make(caller: str, height: int = 10) -> CallContext:
        return CallContext(caller=caller, height=height)

    return _make


@pytest.fixture()
def empty_registry(owner_id: str) -> ComplianceRegistry:
    """Create a registry that has not been initialized yet."""
    return ComplianceRegistry(owner=owner_id, source_service="compliance-ledger-test")


@pytest.fixture()
def registry(
    empty_registry: ComplianceRegistry,
    owner_id: str,
    officer_id: str,
    make_ctx: Callable[[str, int], CallContext],
) -> ComplianceRegistry:
    """Create an initialized registry with one officer and the SOC2 framework.

    The owner is initialized at height 1, the officer is added at height 1,
    and SOC2 (min score 70, validity 100) is registered at height 1.

    Returns:
        A ready-to-use ComplianceRegistry.
    """
    ctx = make_ctx(owner_id, 1)
    empty_registry.initialize(ctx)
    empty_registry.add_officer(ctx, officer_id)
    empty_registry.register_framework(ctx, SOC2, "SOC 2 Type II", 70, 100)
    return empty_registry
