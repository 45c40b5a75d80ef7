"""Ledger event schema.

Every committed mutation of the compliance ledger is captured as an immutable
LedgerEvent and appended to the event store. Events carry the post-change
state of the touched record as a plain JSON-compatible payload so downstream
indexers can follow the ledger without reading its tables.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

LedgerEventType = Literal[
    "OWNER_INITIALIZED",
    "OFFICER_ADDED",
    "OFFICER_REMOVED",
    "FRAMEWORK_REGISTERED",
    "COMPLIANCE_UPDATED",
    "VIOLATION_RECORDED",
]


class LedgerEvent(BaseModel):
    """Immutable record of one committed ledger mutation.

    Attributes:
        sequence: Position of the event in the ledger-wide event stream.
        height: Host height at which the mutation was committed.
        event_type: The nature of the mutation.
        subject: Identifier of the officer, framework, or entity that changed.
        actor: Identity of the caller that triggered the mutation.
        source_service: Name of the service that emitted the event.
        payload: JSON-compatible snapshot of the changed record.
    """

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(..., ge=0, description="Position in the ledger-wide event stream")
    height: int = Field(..., ge=0, description="Host height at commit time")
    event_type: LedgerEventType = Field(..., description="The nature of the mutation")
    subject: str = Field(..., description="Identifier of the record that changed")
    actor: str = Field(..., description="Identity of the caller that triggered the mutation")
    source_service: str = Field(..., description="Name of the service that emitted the event")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON-compatible snapshot of the changed record",
    )
