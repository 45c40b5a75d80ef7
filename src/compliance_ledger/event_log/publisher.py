"""Ledger event publisher.

Services call the publisher after every mutation. Events are staged on the
transaction's working state and reach the event store only when the
transaction commits, so a failed call never leaves an event behind.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from compliance_ledger.core.interfaces import IStagedState
from compliance_ledger.core.models import CallContext
from compliance_ledger.event_log.event_store import LedgerEventStore
from compliance_ledger.event_log.events import LedgerEvent


class LedgerEventPublisher:
    """Stages ledger events for publication on commit.

    Args:
        event_store: The append-only store that receives committed events.
        source_service: Service name recorded on every event.
    """

    def __init__(self, event_store: LedgerEventStore, source_service: str) -> None:
        self._store = event_store
        self._source_service = source_service

    def stage(
        self,
        state: IStagedState,
        ctx: CallContext,
        event_type: str,
        subject: str,
        payload: BaseModel | dict[str, Any] | None = None,
    ) -> LedgerEvent:
        """Build an event and stage it on the transaction's outbox.

        The sequence number continues the committed stream, offset by events
        already staged in the same transaction.

        Args:
            state: The staged transaction state.
            ctx: The call context of the triggering operation.
            event_type: One of the LedgerEventType literals.
            subject: Identifier of the record that changed.
            payload: The changed record, or a plain dict.

        Returns:
            The staged LedgerEvent.
        """
        if isinstance(payload, BaseModel):
            body = payload.model_dump(mode="json")
        else:
            body = dict(payload or {})

        event = LedgerEvent(
            sequence=self._store.count() + len(state.outbox),
            height=ctx.height,
            event_type=event_type,  # type: ignore[arg-type]
            subject=subject,
            actor=ctx.caller,
            source_service=self._source_service,
            payload=body,
        )
        state.outbox.append(event)
        return event
