"""Structured log payloads for transition events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from simple_state_machine.core.enums import EventForm, call_site_name, state_key


@dataclass(frozen=True)
class TransitionLogContext:
    """Where a transition happened: which subject, which event, which form."""

    entity_type: str
    event: str
    form: EventForm
    from_state: str | None
    to_state: str | None = None
    entity_id: str | None = None

    @classmethod
    def for_subject(
        cls,
        subject: Any,
        event: str,
        form: EventForm,
        to_state: str | None = None,
        from_state: str | None = None,
    ) -> TransitionLogContext:
        entity_id = getattr(subject, "id", None)
        return cls(
            entity_type=type(subject).__name__,
            event=event,
            form=form,
            from_state=from_state if from_state is not None else state_key(subject.state),
            to_state=to_state,
            entity_id=str(entity_id) if entity_id is not None else None,
        )


def build_log_event(message: str, context: TransitionLogContext, **fields: Any) -> dict[str, Any]:
    """Payload for ``extra=``; ``state_event`` is the event as the caller wrote it."""
    payload: dict[str, Any] = {
        "event": message,
        "entity_type": context.entity_type,
        "state_event": call_site_name(context.event, context.form),
        "form": context.form.value,
        "from_state": context.from_state,
        "to_state": context.to_state,
    }
    # Unsaved records have no id yet.
    if context.entity_id is not None:
        payload["entity_id"] = context.entity_id
    payload.update(fields)
    return payload
