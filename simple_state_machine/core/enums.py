"""Canonical enum values for the state machine engine."""

from __future__ import annotations

import enum

CONFIRMING_SUFFIX = "!"


class EventForm(str, enum.Enum):
    BEST_EFFORT = "best_effort"
    CONFIRMING = "confirming"


def split_event_name(name: str) -> tuple[str, EventForm]:
    """Split a call-site event name into its base name and form."""
    text = str(name)
    if text.endswith(CONFIRMING_SUFFIX):
        return text[: -len(CONFIRMING_SUFFIX)], EventForm.CONFIRMING
    return text, EventForm.BEST_EFFORT


def state_key(value) -> str | None:
    """Normalize a state identifier to the string key stored in tables."""
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def call_site_name(name: str, form: EventForm) -> str:
    """Inverse of ``split_event_name``: the name as a caller writes it."""
    if form is EventForm.CONFIRMING:
        return f"{name}{CONFIRMING_SUFFIX}"
    return name
