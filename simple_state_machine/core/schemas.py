"""Pydantic schemas for strict event declaration validation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from simple_state_machine.core.enums import CONFIRMING_SUFFIX, state_key
from simple_state_machine.core.exceptions import DefinitionError


class EventDeclaration(BaseModel):
    name: str = Field(min_length=1)
    transitions: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: Any) -> Any:
        return state_key(value)

    @field_validator("name")
    @classmethod
    def name_has_no_confirming_suffix(cls, value: str) -> str:
        if value.endswith(CONFIRMING_SUFFIX):
            raise ValueError(f"event names may not end with '{CONFIRMING_SUFFIX}'")
        return value

    @field_validator("transitions", mode="before")
    @classmethod
    def normalize_transitions(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            value = list(value.items())
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return value
        pairs = []
        for pair in value:
            if isinstance(pair, (tuple, list)) and len(pair) == 2:
                pairs.append((state_key(pair[0]), state_key(pair[1])))
            else:
                pairs.append(pair)
        return pairs


def parse_declaration(name: Any, transitions: Any) -> EventDeclaration:
    """Validate an event declaration, raising DefinitionError when malformed."""
    try:
        return EventDeclaration.model_validate({"name": name, "transitions": transitions})
    except ValidationError as exc:
        raise DefinitionError(str(exc)) from exc
