"""Per-type registry of declared events and their transition tables."""

from __future__ import annotations

import logging
from typing import Any

from simple_state_machine.core.enums import split_event_name, state_key
from simple_state_machine.core.schemas import parse_declaration

logger = logging.getLogger(__name__)


class StateMachineDefinition:
    """Maps event names to transition tables (from-state -> to-state).

    Built once while a type is being declared and read by every instance
    afterwards. Redeclaring an (event, from-state) pair overwrites the
    earlier target, so an event can be extended across several
    declarations. Writes are not synchronized; finish declaring before
    firing events.
    """

    def __init__(self, owner: str | None = None) -> None:
        self.owner = owner
        self._events: dict[str, dict[str, str]] = {}

    def define_event(self, name: Any, transitions: Any) -> None:
        declaration = parse_declaration(name, transitions)
        table = self._events.setdefault(declaration.name, {})
        for from_state, to_state in declaration.transitions:
            previous = table.get(from_state)
            if previous is not None and previous != to_state:
                logger.debug(
                    "state_machine.definition.overwrite",
                    extra={
                        "event": "state_machine.definition.overwrite",
                        "owner": self.owner,
                        "state_event": declaration.name,
                        "from_state": from_state,
                        "previous_to_state": previous,
                        "to_state": to_state,
                    },
                )
            table[from_state] = to_state

    def lookup(self, event: Any, from_state: Any) -> str | None:
        """Return the declared target for ``event`` from ``from_state``, or None."""
        name, _ = split_event_name(state_key(event))
        table = self._events.get(name)
        if table is None:
            return None
        return table.get(state_key(from_state))

    @property
    def events(self) -> dict[str, dict[str, str]]:
        return {name: dict(table) for name, table in self._events.items()}

    def event_names(self) -> list[str]:
        return list(self._events)

    def has_event(self, event: Any) -> bool:
        name, _ = split_event_name(state_key(event))
        return name in self._events

    def states(self) -> list[str]:
        """Every state named by a declaration, in first-seen order."""
        seen: dict[str, None] = {}
        for table in self._events.values():
            for from_state, to_state in table.items():
                seen.setdefault(from_state)
                seen.setdefault(to_state)
        return list(seen)

    def events_from(self, state: Any) -> list[str]:
        key = state_key(state)
        return [name for name, table in self._events.items() if key in table]

    def copy(self, owner: str | None = None) -> "StateMachineDefinition":
        clone = StateMachineDefinition(owner=owner or self.owner)
        clone._events = self.events
        return clone

    def __repr__(self) -> str:
        return f"StateMachineDefinition(owner={self.owner!r}, events={self._events!r})"
