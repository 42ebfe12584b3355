"""simple-state-machine - declarative event-driven state machines for domain entities."""
from __future__ import annotations

from simple_state_machine.core.enums import EventForm
from simple_state_machine.core.exceptions import (
    ConfigurationError,
    DefinitionError,
    IllegalTransitionError,
    PersistenceFailure,
    StateMachineException,
    ValidationFailure,
)
from simple_state_machine.machine import (
    StateMachineDefinition,
    StateMachineMixin,
    TransitionExecutor,
    ValidatingTransitionExecutor,
    event_handler,
)
from simple_state_machine.validation import ErrorCollection

__all__ = [
    "ConfigurationError",
    "DefinitionError",
    "ErrorCollection",
    "EventForm",
    "IllegalTransitionError",
    "PersistenceFailure",
    "StateMachineDefinition",
    "StateMachineException",
    "StateMachineMixin",
    "TransitionExecutor",
    "ValidatingTransitionExecutor",
    "ValidationFailure",
    "event_handler",
]
