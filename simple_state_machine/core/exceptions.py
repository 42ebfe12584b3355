"""Custom exceptions for the state machine engine."""

from __future__ import annotations

from typing import Any


class StateMachineException(Exception):
    """Base exception for the state machine engine."""

    pass


class ConfigurationError(StateMachineException):
    """Raised when configuration is invalid."""

    pass


class DefinitionError(StateMachineException):
    """Raised when an event declaration is malformed."""

    pass


class IllegalTransitionError(StateMachineException, ValueError):
    """Raised when an event has no declared target for the current state."""

    def __init__(self, event: str, state: Any) -> None:
        self.event = event
        self.state = state
        super().__init__(f"You cannot '{event}' when state is '{state}'")


class ValidationFailure(StateMachineException):
    """Raised by confirming events when the subject does not validate."""

    def __init__(self, subject: Any) -> None:
        self.subject = subject
        super().__init__(_describe_failure("Validation failed", subject))


class PersistenceFailure(StateMachineException):
    """Raised when the persistence layer rejects a confirmed write."""

    def __init__(self, subject: Any, reason: str | None = None) -> None:
        self.subject = subject
        self.reason = reason
        message = _describe_failure("Persistence failed", subject)
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


def _describe_failure(prefix: str, subject: Any) -> str:
    errors = getattr(subject, "errors", None)
    full_messages = getattr(errors, "full_messages", None)
    if callable(full_messages):
        messages = full_messages()
        if messages:
            return f"{prefix}: {', '.join(messages)}"
    return f"{prefix} for {type(subject).__name__}"
