"""Capabilities a subject must expose to be driven by an executor."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransitionPort(Protocol):
    state: Any


@runtime_checkable
class ErrorCounter(Protocol):
    def size(self) -> int: ...


@runtime_checkable
class ValidatingSubject(TransitionPort, Protocol):
    """Subject contract required by ValidatingTransitionExecutor."""

    @property
    def errors(self) -> ErrorCounter: ...

    def is_invalid(self) -> bool: ...

    def save(self) -> bool: ...

    def save_or_fail(self) -> None: ...
