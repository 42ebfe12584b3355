"""Transition executors: lookup, guard, run the action, commit the state."""

from __future__ import annotations

import logging
from typing import Any, Callable

from simple_state_machine.core.config import get_config
from simple_state_machine.core.enums import EventForm, call_site_name, split_event_name, state_key
from simple_state_machine.core.exceptions import IllegalTransitionError, ValidationFailure
from simple_state_machine.core.logging import TransitionLogContext, build_log_event
from simple_state_machine.machine.definition import StateMachineDefinition

logger = logging.getLogger(__name__)


class TransitionExecutor:
    """Runs an action and commits the declared target state unconditionally."""

    def __init__(self, subject: Any, definition: StateMachineDefinition) -> None:
        self.subject = subject
        self.definition = definition

    def next_state(self, event: Any) -> str | None:
        return self.definition.lookup(event, self.subject.state)

    def can_transition(self, event: Any) -> bool:
        return self.next_state(event) is not None

    def transition(self, event: Any, action: Callable[[], Any], form: EventForm | None = None) -> Any:
        name, form = _resolve_form(event, form)
        to_state = self.next_state(name)
        if to_state is None:
            return self._reject(name, form)

        result = action()
        self._commit(name, form, to_state)
        return result

    def illegal_event(self, event: str) -> Any:
        """Called when ``event`` is not permitted from the current state.

        ``event`` is named as the caller wrote it, including any ``!``.

        Override to record a domain error instead of raising; the return
        value becomes the result of ``transition``.
        """
        raise IllegalTransitionError(event, self.subject.state)

    def _reject(self, event: str, form: EventForm) -> Any:
        self._log(logging.WARNING, "state_machine.transition.illegal", event, form, None)
        return self.illegal_event(call_site_name(event, form))

    def _commit(self, event: str, form: EventForm, to_state: str) -> None:
        from_state = state_key(self.subject.state)
        self.subject.state = to_state
        level = logging.INFO if get_config().LOG_TRANSITIONS else logging.DEBUG
        self._log(level, "state_machine.transition.committed", event, form, to_state, from_state=from_state)

    def _log(
        self,
        level: int,
        message: str,
        event: str,
        form: EventForm,
        to_state: str | None,
        from_state: str | None = None,
        **fields: Any,
    ) -> None:
        if not logger.isEnabledFor(level):
            return
        context = TransitionLogContext.for_subject(self.subject, event, form, to_state, from_state)
        logger.log(level, message, extra=build_log_event(message, context, **fields))


class ValidatingTransitionExecutor(TransitionExecutor):
    """Commits only when the action added no errors and the subject is valid.

    The confirming form raises on validation or persistence failure; the
    best-effort form reports both through its boolean result. A failed
    best-effort save leaves the in-memory state advanced.
    """

    def transition(self, event: Any, action: Callable[[], Any], form: EventForm | None = None) -> Any:
        name, form = _resolve_form(event, form)
        to_state = self.next_state(name)
        if to_state is None:
            return self._reject(name, form)

        if self._with_error_counting(action) > 0 or self.subject.is_invalid():
            self._log(
                logging.INFO,
                "state_machine.transition.rejected",
                name,
                form,
                to_state,
                error_count=self.subject.errors.size(),
            )
            if form is EventForm.CONFIRMING:
                raise ValidationFailure(self.subject)
            return False

        self._commit(name, form, to_state)
        if form is EventForm.CONFIRMING:
            self.subject.save_or_fail()
            return True

        saved = bool(self.subject.save())
        if not saved:
            self._log(logging.WARNING, "state_machine.transition.save_failed", name, form, to_state)
        return saved

    def _with_error_counting(self, action: Callable[[], Any]) -> int:
        original_errors_size = self.subject.errors.size()
        action()
        return self.subject.errors.size() - original_errors_size


def _resolve_form(event: Any, form: EventForm | None) -> tuple[str, EventForm]:
    name, parsed_form = split_event_name(state_key(event))
    return name, form or parsed_form
