from __future__ import annotations

import pytest

from simple_state_machine.core.enums import EventForm
from simple_state_machine.core.exceptions import IllegalTransitionError
from simple_state_machine.machine.definition import StateMachineDefinition
from simple_state_machine.machine.executor import TransitionExecutor


class _Subject:
    def __init__(self, state):
        self.state = state


def _build_executor(state="draft"):
    definition = StateMachineDefinition(owner="Document")
    definition.define_event("publish", [("draft", "published")])
    definition.define_event("archive", [("published", "archived"), ("draft", "archived")])
    subject = _Subject(state)
    return subject, TransitionExecutor(subject, definition)


def test_transition_runs_action_once_and_commits():
    subject, executor = _build_executor()
    calls = []

    result = executor.transition("publish", lambda: calls.append(subject.state) or "done")

    assert result == "done"
    assert calls == ["draft"]
    assert subject.state == "published"


def test_state_is_written_after_action_completes():
    subject, executor = _build_executor()
    seen = []

    executor.transition("archive", lambda: seen.append(subject.state))

    assert seen == ["draft"]
    assert subject.state == "archived"


def test_illegal_event_raises_and_skips_action():
    subject, executor = _build_executor(state="archived")
    calls = []

    with pytest.raises(IllegalTransitionError, match="You cannot 'publish' when state is 'archived'") as exc_info:
        executor.transition("publish", lambda: calls.append(1))

    assert calls == []
    assert subject.state == "archived"
    assert exc_info.value.event == "publish"
    assert exc_info.value.state == "archived"


def test_unknown_event_takes_illegal_path():
    subject, executor = _build_executor()
    with pytest.raises(IllegalTransitionError):
        executor.transition("teleport", lambda: None)
    assert subject.state == "draft"


def test_undefined_initial_state_is_rejected():
    subject, executor = _build_executor(state=None)
    with pytest.raises(IllegalTransitionError):
        executor.transition("publish", lambda: None)
    assert subject.state is None


def test_action_failure_leaves_state_unchanged():
    subject, executor = _build_executor()

    def _boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        executor.transition("publish", _boom)
    assert subject.state == "draft"


def test_illegal_event_hook_can_be_overridden():
    class _SoftExecutor(TransitionExecutor):
        def illegal_event(self, event):
            self.subject.rejected = event
            return False

    definition = StateMachineDefinition()
    definition.define_event("publish", [("draft", "published")])
    subject = _Subject("archived")

    result = _SoftExecutor(subject, definition).transition("publish", lambda: "never")

    assert result is False
    assert subject.rejected == "publish"
    assert subject.state == "archived"


def test_confirming_form_behaves_like_best_effort_on_base_executor():
    subject, executor = _build_executor()
    assert executor.transition("publish!", lambda: "ok") == "ok"
    assert subject.state == "published"

    subject, executor = _build_executor()
    assert executor.transition("publish", lambda: "ok", form=EventForm.CONFIRMING) == "ok"
    assert subject.state == "published"


def test_next_state_and_can_transition():
    subject, executor = _build_executor()
    assert executor.next_state("publish") == "published"
    assert executor.can_transition("publish") is True
    subject.state = "archived"
    assert executor.next_state("publish") is None
    assert executor.can_transition("archive") is False


def test_committed_transition_is_logged(caplog):
    subject, executor = _build_executor()
    with caplog.at_level("DEBUG", logger="simple_state_machine.machine.executor"):
        executor.transition("publish", lambda: None)

    records = [r for r in caplog.records if r.getMessage() == "state_machine.transition.committed"]
    assert len(records) == 1
    assert records[0].from_state == "draft"
    assert records[0].to_state == "published"
    assert records[0].entity_type == "_Subject"
    assert records[0].state_event == "publish"
    assert records[0].form == "best_effort"


def test_illegal_confirming_call_is_named_as_written():
    subject, executor = _build_executor(state="archived")

    with pytest.raises(IllegalTransitionError, match="You cannot 'publish!' when state is 'archived'") as exc_info:
        executor.transition("publish!", lambda: None)

    assert exc_info.value.event == "publish!"


def test_explicit_confirming_form_names_the_confirming_call():
    class _SoftExecutor(TransitionExecutor):
        def illegal_event(self, event):
            return event

    definition = StateMachineDefinition()
    definition.define_event("publish", [("draft", "published")])

    result = _SoftExecutor(_Subject("archived"), definition).transition(
        "publish", lambda: None, form=EventForm.CONFIRMING
    )

    assert result == "publish!"


def test_illegal_confirming_call_is_logged_with_its_form(caplog):
    subject, executor = _build_executor(state="archived")
    with caplog.at_level("WARNING", logger="simple_state_machine.machine.executor"):
        with pytest.raises(IllegalTransitionError):
            executor.transition("publish!", lambda: None)

    records = [r for r in caplog.records if r.getMessage() == "state_machine.transition.illegal"]
    assert len(records) == 1
    assert records[0].state_event == "publish!"
    assert records[0].form == "confirming"
    assert not hasattr(records[0], "entity_id")
