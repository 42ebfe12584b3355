"""State machine definition, executors and the declarative mixin."""

from simple_state_machine.machine.definition import StateMachineDefinition
from simple_state_machine.machine.executor import TransitionExecutor, ValidatingTransitionExecutor
from simple_state_machine.machine.mixin import StateMachineMixin, event_handler
from simple_state_machine.machine.ports import TransitionPort, ValidatingSubject

__all__ = [
    "StateMachineDefinition",
    "StateMachineMixin",
    "TransitionExecutor",
    "TransitionPort",
    "ValidatingSubject",
    "ValidatingTransitionExecutor",
    "event_handler",
]
