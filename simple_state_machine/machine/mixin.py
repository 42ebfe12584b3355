"""Declarative attachment of a state machine to an entity type."""

from __future__ import annotations

import functools
from typing import Any, Callable, ClassVar

from simple_state_machine.core.enums import EventForm, split_event_name, state_key
from simple_state_machine.machine.definition import StateMachineDefinition
from simple_state_machine.machine.executor import TransitionExecutor

_HANDLER_ATTR = "__state_machine_event__"


def event_handler(event: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register a method as the action for ``event``.

    Calling the decorated method fires the event in its best-effort form;
    ``instance.fire("<event>!", ...)`` runs the same method in the
    confirming form.
    """
    name, form = split_event_name(str(event))
    if form is EventForm.CONFIRMING:
        raise ValueError(f"register handlers on the base event name, not {event!r}")

    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(method)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            return self.fire(name, *args, **kwargs)

        setattr(wrapper, _HANDLER_ATTR, name)
        wrapper.__wrapped_action__ = method
        return wrapper

    return decorator


class StateMachineMixin:
    """Gives an entity type declared events and a generic ``fire`` entry point.

    Declare transitions once the class exists::

        class Document(StateMachineMixin):
            def __init__(self, state="draft"):
                self.state = state

        Document.event("publish", [("draft", "published")])

    The executor variant is chosen per type through ``executor_class``.
    """

    state = None
    executor_class: ClassVar[type[TransitionExecutor]] = TransitionExecutor
    _state_machine_definition: ClassVar[StateMachineDefinition | None] = None
    _event_handlers: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        handlers = dict(getattr(cls, "_event_handlers", {}))
        # An undecorated override of an inherited handler still routes through the machine.
        for event, attr_name in handlers.items():
            value = cls.__dict__.get(attr_name)
            if callable(value) and getattr(value, _HANDLER_ATTR, None) is None:
                setattr(cls, attr_name, event_handler(event)(value))
        for attr_name, value in list(vars(cls).items()):
            event = getattr(value, _HANDLER_ATTR, None)
            if event is not None:
                handlers[event] = attr_name
        cls._event_handlers = handlers
        super().__init_subclass__(**kwargs)

    @classmethod
    def event(cls, name: Any, transitions: Any) -> None:
        cls._own_definition().define_event(name, transitions)

    @classmethod
    def state_machine_definition(cls) -> StateMachineDefinition:
        definition = cls._state_machine_definition
        if definition is None:
            return cls._own_definition()
        return definition

    @classmethod
    def _own_definition(cls) -> StateMachineDefinition:
        own = cls.__dict__.get("_state_machine_definition")
        if own is None:
            inherited = cls._state_machine_definition
            if inherited is None:
                own = StateMachineDefinition(owner=cls.__name__)
            else:
                own = inherited.copy(owner=cls.__name__)
            cls._state_machine_definition = own
        return own

    @property
    def state_machine(self) -> TransitionExecutor:
        executor = self.__dict__.get("_state_machine_executor")
        if executor is None:
            executor = self.executor_class(self, type(self).state_machine_definition())
            self.__dict__["_state_machine_executor"] = executor
        return executor

    def fire(self, event: Any, *args: Any, **kwargs: Any) -> Any:
        """Fire ``event`` with its registered handler; a trailing ``!`` selects the confirming form.

        Positional and keyword arguments all go to the handler.
        """
        name, _ = split_event_name(state_key(event))
        return self.state_machine.transition(event, self._resolve_action(name, args, kwargs))

    def fire_with(self, event: Any, action: Callable[[], Any]) -> Any:
        """Fire ``event`` running ``action`` in place of the registered handler."""
        return self.state_machine.transition(event, action)

    def can_fire(self, event: Any) -> bool:
        return self.state_machine.can_transition(event)

    def in_state(self, state: Any) -> bool:
        return state_key(self.state) == state_key(state)

    def available_events(self) -> list[str]:
        return type(self).state_machine_definition().events_from(self.state)

    def _resolve_action(self, event: str, args: tuple, kwargs: dict) -> Callable[[], Any]:
        attr_name = type(self)._event_handlers.get(event)
        if attr_name is None:
            return _noop
        method = getattr(type(self), attr_name)
        method = getattr(method, "__wrapped_action__", method)
        return functools.partial(method, self, *args, **kwargs)


def _noop() -> None:
    return None
