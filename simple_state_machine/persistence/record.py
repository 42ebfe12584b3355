"""SQLAlchemy mixin satisfying the validating subject contract."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, object_session

from simple_state_machine.core.exceptions import PersistenceFailure, ValidationFailure
from simple_state_machine.machine.executor import ValidatingTransitionExecutor
from simple_state_machine.machine.mixin import StateMachineMixin
from simple_state_machine.persistence import db
from simple_state_machine.validation.errors import BASE_ATTRIBUTE, ErrorCollection, errors_from_pydantic

logger = logging.getLogger(__name__)


class ValidatedRecord(StateMachineMixin):
    """Mixin for declarative models whose events validate and persist.

    Mix in before the declarative base::

        class Order(ValidatedRecord, Base):
            __tablename__ = "orders"
            __validation_schema__ = OrderSchema
            id: Mapped[int] = mapped_column(primary_key=True)
            state: Mapped[str] = mapped_column(String(40))

    Validation runs the optional pydantic ``__validation_schema__`` against
    the record's attributes, then the ``validate()`` hook.
    """

    executor_class = ValidatingTransitionExecutor
    __validation_schema__: ClassVar[type[BaseModel] | None] = None

    @property
    def errors(self) -> ErrorCollection:
        errors = self.__dict__.get("_record_errors")
        if errors is None:
            errors = ErrorCollection()
            self.__dict__["_record_errors"] = errors
        return errors

    def validate(self) -> None:
        """Hook for custom rules; add problems to ``self.errors``."""

    def is_valid(self) -> bool:
        self.errors.clear()
        schema = type(self).__validation_schema__
        if schema is not None:
            try:
                schema.model_validate(self, from_attributes=True)
            except ValidationError as exc:
                self.errors.extend(errors_from_pydantic(exc))
        self.validate()
        return self.errors.is_empty()

    def is_invalid(self) -> bool:
        return not self.is_valid()

    def attach_session(self, session: Session) -> None:
        self.__dict__["_record_session"] = session

    def save(self) -> bool:
        if self.is_invalid():
            return False
        try:
            self._persist()
        except SQLAlchemyError as exc:
            self.errors.add(BASE_ATTRIBUTE, f"could not be saved ({exc.__class__.__name__})")
            return False
        return True

    def save_or_fail(self) -> None:
        if self.is_invalid():
            raise ValidationFailure(self)
        try:
            self._persist()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(self, reason=exc.__class__.__name__) from exc

    def _resolve_session(self) -> tuple[Session, bool]:
        """Return the session to write through and whether this call owns it.

        A session from the factory is owned: it is closed once the write
        finishes and never stored on the record.
        """
        session = self.__dict__.get("_record_session")
        if session is None:
            session = object_session(self)
        if session is None:
            return db.get_session_factory()(), True
        return session, False

    def _persist(self) -> None:
        session, owned = self._resolve_session()
        # A failing flush expires the instance, so snapshot before committing.
        changes = self._unflushed_changes()
        try:
            session.add(self)
            session.commit()
            if owned:
                session.refresh(self)
        except SQLAlchemyError as exc:
            session.rollback()
            self._detach_with_changes(session, changes, owned)
            logger.warning(
                "record.save_failed",
                extra={
                    "event": "record.save_failed",
                    "entity_type": type(self).__name__,
                    "error": str(exc),
                },
            )
            raise
        finally:
            if owned:
                session.close()

    def _detach_with_changes(self, session: Session, changes: dict[str, Any], owned: bool) -> None:
        """Put the rejected values back on a record the session no longer tracks.

        The record is expunged so a later commit on the same session does not
        retry the failed write; its next ``save()`` re-adds it.
        """
        if self in session:
            session.refresh(self)
            session.expunge(self)
        for key, value in changes.items():
            setattr(self, key, value)
        if not owned:
            self.__dict__["_record_session"] = session

    def _unflushed_changes(self) -> dict[str, Any]:
        state = sa_inspect(self)
        changes: dict[str, Any] = {}
        for column_attr in state.mapper.column_attrs:
            attr = state.attrs[column_attr.key]
            if attr.history.has_changes():
                changes[column_attr.key] = attr.value
        return changes
