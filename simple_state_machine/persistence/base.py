"""Shared SQLAlchemy base for state-machine backed models."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base class for persisted entities."""
