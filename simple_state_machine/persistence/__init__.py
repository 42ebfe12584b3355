"""SQLAlchemy-backed persistence for validated state machines.

Import ``simple_state_machine.persistence.record`` for ``ValidatedRecord``;
importing it binds the engine configured by ``SSM_DATABASE_URL``.
"""
