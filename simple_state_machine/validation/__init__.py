from simple_state_machine.validation.errors import ErrorCollection, errors_from_pydantic

__all__ = ["ErrorCollection", "errors_from_pydantic"]
