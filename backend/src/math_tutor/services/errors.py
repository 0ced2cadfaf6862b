from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


class ServiceError(Exception):
    """Base class for domain/service layer failures."""


class NotFoundError(ServiceError):
    def __init__(self, resource: str, identifier: int | str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found")


class InputValidationError(ServiceError):
    """Input rejected before reaching the store, one message per offending field."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("\n".join(errors))

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> InputValidationError:
        errors = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "input"
            errors.append(f"{field}: {error['msg']}")
        return cls(errors)
