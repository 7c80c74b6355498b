"""Error taxonomy shared by the store client and the controllers."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class ErrorCode(Enum):
    """Error codes surfaced to the controllers."""

    TRANSPORT = "TRANSPORT"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    VALIDATION = "VALIDATION"
    READ_ONLY_FIELD = "READ_ONLY_FIELD"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class TransportError(DomainError):
    """Raised when the store cannot be reached or answers with a failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(code=ErrorCode.TRANSPORT, message=message)
        object.__setattr__(self, "status_code", status_code)


class NotFoundError(DomainError):
    """Raised when the store reports no event for the requested id."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class ValidationError(DomainError):
    """Raised when a draft fails the submit gate. Never reaches the store."""

    def __init__(self, fields: Iterable[str]) -> None:
        invalid: Tuple[str, ...] = tuple(fields)
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"Invalid fields: {', '.join(invalid)}",
        )
        object.__setattr__(self, "fields", invalid)


class ReadOnlyFieldError(DomainError):
    """Raised when an edit targets a field the user may not change."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.READ_ONLY_FIELD,
            message=f"Field '{field}' cannot be edited",
        )
        object.__setattr__(self, "field", field)
