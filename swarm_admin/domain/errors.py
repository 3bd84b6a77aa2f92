"""
Domain Errors - Failure taxonomy shared by stores, commands and controllers.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""
    field: str
    message: str


class AdminError(Exception):
    """Base class for all admin core errors."""


class ValidationError(AdminError):
    """
    Rejected payload. Raised before any mutation happens.

    Carries every field error found; `field` and `message` expose the first
    one for callers that only display a single message.
    """

    def __init__(self, errors: List[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one FieldError")
        self.errors = list(errors)
        super().__init__(self.message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field=field, message=message)])

    @property
    def field(self) -> str:
        return self.errors[0].field

    @property
    def message(self) -> str:
        return self.errors[0].message

    def for_field(self, field: str) -> Optional[str]:
        """First message attached to a field, if any."""
        for error in self.errors:
            if error.field == field:
                return error.message
        return None

    def as_dict(self) -> dict:
        """Field -> first message, the shape a form renders."""
        result = {}
        for error in self.errors:
            result.setdefault(error.field, error.message)
        return result


class NotFoundError(AdminError):
    """Target record does not exist (for callers that want a hard failure)."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class TransientError(AdminError):
    """Simulated network failure of a query or command."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"{operation} failed, please try again")


class PolicyDeniedError(AdminError):
    """A policy decision denied the requested mutation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
