"""Exception types shared by the services and the CLI."""

from typing import Dict, Optional


class MonthwiseError(Exception):
    """Base class for application errors."""


class NotFoundError(MonthwiseError):
    """A referenced record does not exist."""


class AccessDeniedError(MonthwiseError):
    """The requesting user does not own the record."""


class StoreError(MonthwiseError):
    """The underlying database could not be reached."""


class ValidationError(MonthwiseError):
    """Submitted form data was rejected.

    Attributes:
        field_errors: Mapping of field name to message.
        message: Form-level message, used when no single field is at fault.
    """

    def __init__(
        self,
        message: str = "Invalid form data.",
        field_errors: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.field_errors = dict(field_errors or {})
        super().__init__(self._describe())

    def _describe(self) -> str:
        if not self.field_errors:
            return self.message
        details = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        return f"{self.message} ({details})"
