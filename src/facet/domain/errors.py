"""Domain error hierarchy."""

from typing import Any


class DomainError(Exception):
    """Base class for errors raised by the Facet domain."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(DomainError, ValueError):
    """
    Raised by validating factories when a primitive is out of range.

    Attributes:
        field: Name of the offending field, if known.
        value: The rejected value.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class EventLogError(DomainError):
    """Raised by event log adapters when the source cannot be read at all."""

    code = "EVENT_LOG_ERROR"
