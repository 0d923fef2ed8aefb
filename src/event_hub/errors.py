"""Domain errors raised by the validation pipeline and the event store."""

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Reasons an Event candidate can be rejected."""

    REQUIRED_FIELD_MISSING = "RequiredFieldMissing"
    FIELD_TOO_LONG = "FieldTooLong"
    INVALID_MODE = "InvalidMode"
    EMPTY_COLLECTION = "EmptyCollection"
    INVALID_DATE_FORMAT = "InvalidDateFormat"
    INVALID_TIME_FORMAT = "InvalidTimeFormat"
    INVALID_HOUR_VALUE = "InvalidHourValue"


class EventHubError(Exception):
    """Base exception for Event Hub errors."""

    pass


class EventValidationError(EventHubError):
    """Raised when a candidate Event fails normalization or validation."""

    def __init__(self, kind: ValidationErrorKind, field: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        """Serialize for API error responses."""
        return {
            "kind": self.kind.value,
            "field": self.field,
            "message": self.message,
        }


class DuplicateKeyError(EventHubError):
    """Raised by the store when a write collides on the unique slug."""

    def __init__(self, slug: str):
        super().__init__(f"An event with slug '{slug}' already exists")
        self.slug = slug
