#!/usr/bin/env python3
"""
Error classes for Monthly Averages.

Every failure raised by the package derives from MonthlyAveragesError so the
CLI can report any of them as a single message with a non-zero exit status.
"""


class MonthlyAveragesError(Exception):
    """Base class for all package errors."""

    pass


class ValidationError(MonthlyAveragesError):
    """
    A required argument is missing or invalid.

    Raised before any network call is attempted (e.g. empty credentials).
    Never retried.
    """

    pass


class SettingsError(ValidationError):
    """The settings document is missing, unreadable or incomplete."""

    pass


class AuthError(MonthlyAveragesError):
    """Authentication was rejected by the upstream API."""

    pass


class TransportError(MonthlyAveragesError):
    """
    An upstream request failed.

    Covers transport failures, non-200 responses, malformed bodies and
    application-level error codes reported by the API.

    Attributes:
        status_code: HTTP status of the response, if one was received
        error_code: The upstream ``error`` field, if the body carried one
    """

    def __init__(self, message: str, status_code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class InvalidRecordError(MonthlyAveragesError):
    """A transaction record is missing a field or carries the wrong type."""

    def __init__(self, message: str, transaction_id: str | None = None):
        super().__init__(message)
        self.transaction_id = transaction_id


class InvalidDateError(InvalidRecordError):
    """A transaction timestamp could not be parsed."""

    pass


class InternalInvariantError(MonthlyAveragesError):
    """An internal assertion failed. Indicates a programming error."""

    pass
