#!/usr/bin/env python3
"""
Date Primitives

UTC timestamp parsing for upstream transaction records and the MonthKey
used to group transactions by calendar month.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from .errors import InternalInvariantError, InvalidDateError


def parse_timestamp(value: object) -> datetime:
    """
    Parse an upstream transaction time into an aware UTC datetime.

    Accepts ISO 8601 strings (a trailing ``Z`` is read as UTC, naive values
    are assumed to be UTC), epoch milliseconds as int, and datetime objects.

    Args:
        value: Raw ``transaction-time`` value

    Returns:
        Timezone-aware datetime normalized to UTC

    Raises:
        InvalidDateError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateError(f"Invalid timestamp: {value!r}") from e
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidDateError(f"Invalid timestamp: {value!r}") from e
    else:
        raise InvalidDateError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True, order=True)
class MonthKey:
    """
    Calendar (year, month) grouping key, rendered as ``YYYY-MM``.

    The year lower bound is not a calendar limit; it catches callers that
    swap the year and month arguments.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if self.year <= 12:
            raise InternalInvariantError(f'"year" is invalid: {self.year}')
        if not 1 <= self.month <= 12:
            raise InternalInvariantError(f'"month" is invalid: {self.month}')

    @classmethod
    def from_datetime(cls, value: datetime) -> "MonthKey":
        """Key for the UTC calendar month containing ``value``."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return cls(year=value.year, month=value.month)

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"
