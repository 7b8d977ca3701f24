#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass

from .currency import format_currency


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Positive amounts are income/credits, negative amounts are spending/debits.

    Examples:
        >>> income = Money.from_cents(1234)
        >>> str(income)
        '$12.34'

        >>> expense = Money.from_cents(-4599)
        >>> str(expense)
        '-$45.99'
        >>> expense.abs()
        Money(cents=4599)
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def zero(cls) -> "Money":
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def is_negative(self) -> bool:
        """True for debits. Zero is not negative."""
        return self.cents < 0

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_currency(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
