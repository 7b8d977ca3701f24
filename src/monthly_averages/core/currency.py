#!/usr/bin/env python3
"""
Currency Handling Utilities

All amounts are integer cents (100 = $1.00). Calculations never touch
floating point; display strings are built with integer arithmetic.

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Round with explicit integer rules, not the interpreter's float rounding
"""

CURRENCY_SYMBOL = "$"


def cents_to_dollars_str(cents: int, thousands: bool = False) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents
        thousands: Insert comma thousands separators

    Returns:
        Formatted dollar string without currency symbol

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(111200, thousands=True) -> "1,112.00"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    dollars_str = f"{dollars:,}" if thousands else str(dollars)
    if is_negative:
        return f"-{dollars_str}.{remainder:02d}"
    return f"{dollars_str}.{remainder:02d}"


def format_currency(cents: int | None) -> str:
    """
    Format cents as a USD display string.

    ``None`` and zero both render as ``$0.00``. Negative amounts put the
    sign before the symbol.

    Examples:
        format_currency(111200) -> "$1,112.00"
        format_currency(-4599) -> "-$45.99"
        format_currency(None) -> "$0.00"
    """
    if not cents:
        cents = 0
    body = cents_to_dollars_str(abs(cents), thousands=True)
    sign = "-" if cents < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{body}"


def divide_round_half_up(numerator: int, denominator: int) -> int:
    """
    Integer division rounded to the nearest whole unit, halves rounded up.

    Matches the rounding used for the monthly average (2.5 -> 3, -2.5 -> -2).
    Returns 0 when the denominator is 0.
    """
    if denominator == 0:
        return 0
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return (2 * numerator + denominator) // (2 * denominator)
