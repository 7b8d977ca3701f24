#!/usr/bin/env python3
"""
Merchant Filter

Drops transactions whose merchant is in a configured exclusion set.
"""

from collections.abc import Iterable

from ..core.config import DEFAULT_DONUT_MERCHANTS
from ..core.errors import InvalidRecordError
from ..core.models import Transaction

DONUT_MERCHANTS = DEFAULT_DONUT_MERCHANTS


def normalize_merchants(names: Iterable[str]) -> frozenset[str]:
    """Uppercase a set of merchant names for membership tests."""
    return frozenset(name.upper() for name in names)


def should_exclude(transaction: Transaction, exclusion_set: Iterable[str]) -> bool:
    """
    Check whether a transaction's merchant is excluded.

    Comparison is exact after uppercasing both sides, so
    "Krispy Kreme Donuts" matches "KRISPY KREME DONUTS" but
    "Krispy Kreme" does not.

    Args:
        transaction: Transaction to test
        exclusion_set: Merchant names to exclude; empty disables the filter

    Returns:
        True if the transaction should be dropped

    Raises:
        InvalidRecordError: If the merchant is not a string
    """
    excluded = normalize_merchants(exclusion_set)
    if not excluded:
        return False

    if not isinstance(transaction.merchant, str):
        raise InvalidRecordError(
            f"Transaction {transaction.id} has an invalid merchant: {transaction.merchant!r}",
            transaction_id=transaction.id,
        )
    return transaction.merchant.upper() in excluded
