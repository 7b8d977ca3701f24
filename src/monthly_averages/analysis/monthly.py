#!/usr/bin/env python3
"""
Monthly Averages Module

Aggregates a transaction history into per-month spending and income totals
and an overall monthly average, with optional donut merchant and credit
card payment filtering.

Transactions are assumed to arrive ascending by timestamp. They are not
re-sorted; out-of-order input gives undefined matching results.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol

from ..core.currency import divide_round_half_up
from ..core.dates import MonthKey
from ..core.models import Transaction, TransactionType
from ..core.money import Money
from .filters import DONUT_MERCHANTS, normalize_merchants, should_exclude
from .matcher import DEFAULT_MATCH_WINDOW, PaymentMatcher

logger = logging.getLogger(__name__)


class TransactionSource(Protocol):
    """Anything that can supply the complete transaction history."""

    def fetch_transactions(self) -> Iterable[Mapping[str, Any] | Transaction] | None:
        """Return every transaction, ascending by timestamp, or None if there are none."""
        ...


@dataclass(frozen=True)
class ReportOptions:
    """Filters for one aggregation run."""

    ignore_donuts: bool = False
    ignore_cc_payments: bool = False
    donut_merchants: frozenset[str] = DONUT_MERCHANTS
    payment_window: timedelta = DEFAULT_MATCH_WINDOW


@dataclass
class MonthBucket:
    """Spending and income accumulated for one month. Both are non-negative."""

    spent: Money = field(default_factory=Money.zero)
    income: Money = field(default_factory=Money.zero)

    def add(self, transaction: Transaction) -> None:
        if transaction.transaction_type == TransactionType.SPEND:
            self.spent = self.spent + transaction.amount.abs()
        else:
            self.income = self.income + transaction.amount

    def to_dict(self, formatted: bool = True) -> dict[str, Any]:
        if formatted:
            return {"spent": str(self.spent), "income": str(self.income)}
        return {"spent": self.spent.to_cents(), "income": self.income.to_cents()}


@dataclass
class AggregationResult:
    """
    Monthly totals in chronological order plus the overall average.

    ``ignored`` is None unless credit card payment matching was enabled.
    """

    months: dict[MonthKey, MonthBucket] = field(default_factory=dict)
    average: MonthBucket = field(default_factory=MonthBucket)
    ignored: list[Transaction] | None = None

    @property
    def populated_months(self) -> int:
        return len(self.months)

    def to_dict(self, formatted: bool = True) -> dict[str, Any]:
        """
        Render the report.

        Args:
            formatted: Render amounts as currency strings ("$1,112.00")
                       instead of integer cents

        Returns:
            Mapping of "YYYY-MM" keys to totals, then "average", then
            "ignored" when present
        """
        result: dict[str, Any] = {
            str(key): bucket.to_dict(formatted=formatted) for key, bucket in self.months.items()
        }
        result["average"] = self.average.to_dict(formatted=formatted)
        if self.ignored is not None:
            result["ignored"] = [t.to_dict() for t in self.ignored]
        return result


def _coerce(record: Mapping[str, Any] | Transaction) -> Transaction:
    if isinstance(record, Transaction):
        return record
    return Transaction.from_dict(dict(record))


def aggregate(
    transactions: Iterable[Mapping[str, Any] | Transaction] | None,
    options: ReportOptions | None = None,
) -> AggregationResult:
    """
    Calculate monthly spending and income totals and their average.

    Args:
        transactions: Upstream records or Transaction objects, ascending by time
        options: Filters to apply (default: none)

    Returns:
        AggregationResult with only the months that received a transaction

    Raises:
        InvalidRecordError: If a record is malformed or a merchant is not a string
        InvalidDateError: If a transaction time cannot be parsed
    """
    options = options or ReportOptions()

    if not transactions:
        # Nothing to do
        return AggregationResult()

    parsed = [_coerce(t) for t in transactions]
    logger.debug("Aggregating %d transactions", len(parsed))

    donut_merchants = normalize_merchants(options.donut_merchants) if options.ignore_donuts else frozenset()
    matcher = PaymentMatcher(parsed, window=options.payment_window) if options.ignore_cc_payments else None

    buckets: dict[MonthKey, MonthBucket] = {}
    earliest_year: int | None = None
    latest_year: int | None = None

    for i, transaction in enumerate(parsed):
        if donut_merchants and should_exclude(transaction, donut_merchants):
            continue

        if matcher is not None:
            if matcher.is_ignored(transaction.id):
                continue
            matcher.process(i)
            if matcher.is_ignored(transaction.id):
                continue

        key = transaction.month_key
        earliest_year = key.year if earliest_year is None else min(earliest_year, key.year)
        latest_year = key.year if latest_year is None else max(latest_year, key.year)

        buckets.setdefault(key, MonthBucket()).add(transaction)

    result = AggregationResult(ignored=matcher.ignored if matcher is not None else None)
    if earliest_year is None or latest_year is None:
        return result

    # Walk the calendar so months come out in chronological order
    total_spent = Money.zero()
    total_income = Money.zero()
    for year in range(earliest_year, latest_year + 1):
        for month in range(1, 13):
            key = MonthKey(year, month)
            bucket = buckets.get(key)
            if bucket is None:
                continue
            total_spent = total_spent + bucket.spent
            total_income = total_income + bucket.income
            result.months[key] = bucket

    count = len(result.months)
    result.average = MonthBucket(
        spent=Money.from_cents(divide_round_half_up(total_spent.to_cents(), count)),
        income=Money.from_cents(divide_round_half_up(total_income.to_cents(), count)),
    )
    logger.info(
        "Aggregated %d months (%d-%d), %d transactions ignored",
        count,
        earliest_year,
        latest_year,
        len(result.ignored or []),
    )
    return result


def get_monthly_averages(source: TransactionSource, options: ReportOptions | None = None) -> AggregationResult:
    """
    Fetch the complete transaction history from ``source`` and aggregate it.

    Source errors (transport, authentication) propagate before any
    aggregation takes place.
    """
    transactions = source.fetch_transactions()
    return aggregate(transactions, options)
