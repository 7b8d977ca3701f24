"""
Monthly Averages - Spending and Income Report

Summarizes a user's transaction history into per-month spending and income
totals with an overall monthly average.

Key Features:
- Chronological per-month totals in integer cents
- Optional donut merchant exclusion
- Optional exclusion of matched credit card payment/credit pairs

Domain Packages:
- core: Currency handling, models, errors, configuration
- analysis: Merchant filter, payment matcher, monthly aggregation
- cofi: Upstream API client
- cli: Command-line interface

Example Usage:
    from monthly_averages import ReportOptions, aggregate

    result = aggregate(transactions, ReportOptions(ignore_cc_payments=True))
    print(result.to_dict())
"""

__version__ = "0.1.0"

from .analysis import AggregationResult, ReportOptions, aggregate, get_monthly_averages
from .core.models import Transaction
from .core.money import Money

__all__ = [
    "AggregationResult",
    "Money",
    "ReportOptions",
    "Transaction",
    "aggregate",
    "get_monthly_averages",
]
