"""
Transaction Analysis Package

The aggregation engine: merchant filtering, credit card payment matching and
monthly totals.

Key Components:
- filters: Merchant exclusion predicate
- matcher: Sliding-window matcher for offsetting payment/credit pairs
- monthly: Monthly aggregation and report rendering
"""

from .filters import DONUT_MERCHANTS, should_exclude
from .matcher import PaymentMatcher
from .monthly import (
    AggregationResult,
    MonthBucket,
    ReportOptions,
    TransactionSource,
    aggregate,
    get_monthly_averages,
)

__all__ = [
    "AggregationResult",
    "DONUT_MERCHANTS",
    "MonthBucket",
    "PaymentMatcher",
    "ReportOptions",
    "TransactionSource",
    "aggregate",
    "get_monthly_averages",
    "should_exclude",
]
