"""
Core Utilities Package

Shared primitives used by the API client and the aggregation engine.

This package provides:
- Currency handling with integer arithmetic for precision
- Money and MonthKey value types
- The Transaction model built from upstream records
- The error taxonomy
- Configuration loading from the settings document
"""

from .config import Config, Environment, get_config, reload_config
from .currency import cents_to_dollars_str, divide_round_half_up, format_currency
from .dates import MonthKey, parse_timestamp
from .errors import (
    AuthError,
    InternalInvariantError,
    InvalidDateError,
    InvalidRecordError,
    MonthlyAveragesError,
    SettingsError,
    TransportError,
    ValidationError,
)
from .models import Transaction, TransactionType
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Currency utilities
    "cents_to_dollars_str",
    "divide_round_half_up",
    "format_currency",
    # Primitives and models
    "Money",
    "MonthKey",
    "Transaction",
    "TransactionType",
    "parse_timestamp",
    # Errors
    "AuthError",
    "InternalInvariantError",
    "InvalidDateError",
    "InvalidRecordError",
    "MonthlyAveragesError",
    "SettingsError",
    "TransportError",
    "ValidationError",
]
