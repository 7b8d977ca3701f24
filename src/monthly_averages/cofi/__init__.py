"""
Upstream API Package

Authentication and data fetching for the transactions API.

Key Components:
- request: JSON request helpers with response validation
- client: Login, account and transaction endpoints
- models: Credentials and Account records
"""

from .client import CofiClient, CofiTransactionSource
from .models import Account, Credentials

__all__ = [
    "Account",
    "CofiClient",
    "CofiTransactionSource",
    "Credentials",
]
