#!/usr/bin/env python3
"""
Core Data Models

Transaction records as supplied by the upstream API, converted into typed
values with Money and UTC datetime primitives.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .dates import MonthKey, parse_timestamp
from .errors import InvalidRecordError
from .money import Money


class TransactionType(Enum):
    """Direction of a transaction. Zero amounts count as income."""

    SPEND = "spend"
    INCOME = "income"


@dataclass(frozen=True)
class Transaction:
    """
    A single upstream transaction.

    ``merchant`` is kept as received; the merchant filter validates it when
    it is actually needed. ``raw`` holds the original record so ignored
    transactions can be reported back unchanged.
    """

    id: str
    merchant: Any
    amount: Money
    timestamp: datetime

    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Create Transaction from an upstream record.

        Args:
            data: Record with ``transaction-id``, ``merchant``, ``amount``
                  (integer cents) and ``transaction-time`` keys

        Returns:
            Transaction instance

        Raises:
            InvalidRecordError: If the id is missing or the amount is not an integer
            InvalidDateError: If the transaction time cannot be parsed
        """
        transaction_id = data.get("transaction-id")
        if transaction_id is None or transaction_id == "":
            raise InvalidRecordError(f"Transaction is missing an id: {data!r}")
        transaction_id = str(transaction_id)

        amount = data.get("amount")
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise InvalidRecordError(
                f"Transaction {transaction_id} has an invalid amount: {amount!r}",
                transaction_id=transaction_id,
            )

        try:
            timestamp = parse_timestamp(data.get("transaction-time"))
        except InvalidRecordError as e:
            e.transaction_id = transaction_id
            raise

        return cls(
            id=transaction_id,
            merchant=data.get("merchant"),
            amount=Money.from_cents(amount),
            timestamp=timestamp,
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """Upstream representation of the transaction."""
        if self.raw:
            return dict(self.raw)
        return {
            "transaction-id": self.id,
            "merchant": self.merchant,
            "amount": self.amount.to_cents(),
            "transaction-time": self.timestamp.isoformat().replace("+00:00", "Z"),
        }

    @property
    def transaction_type(self) -> TransactionType:
        """Classify by sign of amount."""
        if self.amount.is_negative():
            return TransactionType.SPEND
        return TransactionType.INCOME

    @property
    def month_key(self) -> MonthKey:
        return MonthKey.from_datetime(self.timestamp)
