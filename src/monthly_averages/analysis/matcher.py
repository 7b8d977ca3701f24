#!/usr/bin/env python3
"""
Credit Card Payment Matching Module

Finds pairs of transactions that are two halves of one money movement, such
as a card bill debited from checking and the matching credit on the card.
Both halves are excluded from spend and income totals.

The scan keeps a window of upcoming transactions no more than 24 hours ahead
of the current one, indexed by amount, so each transaction looks up its
opposite amount directly instead of comparing against every other
transaction. After eviction the window is extended from position
``index + len(window)``, treating the window as if it started at the
current index.

Known limitations:
- Entries leave the window only when a later transaction is processed with a
  strictly greater timestamp. An earlier transaction sharing the current
  timestamp stays in the window and can be chosen as the match, even though
  it has already been counted.
- The earliest candidate wins, even if it is already ignored from an earlier
  pair. The current transaction is then ignored as well.
- The extension start assumes the window holds the current index and the
  positions right after it. When the caller skips indices, or a same-time
  predecessor is still in the window, positions past the window are skipped
  and never considered. A skipped transaction behind the current index is
  never added either, even when it shares the current timestamp.
"""

import logging
from collections import defaultdict, deque
from collections.abc import Sequence
from datetime import timedelta

from ..core.currency import format_currency
from ..core.errors import InternalInvariantError
from ..core.models import Transaction

logger = logging.getLogger(__name__)

DEFAULT_MATCH_WINDOW = timedelta(days=1)


class PaymentMatcher:
    """
    Single-pass matcher for offsetting payment/credit pairs.

    Operates over a sequence sorted ascending by timestamp. ``process`` must
    be called with strictly increasing indices; indices may be skipped.
    """

    def __init__(self, transactions: Sequence[Transaction], window: timedelta = DEFAULT_MATCH_WINDOW):
        """
        Initialize the matcher.

        Args:
            transactions: Full transaction sequence, ascending by timestamp
            window: How far ahead of the current transaction to look for a match
        """
        self.transactions = transactions
        self.window = window

        # Indices of pending transactions in scan order
        self._pending: deque[int] = deque()
        # Amount in cents -> indices of pending transactions with that amount
        self._pending_by_amount: defaultdict[int, deque[int]] = defaultdict(deque)
        self._last_index = -1

        self._ignored: dict[str, Transaction] = {}

    def process(self, index: int) -> None:
        """
        Advance the window to the transaction at ``index`` and try to match it.

        Args:
            index: Position of the current transaction in the sequence

        Raises:
            InternalInvariantError: If indices are not strictly increasing
        """
        if index <= self._last_index:
            raise InternalInvariantError(
                f"Matcher indices must increase: got {index} after {self._last_index}"
            )
        self._last_index = index

        current = self.transactions[index]
        self._evict_before(current)
        self._extend_from(index, current)

        candidates = self._pending_by_amount.get(-current.amount.to_cents())
        if not candidates:
            return

        future = self.transactions[candidates[0]]
        # A zero amount finds itself
        if future.id == current.id:
            return

        self._ignored.setdefault(current.id, current)
        self._ignored.setdefault(future.id, future)
        logger.debug(
            "Transaction %s (%s) with amount %s matches transaction %s (%s)",
            current.id,
            current.timestamp.isoformat(),
            format_currency(current.amount.to_cents()),
            future.id,
            future.timestamp.isoformat(),
        )

    def is_ignored(self, transaction_id: str) -> bool:
        """Check whether a transaction was matched as part of a pair."""
        return transaction_id in self._ignored

    @property
    def ignored(self) -> list[Transaction]:
        """Matched transactions in the order they were marked."""
        return list(self._ignored.values())

    @property
    def pending_count(self) -> int:
        """Number of transactions currently in the window."""
        return len(self._pending)

    def _evict_before(self, current: Transaction) -> None:
        """Drop window entries strictly older than the current transaction."""
        while self._pending:
            front = self._pending[0]
            front_tx = self.transactions[front]
            if front_tx.timestamp >= current.timestamp:
                break

            self._pending.popleft()
            amount = front_tx.amount.to_cents()
            same_amount = self._pending_by_amount[amount]
            same_amount.popleft()
            if not same_amount:
                del self._pending_by_amount[amount]

    def _extend_from(self, index: int, current: Transaction) -> None:
        """Add transactions up to ``window`` past the current one, starting after the window."""
        horizon = current.timestamp + self.window
        for position in range(index + len(self._pending), len(self.transactions)):
            candidate = self.transactions[position]
            if candidate.timestamp > horizon:
                break

            self._pending.append(position)
            self._pending_by_amount[candidate.amount.to_cents()].append(position)
