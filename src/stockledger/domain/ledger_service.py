"""Ledger domain service.

Owns the single recomputation path for a customer's ledger. It reads the
committed transaction log, runs the reconciliation engine and keeps the
latest result per customer. When wired to a TransactionService it
recomputes after every committed write.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from stockledger.database.base import Database
from stockledger.domain.balance import BalanceSummary, summarize
from stockledger.domain.entities import Transaction as TransactionEntity
from stockledger.domain.errors import NotFoundError, customer_not_found
from stockledger.domain.ledger import LedgerLine, LedgerResult, reconcile
from stockledger.domain.transaction import TransactionService
from stockledger.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """A stored transaction with its reconciled ledger line."""

    transaction: TransactionEntity
    line: LedgerLine


class LedgerService:
    """Service for reconciled balances and transaction history."""

    def __init__(self, db: Database, transaction_service: Optional[TransactionService] = None):
        """Initialize ledger service.

        Args:
            db: Database instance
            transaction_service: Optional service whose commits trigger
                recomputation
        """
        self.db = db
        self._snapshots: dict[int, LedgerResult] = {}
        self._subscribed = transaction_service is not None
        if transaction_service is not None:
            transaction_service.subscribe(self.handle_commit)

    def handle_commit(self, customer_id: int) -> None:
        """Recompute a customer's ledger after a committed write."""
        # Drop the old snapshot first so a failed recompute is retried on read
        self.invalidate(customer_id)
        self.reconcile_customer(customer_id)

    def reconcile_customer(self, customer_id: int) -> LedgerResult:
        """Recompute a customer's ledger from the stored transaction log.

        Raises:
            NotFoundError: If customer not found
            ValidationError: If a stored record is malformed
            InvariantViolation: If the stored log breaks a ledger invariant
        """
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        transactions = self.db.list_transactions(customer_id=customer_id)
        return self._reconcile(customer_id, transactions)

    def _reconcile(self, customer_id: int, transactions: list[TransactionEntity]) -> LedgerResult:
        bank_accounts = {
            account.id: account for account in self.db.list_bank_accounts(customer_id)
        }
        result = reconcile(transactions, customer_id=customer_id, bank_accounts=bank_accounts)
        self._snapshots[customer_id] = result
        logger.debug(
            "Ledger for customer %s recomputed over %d transactions",
            customer_id,
            len(transactions),
        )
        return result

    def latest(self, customer_id: int) -> LedgerResult:
        """Most recent reconciled ledger for a customer.

        Cached results are only reused while this service is notified of
        commits; otherwise the ledger is recomputed on every call.
        """
        result = self._snapshots.get(customer_id) if self._subscribed else None
        if result is None:
            result = self.reconcile_customer(customer_id)
        return result

    def invalidate(self, customer_id: Optional[int] = None) -> None:
        """Drop cached results for one customer, or for all when None."""
        if customer_id is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(customer_id, None)

    def get_balance(self, customer_id: int) -> BalanceSummary:
        """Balance summary (pending, paid, net) for a customer."""
        return summarize(self.latest(customer_id))

    def history(
        self,
        customer_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HistoryEntry]:
        """Transactions with running balance and payment status, oldest first.

        Running balances always cover the customer's full history; the date
        range only limits which entries are returned.

        Args:
            customer_id: Customer ID
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date

        Returns:
            List of history entries in chronological order
        """
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))
        transactions = self.db.list_transactions(customer_id=customer_id)
        result = self._reconcile(customer_id, transactions)

        entries = []
        for txn, line in zip(transactions, result.lines):
            day = txn.occurred_at.date()
            if start_date is not None and day < start_date:
                continue
            if end_date is not None and day > end_date:
                continue
            entries.append(HistoryEntry(transaction=txn, line=line))
        entries.sort(key=lambda entry: entry.line.position)
        return entries
