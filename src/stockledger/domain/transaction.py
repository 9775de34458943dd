"""Transaction domain service.

Records stock deliveries and payments. Every write is validated in full
before anything is stored, committed atomically per customer, and then
announced to subscribed listeners so derived state can be recomputed from
the committed snapshot.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence
from stockledger.database.base import Database
from stockledger.domain.entities import (
    PaymentMethod,
    StockItem,
    Transaction as TransactionEntity,
    TransactionKind,
)
from stockledger.domain.errors import (
    NotFoundError,
    ValidationError,
    customer_not_found,
    describe_record,
    transaction_not_found,
)
from stockledger.domain.validation import validate_batch
from stockledger.logging_setup import get_logger
from stockledger.utils.amount_parser import decimal_places

logger = get_logger(__name__)

QUANTITY_PLACES = 3
MONEY_PLACES = 2

CommitListener = Callable[[int], None]


class TransactionService:
    """Service for recording and reading transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self._listeners: list[CommitListener] = []

    def subscribe(self, listener: CommitListener) -> None:
        """Call ``listener(customer_id)`` after each committed write."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CommitListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def record_stock(
        self,
        customer_id: int,
        items: Sequence[StockItem],
        occurred_at: datetime,
        notes: Optional[str] = None,
    ) -> list[int]:
        """Record a stock delivery of one or more items.

        Each item becomes its own stock transaction; all of them are stored
        together or not at all.

        Args:
            customer_id: Customer receiving the stock
            items: Delivered items (quality category, quantity, rate)
            occurred_at: When the delivery happened
            notes: Optional notes applied to every item

        Returns:
            New transaction IDs, in item order

        Raises:
            NotFoundError: If customer not found
            ValidationError: If no items are given or any item is invalid
        """
        if not items:
            raise ValidationError("A stock delivery needs at least one item")

        records = [
            TransactionEntity.stock(
                id=None,
                customer_id=customer_id,
                occurred_at=occurred_at,
                quality_category=item.quality_category,
                quantity=item.quantity,
                unit_rate=item.unit_rate,
                notes=notes,
            )
            for item in items
        ]
        return self._record(customer_id, records)

    def record_payment(
        self,
        customer_id: int,
        method: PaymentMethod,
        amount: Decimal,
        occurred_at: datetime,
        external_reference: Optional[str] = None,
        bank_account_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a payment received from a customer.

        Args:
            customer_id: Paying customer
            method: Payment method
            amount: Amount received, strictly positive
            occurred_at: When the payment was received
            external_reference: Transaction reference, required for bank and UPI
            bank_account_id: Customer bank account, required for bank transfers
            notes: Optional notes

        Returns:
            New transaction ID

        Raises:
            NotFoundError: If customer not found
            ValidationError: If the payment is invalid
            InvariantViolation: If the bank account belongs to another customer
        """
        if external_reference is not None:
            external_reference = external_reference.strip() or None

        record = TransactionEntity.payment(
            id=None,
            customer_id=customer_id,
            occurred_at=occurred_at,
            method=method,
            amount=amount,
            external_reference=external_reference,
            bank_account_id=bank_account_id,
            notes=notes,
        )
        return self._record(customer_id, [record])[0]

    def _record(self, customer_id: int, records: list[TransactionEntity]) -> list[int]:
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        for record in records:
            if not isinstance(record.occurred_at, datetime):
                raise ValidationError(
                    f"{describe_record(record.id)}: occurred_at must be a date and time"
                )

        bank_accounts = {
            account.id: account for account in self.db.list_bank_accounts(customer_id)
        }
        # Foreign accounts are looked up too so ownership, not absence, is reported
        for record in records:
            if record.bank_account_id is not None and record.bank_account_id not in bank_accounts:
                account = self.db.get_bank_account(record.bank_account_id)
                if account is not None:
                    bank_accounts[account.id] = account

        try:
            validate_batch(records, customer_id=customer_id, bank_accounts=bank_accounts)
            for record in records:
                _check_scale(record)
        except ValueError as e:
            logger.warning("Rejected transaction for customer %s: %s", customer_id, e)
            raise

        ids = self.db.create_transactions(customer_id, records)
        for txn_id, record in zip(ids, records):
            logger.info(
                "Recorded %s transaction %s for customer %s: %s",
                record.kind.value,
                txn_id,
                customer_id,
                record.amount,
            )

        # The write is already committed, so listener failures are only logged
        for listener in list(self._listeners):
            try:
                listener(customer_id)
            except Exception:
                logger.exception("Commit listener failed for customer %s", customer_id)
        return ids

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID, failing if it does not exist.

        Raises:
            NotFoundError: If transaction not found
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        customer_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
    ) -> list[TransactionEntity]:
        """List transactions with optional filters, oldest first.

        Args:
            customer_id: Optional customer filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            kind: Optional stock/payment filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            customer_id=customer_id,
            start_date=start_date,
            end_date=end_date,
            kind=kind,
        )

    def search_transactions(self, query: str) -> list[TransactionEntity]:
        """Search transactions by notes, reference or quality category, newest first."""
        query = query.strip()
        if not query:
            return []
        return self.db.search_transactions(query)


def _check_scale(record: TransactionEntity) -> None:
    """Reject values with more decimal places than storage keeps."""
    limits = (
        ("quantity", record.quantity, QUANTITY_PLACES),
        ("rate", record.unit_rate, MONEY_PLACES),
        ("amount", record.payment_amount, MONEY_PLACES),
    )
    for field, value, places in limits:
        if value is not None and decimal_places(value.normalize()) > places:
            raise ValidationError(
                f"{describe_record(record.id)}: {field} allows at most {places} decimal places, "
                f"got {value}",
                record_id=record.id,
            )
