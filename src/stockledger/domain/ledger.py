"""Ledger reconciliation engine.

Folds one customer's transaction records into signed contributions, running
balances and per-delivery payment statuses. Payments are attributed FIFO:
each payment pays off the oldest outstanding stock delivery first, and any
money left once every delivery is covered is carried forward as credit that
later deliveries consume.

The engine is a pure function of its input. It performs no I/O and never
mutates the records it is given.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence

from stockledger.domain.entities import (
    BankAccount,
    PaymentStatus,
    Transaction,
    TransactionKind,
)
from stockledger.domain.errors import InvariantViolation, NotFoundError, transaction_not_found
from stockledger.domain.money import Money
from stockledger.domain.validation import validate_batch
from stockledger.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LedgerLine:
    """Reconciled view of one transaction record.

    ``position`` is the record's index in chronological order.
    ``payment_status``, ``outstanding`` and ``excess`` describe stock records;
    payment records have no status and zero outstanding/excess.
    ``excess`` is the part of an overpayment still held as credit; it shrinks
    as later deliveries consume that credit, while the status stays
    ``overpaid``.
    """

    transaction_id: Optional[int]
    kind: TransactionKind
    position: int
    contribution: Money
    running_balance: Money
    payment_status: Optional[PaymentStatus]
    outstanding: Money
    excess: Money


@dataclass(frozen=True)
class Allocation:
    """Portion of a payment applied to a stock delivery."""

    payment_id: Optional[int]
    stock_id: Optional[int]
    amount: Money


@dataclass(frozen=True)
class LedgerResult:
    """Outcome of reconciling one customer's ledger.

    ``lines`` follow the order of the input records.
    """

    customer_id: Optional[int]
    lines: tuple[LedgerLine, ...]
    allocations: tuple[Allocation, ...]
    net_balance: Money
    credit: Money

    def line_for(self, transaction_id: int) -> LedgerLine:
        """Return the line for a transaction ID.

        Raises:
            NotFoundError: If the transaction is not part of this result
        """
        for line in self.lines:
            if line.transaction_id == transaction_id:
                return line
        raise NotFoundError(transaction_not_found(transaction_id))

    def chronological(self) -> list[LedgerLine]:
        """Lines ordered by occurrence."""
        return sorted(self.lines, key=lambda line: line.position)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass
class _Delivery:
    """Working state for one stock record while folding."""

    transaction_id: Optional[int]
    amount: Money
    applied: Money = field(default_factory=Money.zero)
    excess: Money = field(default_factory=Money.zero)
    overpaid: bool = False

    @property
    def remaining(self) -> Money:
        return self.amount - self.applied

    @property
    def status(self) -> PaymentStatus:
        if self.overpaid:
            return PaymentStatus.OVERPAID
        if self.applied.is_zero():
            return PaymentStatus.UNPAID
        if self.applied >= self.amount:
            return PaymentStatus.PAID
        return PaymentStatus.PARTIAL


@dataclass
class _Credit:
    """Unapplied payment money carried forward."""

    payment_id: Optional[int]
    remaining: Money
    delivery: Optional[_Delivery] = None


def _occurrence(txn: Transaction) -> tuple:
    return txn.sort_key


def chronological_order(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort records by occurrence time, ties broken by insertion order (ID)."""
    return sorted(transactions, key=_occurrence)


def reconcile(
    transactions: Sequence[Transaction],
    customer_id: Optional[int] = None,
    bank_accounts: Optional[Mapping[int, BankAccount]] = None,
) -> LedgerResult:
    """Reconcile one customer's transaction records.

    Args:
        transactions: The customer's records, in any order
        customer_id: Owning customer; defaults to the first record's customer
        bank_accounts: Optional map of the customer's bank accounts by ID used
            to check that bank payments reference the customer's own accounts

    Returns:
        LedgerResult with one line per input record, in input order

    Raises:
        ValidationError: If any record is malformed (whole batch rejected)
        InvariantViolation: If the batch breaks a ledger invariant
    """
    records = list(transactions)
    try:
        validate_batch(records, customer_id=customer_id, bank_accounts=bank_accounts)
    except ValueError as e:
        logger.warning("Rejected ledger batch of %d records: %s", len(records), e)
        raise

    if customer_id is None and records:
        customer_id = records[0].customer_id

    running = Money.zero()
    outstanding: deque[_Delivery] = deque()
    credits: deque[_Credit] = deque()
    deliveries: dict[int, _Delivery] = {}
    computed: dict[int, tuple[int, Money, Money]] = {}
    ordered = sorted(range(len(records)), key=lambda index: _occurrence(records[index]))
    allocations: list[Allocation] = []
    latest_delivery: Optional[_Delivery] = None

    for position, index in enumerate(ordered):
        txn = records[index]
        contribution = txn.contribution
        running = running + contribution
        computed[index] = (position, contribution, running)

        if txn.is_stock:
            delivery = _Delivery(transaction_id=txn.id, amount=txn.amount)
            deliveries[index] = delivery
            latest_delivery = delivery
            while credits and delivery.remaining.is_positive():
                credit = credits[0]
                applied = min(credit.remaining, delivery.remaining)
                delivery.applied = delivery.applied + applied
                credit.remaining = credit.remaining - applied
                if credit.delivery is not None:
                    credit.delivery.excess = credit.delivery.excess - applied
                allocations.append(Allocation(credit.payment_id, txn.id, applied))
                if credit.remaining.is_zero():
                    credits.popleft()
            if delivery.remaining.is_positive():
                outstanding.append(delivery)
            continue

        remaining = txn.amount
        while outstanding and remaining.is_positive():
            delivery = outstanding[0]
            applied = min(remaining, delivery.remaining)
            delivery.applied = delivery.applied + applied
            remaining = remaining - applied
            allocations.append(Allocation(txn.id, delivery.transaction_id, applied))
            if not delivery.remaining.is_positive():
                outstanding.popleft()
        if remaining.is_positive():
            credits.append(_Credit(payment_id=txn.id, remaining=remaining, delivery=latest_delivery))
            if latest_delivery is not None:
                latest_delivery.excess = latest_delivery.excess + remaining
                latest_delivery.overpaid = True

    total_outstanding = Money.total(delivery.remaining for delivery in outstanding)
    total_credit = Money.total(credit.remaining for credit in credits)
    if total_outstanding - total_credit != running:
        raise InvariantViolation(
            f"Ledger for customer {customer_id} does not balance: outstanding "
            f"{total_outstanding} minus credit {total_credit} != net {running}"
        )

    lines = []
    for index, txn in enumerate(records):
        position, contribution, balance = computed[index]
        delivery = deliveries.get(index)
        lines.append(
            LedgerLine(
                transaction_id=txn.id,
                kind=txn.kind,
                position=position,
                contribution=contribution,
                running_balance=balance,
                payment_status=delivery.status if delivery else None,
                outstanding=delivery.remaining if delivery else Money.zero(),
                excess=delivery.excess if delivery else Money.zero(),
            )
        )

    logger.debug(
        "Reconciled %d records for customer %s: net %s, credit %s",
        len(records),
        customer_id,
        running,
        total_credit,
    )
    return LedgerResult(
        customer_id=customer_id,
        lines=tuple(lines),
        allocations=tuple(allocations),
        net_balance=running,
        credit=total_credit,
    )
