"""Balance summary built from a reconciled ledger."""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from stockledger.domain.entities import BankAccount, Transaction, TransactionKind
from stockledger.domain.ledger import LedgerResult, reconcile
from stockledger.domain.money import Money

DUE = "Due"
ADVANCE = "Advance"
SETTLED = "Settled"


@dataclass(frozen=True)
class BalanceSummary:
    """Summary shown on every customer screen.

    ``net_balance`` is the authoritative figure (sum of stock amounts minus
    sum of payments). ``total_pending`` and ``total_paid`` are breakdowns for
    display and do not reconstruct it.
    """

    total_pending: Money
    total_paid: Money
    net_balance: Money

    @classmethod
    def empty(cls) -> "BalanceSummary":
        return cls(Money.zero(), Money.zero(), Money.zero())

    @property
    def is_advance(self) -> bool:
        return self.net_balance.is_negative()

    @property
    def label(self) -> str:
        if self.net_balance.is_positive():
            return DUE
        if self.net_balance.is_negative():
            return ADVANCE
        return SETTLED

    def project(self, contribution: Money) -> Money:
        """Net balance after a prospective transaction's signed contribution."""
        return self.net_balance + contribution

    def to_dict(self) -> dict[str, object]:
        """Serialize using the field names collaborators expect."""
        return {
            "total_pending": self.total_pending.format(grouping=False),
            "total_paid": self.total_paid.format(grouping=False),
            "net_balance": self.net_balance.format(grouping=False),
            "is_advance": self.is_advance,
        }


def summarize(result: LedgerResult) -> BalanceSummary:
    """Build the balance summary for a reconciled ledger."""
    pending = Money.total(
        line.outstanding for line in result.lines if line.kind is TransactionKind.STOCK
    )
    paid = Money.total(
        -line.contribution for line in result.lines if line.kind is TransactionKind.PAYMENT
    )
    return BalanceSummary(
        total_pending=pending,
        total_paid=paid,
        net_balance=result.net_balance,
    )


def compute_balance(
    transactions: Sequence[Transaction],
    customer_id: Optional[int] = None,
    bank_accounts: Optional[Mapping[int, BankAccount]] = None,
) -> BalanceSummary:
    """Reconcile records and summarize them in one step."""
    return summarize(reconcile(transactions, customer_id=customer_id, bank_accounts=bank_accounts))
