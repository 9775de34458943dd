"""Domain model entities for stockledger.

These are pure data classes representing business concepts, independent of
database schema. Transaction records are append-only: once recorded they are
never edited, so every entity here is frozen.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from stockledger.domain.errors import ValidationError, describe_record
from stockledger.domain.money import Money


class TransactionKind(str, Enum):
    """Kind of ledger event."""

    STOCK = "stock"
    PAYMENT = "payment"


class QualityCategory(str, Enum):
    """Quality grade of delivered stock."""

    TYPE_1 = "Type 1"
    TYPE_2 = "Type 2"
    TYPE_3 = "Type 3"


class PaymentMethod(str, Enum):
    """How a payment was received."""

    CASH = "cash"
    BANK = "bank"
    UPI = "upi"

    @property
    def requires_reference(self) -> bool:
        """Bank transfers and UPI payments carry an external reference."""
        return self in (PaymentMethod.BANK, PaymentMethod.UPI)

    @property
    def requires_bank_account(self) -> bool:
        return self is PaymentMethod.BANK


class PaymentStatus(str, Enum):
    """How much of a stock delivery has been offset by payments."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
    OVERPAID = "overpaid"


@dataclass(frozen=True)
class Customer:
    """Customer domain entity."""

    id: int
    name: str
    phone_number: str
    created_at: datetime
    email: Optional[str] = None
    address: Optional[str] = None
    company_name: Optional[str] = None
    pan_number: Optional[str] = None
    gst_number: Optional[str] = None
    aadhaar_number: Optional[str] = None

    @property
    def tax_identifier(self) -> Optional[str]:
        """GST number when present, otherwise PAN."""
        return self.gst_number or self.pan_number


@dataclass(frozen=True)
class BankAccount:
    """Bank account owned by a single customer."""

    id: int
    customer_id: int
    account_holder_name: str
    bank_name: str
    account_number: str
    ifsc_code: Optional[str]
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class StockItem:
    """One line of a stock delivery before it is recorded."""

    quality_category: QualityCategory
    quantity: Decimal
    unit_rate: Decimal


@dataclass(frozen=True)
class Transaction:
    """Transaction record: a stock delivery or a payment.

    Stock records carry ``quality_category``, ``quantity`` and ``unit_rate``;
    their amount is always ``quantity * unit_rate``. Payment records carry
    ``method`` and ``payment_amount`` plus the method-specific reference
    fields. ``id`` is None for records that have not been stored yet.
    """

    id: Optional[int]
    customer_id: int
    kind: TransactionKind
    occurred_at: datetime
    quality_category: Optional[QualityCategory] = None
    quantity: Optional[Decimal] = None
    unit_rate: Optional[Decimal] = None
    method: Optional[PaymentMethod] = None
    payment_amount: Optional[Decimal] = None
    external_reference: Optional[str] = None
    bank_account_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def stock(
        cls,
        id: Optional[int],
        customer_id: int,
        occurred_at: datetime,
        quality_category: QualityCategory,
        quantity: Decimal,
        unit_rate: Decimal,
        notes: Optional[str] = None,
    ) -> "Transaction":
        """Build a stock delivery record."""
        return cls(
            id=id,
            customer_id=customer_id,
            kind=TransactionKind.STOCK,
            occurred_at=occurred_at,
            quality_category=quality_category,
            quantity=quantity,
            unit_rate=unit_rate,
            notes=notes,
        )

    @classmethod
    def payment(
        cls,
        id: Optional[int],
        customer_id: int,
        occurred_at: datetime,
        method: PaymentMethod,
        amount: Decimal,
        external_reference: Optional[str] = None,
        bank_account_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> "Transaction":
        """Build a payment record."""
        return cls(
            id=id,
            customer_id=customer_id,
            kind=TransactionKind.PAYMENT,
            occurred_at=occurred_at,
            method=method,
            payment_amount=amount,
            external_reference=external_reference,
            bank_account_id=bank_account_id,
            notes=notes,
        )

    @property
    def is_stock(self) -> bool:
        return self.kind is TransactionKind.STOCK

    @property
    def is_payment(self) -> bool:
        return self.kind is TransactionKind.PAYMENT

    @property
    def amount(self) -> Money:
        """Monetary value of the record, always positive for valid records."""
        if self.is_stock:
            if self.quantity is None or self.unit_rate is None:
                raise ValidationError(
                    f"{describe_record(self.id)}: stock record needs quantity and rate",
                    record_id=self.id,
                )
            return Money(self.unit_rate) * self.quantity
        if self.payment_amount is None:
            raise ValidationError(
                f"{describe_record(self.id)}: payment record needs an amount",
                record_id=self.id,
            )
        return Money(self.payment_amount)

    @property
    def contribution(self) -> Money:
        """Signed effect on what the customer owes."""
        if self.is_stock:
            return self.amount
        return -self.amount

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Chronological order, ties broken by insertion order."""
        return (self.occurred_at, self.id if self.id is not None else 0)
