"""Validation rules for transaction records."""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from stockledger.domain.entities import (
    BankAccount,
    PaymentMethod,
    QualityCategory,
    Transaction,
    TransactionKind,
)
from stockledger.domain.errors import (
    InvariantViolation,
    ValidationError,
    bank_account_not_found,
    bank_account_not_owned,
    describe_record,
)

_STOCK_ONLY_FIELDS = ("quality_category", "quantity", "unit_rate")
_PAYMENT_ONLY_FIELDS = ("method", "payment_amount", "external_reference", "bank_account_id")


def _fail(txn: Transaction, message: str) -> ValidationError:
    return ValidationError(f"{describe_record(txn.id)}: {message}", record_id=txn.id)


def _require_positive(txn: Transaction, value: Optional[Decimal], field: str) -> None:
    if value is None:
        raise _fail(txn, f"{field} is required")
    if isinstance(value, float) or not isinstance(value, Decimal):
        raise _fail(txn, f"{field} must be a Decimal, got {type(value).__name__}")
    if not value.is_finite() or value <= 0:
        raise _fail(txn, f"{field} must be greater than zero, got {value}")


def _reject_fields(txn: Transaction, fields: tuple[str, ...], kind_label: str) -> None:
    for field in fields:
        if getattr(txn, field) is not None:
            raise _fail(txn, f"{kind_label} records cannot have {field}")


def validate_transaction(
    txn: Transaction,
    bank_accounts: Optional[Mapping[int, BankAccount]] = None,
) -> None:
    """Validate a single transaction record.

    Args:
        txn: Record to check
        bank_accounts: Optional map of bank account ID to account; when given,
            bank transfer payments must reference an account of the same customer

    Raises:
        ValidationError: If the record is malformed
        InvariantViolation: If the record references another customer's account
    """
    if not isinstance(txn.kind, TransactionKind):
        raise _fail(txn, f"unknown transaction kind {txn.kind!r}")

    if txn.kind is TransactionKind.STOCK:
        if not isinstance(txn.quality_category, QualityCategory):
            raise _fail(txn, f"unknown quality category {txn.quality_category!r}")
        _require_positive(txn, txn.quantity, "quantity")
        _require_positive(txn, txn.unit_rate, "rate")
        _reject_fields(txn, _PAYMENT_ONLY_FIELDS, "Stock")
        return

    _reject_fields(txn, _STOCK_ONLY_FIELDS, "Payment")
    if not isinstance(txn.method, PaymentMethod):
        raise _fail(txn, f"unknown payment method {txn.method!r}")
    _require_positive(txn, txn.payment_amount, "amount")

    has_reference = bool(txn.external_reference and txn.external_reference.strip())
    if txn.method.requires_reference and not has_reference:
        raise _fail(txn, f"{txn.method.value} payments require a transaction reference")
    if not txn.method.requires_reference and txn.external_reference is not None:
        raise _fail(txn, f"{txn.method.value} payments cannot have a transaction reference")

    if txn.method.requires_bank_account:
        if txn.bank_account_id is None:
            raise _fail(txn, "bank payments require a bank account")
    elif txn.bank_account_id is not None:
        raise _fail(txn, f"{txn.method.value} payments cannot reference a bank account")

    if bank_accounts is not None and txn.bank_account_id is not None:
        account = bank_accounts.get(txn.bank_account_id)
        if account is None:
            raise InvariantViolation(
                f"{describe_record(txn.id)}: {bank_account_not_found(txn.bank_account_id)}",
                record_id=txn.id,
            )
        if account.customer_id != txn.customer_id:
            raise InvariantViolation(
                f"{describe_record(txn.id)}: "
                f"{bank_account_not_owned(txn.bank_account_id, txn.customer_id)}",
                record_id=txn.id,
            )


def validate_batch(
    transactions: Iterable[Transaction],
    customer_id: Optional[int] = None,
    bank_accounts: Optional[Mapping[int, BankAccount]] = None,
) -> None:
    """Validate every record of a single customer's batch.

    The first failure rejects the whole batch.

    Args:
        transactions: Records to check
        customer_id: Expected owner; defaults to the first record's customer
        bank_accounts: Optional bank account map, see ``validate_transaction``

    Raises:
        ValidationError: If any record is malformed
        InvariantViolation: If records mix customers, repeat an ID or
            reference a foreign bank account
    """
    seen_ids: set[int] = set()
    expected_customer = customer_id
    for txn in transactions:
        if expected_customer is None:
            expected_customer = txn.customer_id
        if txn.customer_id != expected_customer:
            raise InvariantViolation(
                f"{describe_record(txn.id)} belongs to customer {txn.customer_id}, "
                f"not customer {expected_customer}",
                record_id=txn.id,
            )
        if txn.id is not None:
            if txn.id in seen_ids:
                raise InvariantViolation(
                    f"{describe_record(txn.id)} appears more than once", record_id=txn.id
                )
            seen_ids.add(txn.id)
        validate_transaction(txn, bank_accounts)
