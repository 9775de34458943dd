"""Tests for transaction record validation."""

import pytest
from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal

from stockledger.domain.entities import BankAccount, PaymentMethod, TransactionKind
from stockledger.domain.errors import InvariantViolation, ValidationError
from stockledger.domain.validation import validate_batch, validate_transaction

from builders import at, make_payment, make_stock


def _account(account_id, customer_id):
    return BankAccount(
        id=account_id,
        customer_id=customer_id,
        account_holder_name="Holder",
        bank_name="Bank",
        account_number="000111",
        ifsc_code=None,
        is_default=True,
        created_at=datetime.now(UTC),
    )


class TestStockValidation:
    """Tests for stock record rules."""

    def test_valid_stock(self):
        validate_transaction(make_stock(1, 10, 5, at(1)))

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="quantity") as exc_info:
            validate_transaction(make_stock(7, 0, 5, at(1)))
        assert exc_info.value.record_id == 7

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError, match="rate"):
            validate_transaction(make_stock(1, 10, -5, at(1)))

    def test_float_quantity_rejected(self):
        txn = replace(make_stock(1, 10, 5, at(1)), quantity=10.0)
        with pytest.raises(ValidationError, match="Decimal"):
            validate_transaction(txn)

    def test_unknown_category_rejected(self):
        txn = replace(make_stock(1, 10, 5, at(1)), quality_category="Type 9")
        with pytest.raises(ValidationError, match="quality category"):
            validate_transaction(txn)

    def test_payment_fields_on_stock_rejected(self):
        txn = replace(make_stock(1, 10, 5, at(1)), method=PaymentMethod.CASH)
        with pytest.raises(ValidationError, match="method"):
            validate_transaction(txn)

    def test_unknown_kind_rejected(self):
        txn = replace(make_stock(1, 10, 5, at(1)), kind="refund")
        with pytest.raises(ValidationError, match="kind"):
            validate_transaction(txn)


class TestPaymentValidation:
    """Tests for payment record rules."""

    def test_valid_cash_payment(self):
        validate_transaction(make_payment(1, 100, at(1)))

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError, match="amount"):
            validate_transaction(make_payment(1, 0, at(1)))

    def test_cash_with_reference_rejected(self):
        with pytest.raises(ValidationError, match="reference"):
            validate_transaction(make_payment(1, 100, at(1), reference="ABC"))

    def test_upi_requires_reference(self):
        with pytest.raises(ValidationError, match="reference"):
            validate_transaction(make_payment(1, 100, at(1), method=PaymentMethod.UPI))
        with pytest.raises(ValidationError, match="reference"):
            validate_transaction(
                make_payment(1, 100, at(1), method=PaymentMethod.UPI, reference="   ")
            )
        validate_transaction(make_payment(1, 100, at(1), method=PaymentMethod.UPI, reference="UPI1"))

    def test_bank_transfer_without_account_rejected(self):
        txn = make_payment(3, 100, at(1), method=PaymentMethod.BANK, reference="NEFT1")
        with pytest.raises(ValidationError, match="bank account") as exc_info:
            validate_transaction(txn)
        assert exc_info.value.record_id == 3

    def test_upi_with_bank_account_rejected(self):
        txn = make_payment(
            1, 100, at(1), method=PaymentMethod.UPI, reference="UPI1", bank_account_id=4
        )
        with pytest.raises(ValidationError, match="bank account"):
            validate_transaction(txn)

    def test_stock_fields_on_payment_rejected(self):
        txn = replace(make_payment(1, 100, at(1)), quantity=Decimal("1"))
        with pytest.raises(ValidationError, match="quantity"):
            validate_transaction(txn)

    def test_bank_account_of_other_customer_is_invariant_violation(self):
        txn = make_payment(
            1, 100, at(1), method=PaymentMethod.BANK, reference="NEFT1", bank_account_id=4
        )
        with pytest.raises(InvariantViolation, match="does not belong"):
            validate_transaction(txn, bank_accounts={4: _account(4, customer_id=2)})

    def test_unknown_bank_account_is_invariant_violation(self):
        txn = make_payment(
            1, 100, at(1), method=PaymentMethod.BANK, reference="NEFT1", bank_account_id=4
        )
        with pytest.raises(InvariantViolation, match="not found"):
            validate_transaction(txn, bank_accounts={})

    def test_own_bank_account_accepted(self):
        txn = make_payment(
            1, 100, at(1), method=PaymentMethod.BANK, reference="NEFT1", bank_account_id=4
        )
        validate_transaction(txn, bank_accounts={4: _account(4, customer_id=1)})


class TestBatchValidation:
    """Tests for whole-batch checks."""

    def test_mixed_customers_rejected(self):
        batch = [make_stock(1, 1, 1, at(1)), make_payment(2, 1, at(2), customer_id=2)]
        with pytest.raises(InvariantViolation, match="belongs to customer 2"):
            validate_batch(batch)

    def test_expected_customer_enforced(self):
        with pytest.raises(InvariantViolation):
            validate_batch([make_stock(1, 1, 1, at(1))], customer_id=5)

    def test_duplicate_ids_rejected(self):
        batch = [make_stock(1, 1, 1, at(1)), make_payment(1, 1, at(2))]
        with pytest.raises(InvariantViolation, match="more than once"):
            validate_batch(batch)

    def test_unsaved_records_may_share_missing_id(self):
        validate_batch([make_stock(None, 1, 1, at(1)), make_stock(None, 2, 1, at(1))])

    def test_first_invalid_record_rejects_batch(self):
        batch = [make_stock(1, 1, 1, at(1)), make_stock(2, 0, 1, at(2))]
        with pytest.raises(ValidationError) as exc_info:
            validate_batch(batch)
        assert exc_info.value.record_id == 2

    def test_kind_enum_used(self):
        assert make_stock(1, 1, 1, at(1)).kind is TransactionKind.STOCK
