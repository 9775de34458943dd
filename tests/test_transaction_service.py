"""Tests for recording transactions."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from stockledger.domain.entities import PaymentMethod, QualityCategory, StockItem, TransactionKind
from stockledger.domain.errors import InvariantViolation, NotFoundError, ValidationError

WHEN = datetime(2024, 1, 15, 10, 30)


def _item(quantity="10", rate="5", category=QualityCategory.TYPE_1):
    return StockItem(category, Decimal(quantity), Decimal(rate))


class TestRecordStock:
    """Tests for stock deliveries."""

    def test_record_single_item(self, transaction_service, sample_customer):
        ids = transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=WHEN, notes="Truck 4")
        assert len(ids) == 1

        txn = transaction_service.get_transaction(ids[0])
        assert txn.kind is TransactionKind.STOCK
        assert txn.quality_category is QualityCategory.TYPE_1
        assert txn.quantity == Decimal("10")
        assert txn.unit_rate == Decimal("5")
        assert txn.occurred_at == WHEN
        assert txn.notes == "Truck 4"

    def test_record_multiple_items_in_order(self, transaction_service, sample_customer):
        ids = transaction_service.record_stock(
            sample_customer.id,
            [_item("10", "5"), _item("2", "25", QualityCategory.TYPE_2)],
            occurred_at=WHEN,
        )
        assert ids == sorted(ids)
        categories = [transaction_service.get_transaction(i).quality_category for i in ids]
        assert categories == [QualityCategory.TYPE_1, QualityCategory.TYPE_2]

    def test_invalid_item_rejects_whole_delivery(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="quantity"):
            transaction_service.record_stock(
                sample_customer.id, [_item("10", "5"), _item("0", "5")], occurred_at=WHEN
            )
        assert transaction_service.list_transactions(customer_id=sample_customer.id) == []

    def test_no_items(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="at least one item"):
            transaction_service.record_stock(sample_customer.id, [], occurred_at=WHEN)

    def test_unknown_customer(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.record_stock(999, [_item()], occurred_at=WHEN)

    def test_occurred_at_needs_time(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="occurred_at"):
            transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=date(2024, 1, 15))

    def test_too_many_decimal_places(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="rate allows at most 2"):
            transaction_service.record_stock(sample_customer.id, [_item("1", "5.125")], occurred_at=WHEN)
        with pytest.raises(ValidationError, match="quantity allows at most 3"):
            transaction_service.record_stock(sample_customer.id, [_item("1.0005", "5")], occurred_at=WHEN)

    def test_trailing_zeros_allowed(self, transaction_service, sample_customer):
        ids = transaction_service.record_stock(sample_customer.id, [_item("1.5000", "5.500")], occurred_at=WHEN)
        assert transaction_service.get_transaction(ids[0]).unit_rate == Decimal("5.5")


class TestRecordPayment:
    """Tests for payments."""

    def test_cash_payment(self, transaction_service, sample_customer):
        txn_id = transaction_service.record_payment(
            sample_customer.id, PaymentMethod.CASH, Decimal("75"), occurred_at=WHEN
        )
        txn = transaction_service.get_transaction(txn_id)
        assert txn.kind is TransactionKind.PAYMENT
        assert txn.method is PaymentMethod.CASH
        assert txn.payment_amount == Decimal("75")
        assert txn.external_reference is None

    def test_upi_requires_reference(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="reference"):
            transaction_service.record_payment(
                sample_customer.id, PaymentMethod.UPI, Decimal("10"), occurred_at=WHEN
            )

    def test_bank_payment(self, transaction_service, sample_customer, sample_bank_account):
        txn_id = transaction_service.record_payment(
            sample_customer.id,
            PaymentMethod.BANK,
            Decimal("500"),
            occurred_at=WHEN,
            external_reference="NEFT123",
            bank_account_id=sample_bank_account.id,
        )
        txn = transaction_service.get_transaction(txn_id)
        assert txn.bank_account_id == sample_bank_account.id
        assert txn.external_reference == "NEFT123"

    def test_bank_transfer_without_account_rejected(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="bank account"):
            transaction_service.record_payment(
                sample_customer.id,
                PaymentMethod.BANK,
                Decimal("500"),
                occurred_at=WHEN,
                external_reference="NEFT123",
            )

    def test_other_customers_bank_account_rejected(
        self, transaction_service, customer_service, bank_account_service, sample_customer
    ):
        other = customer_service.create_customer(name="Other", phone_number="1")
        foreign = bank_account_service.add_bank_account(other, "Other", "Bank", "555")
        with pytest.raises(InvariantViolation, match="does not belong"):
            transaction_service.record_payment(
                sample_customer.id,
                PaymentMethod.BANK,
                Decimal("500"),
                occurred_at=WHEN,
                external_reference="NEFT123",
                bank_account_id=foreign,
            )

    def test_negative_amount_rejected(self, transaction_service, sample_customer):
        with pytest.raises(ValidationError, match="greater than zero"):
            transaction_service.record_payment(
                sample_customer.id, PaymentMethod.CASH, Decimal("-5"), occurred_at=WHEN
            )


class TestListeners:
    """Tests for post-commit notification."""

    def test_listener_called_after_commit(self, transaction_service, sample_customer, temp_db):
        seen = []

        def listener(customer_id):
            # The write is already visible when listeners run
            seen.append((customer_id, len(temp_db.list_transactions(customer_id=customer_id))))

        transaction_service.subscribe(listener)
        transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=WHEN)
        assert seen == [(sample_customer.id, 1)]

    def test_listener_not_called_on_rejection(self, transaction_service, sample_customer):
        seen = []
        transaction_service.subscribe(seen.append)
        with pytest.raises(ValidationError):
            transaction_service.record_stock(sample_customer.id, [_item("0")], occurred_at=WHEN)
        assert seen == []

    def test_failing_listener_does_not_fail_write(self, transaction_service, sample_customer):
        seen = []

        def broken(customer_id):
            raise RuntimeError("recompute failed")

        transaction_service.subscribe(broken)
        transaction_service.subscribe(seen.append)

        txn_id = transaction_service.record_payment(
            sample_customer.id, PaymentMethod.CASH, Decimal("75"), occurred_at=WHEN
        )

        assert transaction_service.get_transaction(txn_id) is not None
        assert len(transaction_service.list_transactions(customer_id=sample_customer.id)) == 1
        # Later listeners still run
        assert seen == [sample_customer.id]

    def test_unsubscribe(self, transaction_service, sample_customer):
        seen = []
        transaction_service.subscribe(seen.append)
        transaction_service.unsubscribe(seen.append)
        transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=WHEN)
        assert seen == []


class TestQueries:
    """Tests for reading transactions back."""

    def test_list_filters(self, transaction_service, sample_customer):
        transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=datetime(2024, 1, 10, 9))
        transaction_service.record_payment(
            sample_customer.id, PaymentMethod.CASH, Decimal("20"), occurred_at=datetime(2024, 1, 20, 18)
        )

        assert len(transaction_service.list_transactions(customer_id=sample_customer.id)) == 2
        payments = transaction_service.list_transactions(kind=TransactionKind.PAYMENT)
        assert [t.payment_amount for t in payments] == [Decimal("20")]
        in_range = transaction_service.list_transactions(
            start_date=date(2024, 1, 20), end_date=date(2024, 1, 20)
        )
        assert [t.kind for t in in_range] == [TransactionKind.PAYMENT]

    def test_list_is_chronological(self, transaction_service, sample_customer):
        late = transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=datetime(2024, 2, 1))
        early = transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=datetime(2024, 1, 1))
        ids = [t.id for t in transaction_service.list_transactions(customer_id=sample_customer.id)]
        assert ids == early + late

    def test_search(self, transaction_service, sample_customer):
        transaction_service.record_payment(
            sample_customer.id,
            PaymentMethod.UPI,
            Decimal("10"),
            occurred_at=WHEN,
            external_reference="UPI-778899",
        )
        transaction_service.record_stock(sample_customer.id, [_item()], occurred_at=WHEN, notes="festival order")
        assert len(transaction_service.search_transactions("778899")) == 1
        assert len(transaction_service.search_transactions("FESTIVAL")) == 1
        assert len(transaction_service.search_transactions("type 1")) == 1
        assert transaction_service.search_transactions(" ") == []

    def test_require_transaction(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.require_transaction(404)
