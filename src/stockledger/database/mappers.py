"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the translation of
stored strings into the domain enumerations.
"""

from stockledger.domain import entities as domain
from stockledger.database.models import (
    BankAccount as ORMBankAccount,
    Customer as ORMCustomer,
    Transaction as ORMTransaction,
)


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone_number=orm_customer.phone_number,
        created_at=orm_customer.created_at,
        email=orm_customer.email,
        address=orm_customer.address,
        company_name=orm_customer.company_name,
        pan_number=orm_customer.pan_number,
        gst_number=orm_customer.gst_number,
        aadhaar_number=orm_customer.aadhaar_number,
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        customer_id=orm_account.customer_id,
        account_holder_name=orm_account.account_holder_name,
        bank_name=orm_account.bank_name,
        account_number=orm_account.account_number,
        ifsc_code=orm_account.ifsc_code,
        is_default=orm_account.is_default,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    quality_category = None
    if orm_transaction.quality_category is not None:
        quality_category = domain.QualityCategory(orm_transaction.quality_category)
    method = None
    if orm_transaction.payment_method is not None:
        method = domain.PaymentMethod(orm_transaction.payment_method)

    return domain.Transaction(
        id=orm_transaction.id,
        customer_id=orm_transaction.customer_id,
        kind=domain.TransactionKind(orm_transaction.kind),
        occurred_at=orm_transaction.occurred_at,
        quality_category=quality_category,
        quantity=orm_transaction.quantity,
        unit_rate=orm_transaction.unit_rate,
        method=method,
        payment_amount=orm_transaction.payment_amount,
        external_reference=orm_transaction.external_reference,
        bank_account_id=orm_transaction.bank_account_id,
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
    )


def transaction_to_orm(txn: domain.Transaction) -> ORMTransaction:
    """Build a new SQLAlchemy Transaction row from a domain record."""
    return ORMTransaction(
        customer_id=txn.customer_id,
        kind=txn.kind.value,
        occurred_at=txn.occurred_at,
        quality_category=txn.quality_category.value if txn.quality_category else None,
        quantity=txn.quantity,
        unit_rate=txn.unit_rate,
        payment_method=txn.method.value if txn.method else None,
        payment_amount=txn.payment_amount,
        external_reference=txn.external_reference,
        bank_account_id=txn.bank_account_id,
        notes=txn.notes,
    )
