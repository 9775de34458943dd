"""Shared pytest fixtures for stockledger tests."""

import tempfile
import os
import pytest

from stockledger.database.factories import create_sqlite_database
from stockledger.domain.bank_account import BankAccountService
from stockledger.domain.customer import CustomerService
from stockledger.domain.ledger_service import LedgerService
from stockledger.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def bank_account_service(temp_db):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def ledger_service(temp_db, transaction_service):
    """Create a LedgerService subscribed to the transaction service."""
    return LedgerService(temp_db, transaction_service)


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(
        name="Ravi Traders", phone_number="9876543210", pan_number="ABCDE1234F"
    )
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_bank_account(bank_account_service, sample_customer):
    """Create a default bank account for the sample customer."""
    account_id = bank_account_service.add_bank_account(
        customer_id=sample_customer.id,
        account_holder_name="Ravi Kumar",
        bank_name="State Bank",
        account_number="1234567890",
        ifsc_code="SBIN0000001",
    )
    return bank_account_service.get_bank_account(account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
