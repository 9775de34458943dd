"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from stockledger.domain.entities import (
    BankAccount,
    Customer,
    Transaction,
    TransactionKind,
)


class Database(ABC):
    """Abstract database interface for stockledger.

    Transaction records are append-only: the interface offers no way to
    update or delete them.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(
        self,
        name: str,
        phone_number: str,
        email: Optional[str] = None,
        address: Optional[str] = None,
        company_name: Optional[str] = None,
        pan_number: Optional[str] = None,
        gst_number: Optional[str] = None,
        aadhaar_number: Optional[str] = None,
    ) -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        """List all customers ordered by name."""
        pass

    @abstractmethod
    def search_customers(self, query: str) -> list[Customer]:
        """Find customers whose name, phone, company or tax IDs contain query."""
        pass

    @abstractmethod
    def find_customer_by_tax_identifier(
        self, pan_number: Optional[str] = None, gst_number: Optional[str] = None
    ) -> Optional[Customer]:
        """Find a customer holding the given PAN or GST number."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        customer_id: int,
        account_holder_name: str,
        bank_name: str,
        account_number: str,
        ifsc_code: Optional[str] = None,
        is_default: bool = False,
    ) -> int:
        """Create a bank account. Returns account ID.

        When ``is_default`` is set, the customer's previous default is
        cleared in the same database transaction.
        """
        pass

    @abstractmethod
    def get_bank_account(self, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self, customer_id: int) -> list[BankAccount]:
        """List a customer's bank accounts, default first."""
        pass

    @abstractmethod
    def set_default_bank_account(self, customer_id: int, account_id: int) -> None:
        """Make an account the customer's only default, atomically."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transactions(self, customer_id: int, transactions: Sequence[Transaction]) -> list[int]:
        """Append records for one customer atomically. Returns new IDs in order.

        Writes for the same customer are serialized.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        customer_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
    ) -> list[Transaction]:
        """List transactions in chronological order (occurred_at, then ID).

        Args:
            customer_id: Optional customer filter
            start_date: Optional inclusive start date filter
            end_date: Optional inclusive end date filter
            kind: Optional transaction kind filter
        """
        pass

    @abstractmethod
    def search_transactions(self, query: str) -> list[Transaction]:
        """Find transactions whose notes, reference or category match query."""
        pass
