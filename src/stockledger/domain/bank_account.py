"""Bank account domain service."""

from typing import Optional
from stockledger.database.base import Database
from stockledger.domain.entities import BankAccount as BankAccountEntity
from stockledger.domain.errors import (
    InvariantViolation,
    NotFoundError,
    ValidationError,
    bank_account_not_found,
    bank_account_not_owned,
    customer_not_found,
)
from stockledger.logging_setup import get_logger

logger = get_logger(__name__)


class BankAccountService:
    """Service for managing customer bank accounts."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_bank_account(
        self,
        customer_id: int,
        account_holder_name: str,
        bank_name: str,
        account_number: str,
        ifsc_code: Optional[str] = None,
        make_default: bool = False,
    ) -> int:
        """Add a bank account to a customer.

        The customer's first account always becomes the default.

        Args:
            customer_id: Owning customer ID
            account_holder_name: Name on the account
            bank_name: Bank name
            account_number: Account number
            ifsc_code: Optional IFSC code
            make_default: Make this the customer's default account

        Returns:
            Bank account ID

        Raises:
            NotFoundError: If customer not found
            ValidationError: If a required field is blank
        """
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        fields = {
            "Account holder name": account_holder_name,
            "Bank name": bank_name,
            "Account number": account_number,
        }
        for label, value in fields.items():
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")

        is_first = not self.db.list_bank_accounts(customer_id)
        ifsc_code = ifsc_code.strip().upper() if ifsc_code and ifsc_code.strip() else None

        account_id = self.db.create_bank_account(
            customer_id=customer_id,
            account_holder_name=account_holder_name.strip(),
            bank_name=bank_name.strip(),
            account_number=account_number.strip(),
            ifsc_code=ifsc_code,
            is_default=make_default or is_first,
        )
        logger.info("Added bank account %s for customer %s", account_id, customer_id)
        return account_id

    def get_bank_account(self, account_id: int) -> Optional[BankAccountEntity]:
        """Get bank account by ID.

        Args:
            account_id: Bank account ID

        Returns:
            Bank account entity or None if not found
        """
        return self.db.get_bank_account(account_id)

    def list_bank_accounts(self, customer_id: int) -> list[BankAccountEntity]:
        """List a customer's bank accounts, default first."""
        return self.db.list_bank_accounts(customer_id)

    def get_default_bank_account(self, customer_id: int) -> Optional[BankAccountEntity]:
        """Get the customer's default bank account, if any."""
        for account in self.db.list_bank_accounts(customer_id):
            if account.is_default:
                return account
        return None

    def set_default(self, customer_id: int, account_id: int) -> None:
        """Make an account the customer's default.

        Raises:
            NotFoundError: If the account does not exist
            InvariantViolation: If the account belongs to another customer
        """
        account = self.db.get_bank_account(account_id)
        if account is None:
            raise NotFoundError(bank_account_not_found(account_id))
        if account.customer_id != customer_id:
            raise InvariantViolation(bank_account_not_owned(account_id, customer_id))

        self.db.set_default_bank_account(customer_id, account_id)
        logger.info("Bank account %s is now the default for customer %s", account_id, customer_id)
