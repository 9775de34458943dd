"""Customer domain service."""

from typing import Optional
from stockledger.database.base import Database
from stockledger.domain.entities import Customer as CustomerEntity
from stockledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    customer_not_found,
    duplicate_tax_identifier,
)
from stockledger.logging_setup import get_logger

logger = get_logger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a free-text field, treating blank input as missing."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_identifier(value: Optional[str]) -> Optional[str]:
    """Normalize a PAN or GST number for storage and comparison."""
    value = _clean(value)
    return value.upper() if value else None


class CustomerService:
    """Service for managing customers."""

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a new customer.

        Args:
            name: Customer name
            phone_number: Contact phone number
            email: Optional email address
            address: Optional postal address
            company_name: Optional company name
            pan_number: Optional PAN, unique across customers
            gst_number: Optional GST number, unique across customers
            aadhaar_number: Optional Aadhaar number

        Returns:
            Customer ID

        Raises:
            ValidationError: If name or phone number is missing
            ConflictError: If another customer already has the PAN or GST number
        """
        name = _clean(name)
        phone_number = _clean(phone_number)
        if not name:
            raise ValidationError("Customer name is required")
        if not phone_number:
            raise ValidationError("Customer phone number is required")

        pan_number = _clean_identifier(pan_number)
        gst_number = _clean_identifier(gst_number)

        # Check for duplicate tax identifiers
        if pan_number:
            existing = self.db.find_customer_by_tax_identifier(pan_number=pan_number)
            if existing is not None:
                raise ConflictError(
                    duplicate_tax_identifier("PAN", pan_number, existing.name, existing.id)
                )
        if gst_number:
            existing = self.db.find_customer_by_tax_identifier(gst_number=gst_number)
            if existing is not None:
                raise ConflictError(
                    duplicate_tax_identifier("GST number", gst_number, existing.name, existing.id)
                )

        customer_id = self.db.create_customer(
            name=name,
            phone_number=phone_number,
            email=_clean(email),
            address=_clean(address),
            company_name=_clean(company_name),
            pan_number=pan_number,
            gst_number=gst_number,
            aadhaar_number=_clean(aadhaar_number),
        )
        logger.info("Created customer %s (%s)", customer_id, name)
        return customer_id

    def get_customer(self, customer_id: int) -> Optional[CustomerEntity]:
        """Get customer by ID.

        Args:
            customer_id: Customer ID

        Returns:
            Customer entity or None if not found
        """
        return self.db.get_customer(customer_id)

    def require_customer(self, customer_id: int) -> CustomerEntity:
        """Get customer by ID, failing if it does not exist.

        Raises:
            NotFoundError: If customer not found
        """
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer

    def list_customers(self) -> list[CustomerEntity]:
        """List all customers.

        Returns:
            List of customer entities ordered by name
        """
        return self.db.list_customers()

    def search_customers(self, query: str) -> list[CustomerEntity]:
        """Search customers by name, phone, company, PAN or GST number.

        An empty query returns every customer.
        """
        query = query.strip()
        if not query:
            return self.db.list_customers()
        return self.db.search_customers(query)
