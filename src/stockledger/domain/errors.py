"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Malformed transaction record or invalid input.

    ``record_id`` names the offending transaction when it has one.
    """

    def __init__(self, message: str, record_id: Optional[int] = None):
        super().__init__(message)
        self.record_id = record_id


class InvariantViolation(DomainError):
    """Ledger data breaks an invariant that must never be coerced."""

    def __init__(self, message: str, record_id: Optional[int] = None):
        super().__init__(message)
        self.record_id = record_id


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def describe_record(record_id: Optional[int]) -> str:
    """Return a label for a transaction record in messages."""
    if record_id is None:
        return "New transaction"
    return f"Transaction {record_id}"


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def bank_account_not_found(account_id: int) -> str:
    """Return message for missing bank account."""
    return f"Bank account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def bank_account_not_owned(account_id: int, customer_id: int) -> str:
    """Return message when a bank account belongs to another customer."""
    return f"Bank account {account_id} does not belong to customer {customer_id}"


def duplicate_tax_identifier(label: str, value: str, customer_name: str, customer_id: int) -> str:
    """Return message for a PAN or GST number already on file."""
    return (
        f"A customer with {label} '{value}' already exists: "
        f"{customer_name} (ID: {customer_id})"
    )
