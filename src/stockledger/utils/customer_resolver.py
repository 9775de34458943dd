"""Utility for resolving customer names to IDs."""

from stockledger.domain.customer import CustomerService
from stockledger.domain.errors import NotFoundError, ValidationError


def resolve_customer(customer_service: CustomerService, customer: str | int) -> int:
    """Resolve customer name or ID to customer ID.

    Args:
        customer_service: CustomerService instance
        customer: Customer name (str) or ID (int or string representation of int)

    Returns:
        Customer ID

    Raises:
        NotFoundError: If no customer matches
        ValidationError: If the name matches more than one customer
    """
    if isinstance(customer, int):
        if customer_service.get_customer(customer) is None:
            raise NotFoundError(f"Customer ID {customer} not found")
        return customer

    # Try to parse as integer (handles string IDs like "1")
    try:
        customer_id = int(customer)
    except (ValueError, TypeError):
        customer_id = None
    if customer_id is not None:
        if customer_service.get_customer(customer_id) is None:
            raise NotFoundError(f"Customer ID {customer_id} not found")
        return customer_id

    matches = [c for c in customer_service.list_customers() if c.name == customer]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        ids = ", ".join(str(c.id) for c in matches)
        raise ValidationError(f"Customer name '{customer}' is ambiguous (IDs: {ids}); use the ID")

    raise NotFoundError(f"Customer '{customer}' not found")
