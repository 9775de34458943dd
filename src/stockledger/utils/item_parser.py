"""Parsing of quality categories and stock item strings."""

import re

from stockledger.domain.entities import QualityCategory, StockItem
from stockledger.utils.amount_parser import parse_amount

_CATEGORY_PATTERN = re.compile(r"^(?:type\s*)?([0-9]+)$", re.IGNORECASE)


def parse_quality_category(text: str) -> QualityCategory:
    """Parse a quality category such as "Type 1", "type1" or "1".

    Raises:
        ValueError: If the text names no known category
    """
    match = _CATEGORY_PATTERN.match(text.strip())
    if match:
        candidate = f"Type {int(match.group(1))}"
        for category in QualityCategory:
            if category.value == candidate:
                return category

    choices = ", ".join(c.value for c in QualityCategory)
    raise ValueError(f"Unknown quality category '{text}' (expected one of: {choices})")


def parse_stock_item(text: str) -> StockItem:
    """Parse a ``CATEGORY:QUANTITY:RATE`` item, e.g. ``"Type 1:10:5.50"``.

    Raises:
        ValueError: If the item is malformed
    """
    parts = text.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Invalid item '{text}': expected CATEGORY:QUANTITY:RATE")

    category, quantity, rate = parts
    return StockItem(
        quality_category=parse_quality_category(category),
        quantity=parse_amount(quantity),
        unit_rate=parse_amount(rate),
    )
