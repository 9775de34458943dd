"""Utility functions for stockledger."""

from stockledger.utils.date_parser import parse_date, parse_datetime
from stockledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "parse_amount"]
