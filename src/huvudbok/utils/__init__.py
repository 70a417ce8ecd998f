"""Utility functions for huvudbok."""

from huvudbok.utils.date_parser import parse_date
from huvudbok.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
