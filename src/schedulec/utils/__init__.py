"""Utility functions for schedulec."""

from schedulec.utils.date_parser import parse_date, get_date_range
from schedulec.utils.amount_parser import parse_amount, format_currency

__all__ = ["parse_date", "get_date_range", "parse_amount", "format_currency"]
