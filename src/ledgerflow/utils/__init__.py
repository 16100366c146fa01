"""Utility functions for ledgerflow."""

from ledgerflow.utils.amount_parser import parse_amount, parse_lenient_amount
from ledgerflow.utils.client_resolver import resolve_client

__all__ = ["parse_amount", "parse_lenient_amount", "resolve_client"]
