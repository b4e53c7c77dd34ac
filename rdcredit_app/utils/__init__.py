"""Utility modules for the R&D credit engine."""

from .money import (
    CENT,
    MAX_AMOUNT,
    WHOLE_DOLLAR,
    format_currency,
    parse_amount,
    round_cents,
    round_whole,
    to_decimal,
)

__all__ = [
    "CENT",
    "MAX_AMOUNT",
    "WHOLE_DOLLAR",
    "format_currency",
    "parse_amount",
    "round_cents",
    "round_whole",
    "to_decimal",
]
