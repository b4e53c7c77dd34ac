"""Request data models and input validation."""

from .models import ExpenseInput, FilerHistory, FilerStatus, EXPENSE_FIELDS
from .validators import InputValidator

__all__ = [
    "EXPENSE_FIELDS",
    "ExpenseInput",
    "FilerHistory",
    "FilerStatus",
    "InputValidator",
]
