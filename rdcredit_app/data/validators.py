"""
Input validation for credit calculation requests.

Rejects malformed expense and filer-history input before any arithmetic
runs, so every later stage works on finite, non-negative Decimals.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..errors import ErrorKind, ValidationError
from ..utils.money import parse_amount
from .models import EXPENSE_FIELDS, ExpenseInput, FilerHistory, FilerStatus

# camelCase names used by the calculator front end
FIELD_ALIASES = {
    "is_first_time_filer": "isFirstTimeFiler",
    "prior_three_year_average_qre": "priorThreeYearAverageQRE",
}

NO_QUALIFYING_EXPENSES_WARNING = "No qualifying R&D expenses were entered"
HIGH_CONTRACTOR_COSTS_WARNING = (
    "Contractor costs exceed wages; ensure contract research is properly documented"
)


class InputValidator:
    """Validates and normalizes raw calculator input."""

    def validate_expenses(self, raw: Union[ExpenseInput, Mapping[str, Any]]) -> ExpenseInput:
        """
        Validate expense input.

        Fields are checked in a fixed order and the first failure wins.

        Args:
            raw: ExpenseInput or mapping with wages, contractors, supplies, cloud

        Returns:
            ExpenseInput carrying the same values as Decimals

        Raises:
            ValidationError: MISSING_FIELD, NON_NUMERIC or NEGATIVE_VALUE
        """
        if isinstance(raw, ExpenseInput):
            raw = {name: getattr(raw, name) for name in EXPENSE_FIELDS}

        if not isinstance(raw, Mapping):
            raise ValidationError(
                ErrorKind.MISSING_FIELD,
                "Expense input is required",
                field="expenses",
            )

        values = {name: self._amount(raw, name) for name in EXPENSE_FIELDS}
        return ExpenseInput(**values)

    def validate_history(self, raw: Union[FilerHistory, Mapping[str, Any]]) -> FilerHistory:
        """
        Validate filer history.

        A repeat filer without a prior-year average passes here; that
        requirement belongs to the rate resolver.

        Raises:
            ValidationError: MISSING_FIELD for an absent or non-boolean
                first-time flag; NON_NUMERIC or NEGATIVE_VALUE for a bad
                prior-year average
        """
        if isinstance(raw, FilerHistory):
            raw = {
                "is_first_time_filer": raw.is_first_time_filer,
                "prior_three_year_average_qre": raw.prior_three_year_average_qre,
            }

        if not isinstance(raw, Mapping):
            raise ValidationError(
                ErrorKind.MISSING_FIELD,
                "Filer history is required",
                field="history",
            )

        first_time = _lookup(raw, "is_first_time_filer")
        if not isinstance(first_time, bool):
            raise ValidationError(
                ErrorKind.MISSING_FIELD,
                "is_first_time_filer must be provided as true or false",
                field="is_first_time_filer",
                context={"value": repr(first_time)},
            )

        prior_average: Optional[Decimal] = None
        if _lookup(raw, "prior_three_year_average_qre") is not None:
            prior_average = self._amount(raw, "prior_three_year_average_qre")

        status = FilerStatus.FIRST_TIME if first_time else FilerStatus.REPEAT
        return FilerHistory(status=status, prior_three_year_average_qre=prior_average)

    def _amount(self, raw: Mapping[str, Any], name: str) -> Decimal:
        """Coerce one monetary field to a finite, non-negative Decimal."""
        return parse_amount(_lookup(raw, name), name)

    def expense_warnings(self, expenses: ExpenseInput) -> tuple[str, ...]:
        """Advisory notices for unusual but valid expense patterns."""
        warnings = []

        if not any(getattr(expenses, name) > 0 for name in EXPENSE_FIELDS):
            warnings.append(NO_QUALIFYING_EXPENSES_WARNING)

        if expenses.contractors > expenses.wages:
            warnings.append(HIGH_CONTRACTOR_COSTS_WARNING)

        return tuple(warnings)


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    """Read a field by its snake_case name or its front-end alias."""
    if name in raw:
        return raw[name]
    alias = FIELD_ALIASES.get(name)
    if alias is not None:
        return raw.get(alias)
    return None
