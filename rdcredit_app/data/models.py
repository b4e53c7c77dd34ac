"""
Canonical request models for a credit calculation.

These are immutable value objects built once per request from validated
input and passed by value through every calculation stage.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from ..utils.money import Number, parse_amount, to_decimal

# Order in which expense fields are validated and reported
EXPENSE_FIELDS = ("wages", "contractors", "supplies", "cloud")


@dataclass(frozen=True)
class ExpenseInput:
    """Categorized annual R&D spend."""
    wages: Decimal         # Wages paid for qualified services
    contractors: Decimal   # Contract research spend before the inclusion limit
    supplies: Decimal      # Supplies consumed in research
    cloud: Decimal         # Cloud computing costs, a category of its own


class FilerStatus(str, Enum):
    """Which ASC branch a filer falls into."""
    FIRST_TIME = "first_time"
    REPEAT = "repeat"


@dataclass(frozen=True)
class FilerHistory:
    """Filer history deciding the ASC rate and base-amount rule."""
    status: FilerStatus
    prior_three_year_average_qre: Optional[Decimal] = None

    @property
    def is_first_time_filer(self) -> bool:
        return self.status is FilerStatus.FIRST_TIME

    @classmethod
    def first_time(cls) -> "FilerHistory":
        return cls(status=FilerStatus.FIRST_TIME)

    @classmethod
    def repeat(cls, prior_three_year_average_qre: Number) -> "FilerHistory":
        return cls(
            status=FilerStatus.REPEAT,
            prior_three_year_average_qre=to_decimal(prior_three_year_average_qre),
        )

    @classmethod
    def from_prior_year_qres(cls, prior_year_qres: Iterable[Number]) -> "FilerHistory":
        """
        Build a history from prior-year QRE amounts, oldest first.

        Only the last three years count toward the average. A business with
        no positive prior QRE has no qualifying base and files as first-time.

        Raises:
            ValidationError: an entry is missing, non-numeric, negative or
                out of range
        """
        amounts = [
            parse_amount(value, f"prior_year_qres[{index}]")
            for index, value in enumerate(prior_year_qres)
        ]
        if not any(amount > 0 for amount in amounts):
            return cls.first_time()

        last_three = amounts[-3:]
        average = sum(last_three, Decimal("0")) / len(last_three)
        return cls(status=FilerStatus.REPEAT, prior_three_year_average_qre=average)
