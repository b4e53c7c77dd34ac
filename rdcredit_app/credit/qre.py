"""Qualified Research Expense calculation."""

from ..data.models import ExpenseInput
from ..models.catalog import LawRegime
from ..models.results import QREBreakdown
from ..utils.money import round_cents


class QRECalculator:
    """
    Derives total QRE from categorized spend.

    Contract research counts only up to the regime's inclusion rate
    (65% under current law). Cloud computing is its own category. The
    total is rounded half-even to cents once, after summing.
    """

    def calculate(self, expenses: ExpenseInput, regime: LawRegime) -> QREBreakdown:
        included_contractors = expenses.contractors * regime.contractor_inclusion_rate

        total = (
            expenses.wages
            + included_contractors
            + expenses.supplies
            + expenses.cloud
        )

        return QREBreakdown(
            wages=expenses.wages,
            contractors=round_cents(included_contractors),
            supplies=expenses.supplies,
            cloud=expenses.cloud,
            total=round_cents(total),
        )
