"""Federal credit calculation."""

from decimal import Decimal

from ..models.results import CreditRateSelection
from ..utils.money import round_whole


class CreditCalculator:
    """Applies the selected rate to the creditable base."""

    def calculate(self, selection: CreditRateSelection) -> Decimal:
        """Credit rounded half-even to whole dollars."""
        return round_whole(selection.creditable_base * selection.rate)
