"""ASC rate and creditable-base selection."""

from decimal import Decimal
from typing import Optional

from ..data.models import FilerHistory, FilerStatus
from ..errors import ErrorKind, ValidationError
from ..models.catalog import LawRegime, RegimeTable
from ..models.results import CreditRateSelection

ZERO = Decimal("0")


class CreditRateResolver:
    """
    Selects the ASC rate and creditable base.

    Two axes decide the outcome: the law regime (looked up in the injected
    table) and the filer history branch. Both filer branches are handled
    explicitly; an unknown status is an error, not a default rate.
    """

    def __init__(self, regimes: RegimeTable) -> None:
        self.regimes = regimes

    def lookup(self, regime_key: Optional[str] = None) -> LawRegime:
        """Resolve a regime key, None meaning the configured default."""
        return self.regimes.get(regime_key)

    def resolve(self, history: FilerHistory, regime: LawRegime, total_qre: Decimal) -> CreditRateSelection:
        """
        Pick the rate and base for one filer.

        First-time filers get the first-time rate on the full QRE. Repeat
        filers get the repeat rate on QRE above half their prior three-year
        average, floored at zero.

        Raises:
            ValidationError: MISSING_FIELD when a repeat filer has no
                prior three-year average
        """
        if history.status is FilerStatus.FIRST_TIME:
            return CreditRateSelection(
                status=FilerStatus.FIRST_TIME,
                rate=regime.asc_rate_first_time,
                qre=total_qre,
                base_amount=ZERO,
                creditable_base=total_qre,
            )

        if history.status is FilerStatus.REPEAT:
            prior_average = history.prior_three_year_average_qre
            if prior_average is None:
                raise ValidationError(
                    ErrorKind.MISSING_FIELD,
                    "prior_three_year_average_qre is required for repeat filers",
                    field="prior_three_year_average_qre",
                )

            base_amount = prior_average * regime.asc_base_reduction
            return CreditRateSelection(
                status=FilerStatus.REPEAT,
                rate=regime.asc_rate_repeat,
                qre=total_qre,
                base_amount=base_amount,
                creditable_base=max(ZERO, total_qre - base_amount),
            )

        raise TypeError(f"Unhandled filer status: {history.status!r}")
