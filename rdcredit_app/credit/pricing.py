"""Pricing tier assignment."""

from decimal import Decimal
from typing import Optional

from ..errors import ErrorKind, ValidationError
from ..models.catalog import PricingCatalog, PricingTier
from ..utils.money import round_cents, round_whole

DAYS_PER_YEAR = Decimal("365")


class PricingTierResolver:
    """
    Maps a federal credit to exactly one pricing tier.

    Tiers use inclusive lower and exclusive upper bounds, so a credit
    sitting on a boundary is priced at the higher tier. A credit that no
    tier covers means the catalog has a gap; that is a configuration
    defect, reported as NO_TIER_MATCH.
    """

    def __init__(self, catalog: PricingCatalog) -> None:
        self.catalog = catalog

    def resolve(self, federal_credit: Decimal) -> PricingTier:
        for tier in self.catalog:
            if tier.contains(federal_credit):
                return tier

        raise ValidationError(
            ErrorKind.NO_TIER_MATCH,
            f"No pricing tier covers a credit of {federal_credit}",
            context={
                "federal_credit": str(federal_credit),
                "tiers": [
                    (str(t.min_credit), None if t.max_credit is None else str(t.max_credit))
                    for t in self.catalog
                ],
            },
        )


def calculate_roi(credit_amount: Decimal, price: Decimal) -> Decimal:
    """Credit as a multiple of the service price, 0 when the price is 0."""
    if price == 0:
        return Decimal("0")
    return round_cents(credit_amount / price)


def calculate_net_benefit(credit_amount: Decimal, price: Decimal) -> Decimal:
    """Credit left after paying for the service; negative when the fee exceeds it."""
    return credit_amount - price


def calculate_payback_days(credit_amount: Decimal, price: Decimal) -> Optional[int]:
    """
    Days of credit value needed to cover the service price.

    0 when the service is free, None when there is no credit to pay it back.
    """
    if price == 0:
        return 0
    if credit_amount == 0:
        return None
    return int(round_whole(DAYS_PER_YEAR * price / credit_amount))
