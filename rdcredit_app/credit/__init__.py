"""Credit calculation stages: QRE, rate selection, credit and pricing."""

from .calculator import CreditCalculator
from .pricing import (
    PricingTierResolver,
    calculate_net_benefit,
    calculate_payback_days,
    calculate_roi,
)
from .qre import QRECalculator
from .rates import CreditRateResolver

__all__ = [
    "CreditCalculator",
    "CreditRateResolver",
    "PricingTierResolver",
    "QRECalculator",
    "calculate_net_benefit",
    "calculate_payback_days",
    "calculate_roi",
]
