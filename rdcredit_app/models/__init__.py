"""Configuration catalogs and calculation result models."""

from .catalog import LawRegime, PricingCatalog, PricingTier, RegimeTable
from .results import CalculationResult, CreditRateSelection, QREBreakdown

__all__ = [
    "CalculationResult",
    "CreditRateSelection",
    "LawRegime",
    "PricingCatalog",
    "PricingTier",
    "QREBreakdown",
    "RegimeTable",
]
