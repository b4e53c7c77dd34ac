"""
Immutable result models produced by the calculation stages.

Results are derived fresh on every call and never cached across inputs.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from ..data.models import FilerStatus
from .catalog import PricingTier


@dataclass(frozen=True)
class QREBreakdown:
    """Qualified research expenses by category."""
    wages: Decimal
    contractors: Decimal    # Included amount after the contractor limit
    supplies: Decimal
    cloud: Decimal
    total: Decimal          # Rounded once, to cents


@dataclass(frozen=True)
class CreditRateSelection:
    """Outcome of the filer-history branch."""
    status: FilerStatus
    rate: Decimal
    qre: Decimal
    base_amount: Decimal        # Zero for first-time filers
    creditable_base: Decimal    # Never negative


@dataclass(frozen=True)
class CalculationResult:
    """Credit estimate and pricing tier for one request."""
    total_qre: Decimal
    federal_credit: Decimal
    pricing_tier: int
    pricing_amount: Decimal

    # Supporting detail
    regime_key: str
    qre_breakdown: QREBreakdown
    rate_selection: CreditRateSelection
    tier: PricingTier
    roi_multiple: Decimal
    net_benefit: Decimal                 # Credit minus service price
    payback_days: Optional[int]          # None when there is no credit
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def checkout_enabled(self) -> bool:
        """Whether the downstream call-to-action should be offered."""
        return self.federal_credit > 0 and self.pricing_amount > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the calculator response shape."""
        return {
            "totalQRE": float(self.total_qre),
            "federalCredit": float(self.federal_credit),
            "pricingTier": self.pricing_tier,
            "pricingAmount": float(self.pricing_amount),
            "lawRegime": self.regime_key,
            "creditRate": float(self.rate_selection.rate),
            "filerStatus": self.rate_selection.status.value,
            "tierName": self.tier.name,
            "creditRange": self.tier.credit_range,
            "roiMultiple": float(self.roi_multiple),
            "netBenefit": float(self.net_benefit),
            "paybackDays": self.payback_days,
            "checkoutEnabled": self.checkout_enabled,
            "breakdown": {
                "wages": float(self.qre_breakdown.wages),
                "contractors": float(self.qre_breakdown.contractors),
                "supplies": float(self.qre_breakdown.supplies),
                "cloud": float(self.qre_breakdown.cloud),
            },
            "warnings": list(self.warnings),
        }
