"""Default configuration parameters for the credit calculation engine."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RegimeParams:
    """Rates for one law regime."""
    asc_rate_first_time: float = 0.06                # ASC rate with no prior-year base
    asc_rate_repeat: float = 0.14                    # ASC rate above the base amount
    contractor_inclusion_rate: float = 0.65          # IRC 41(b)(3) contract research limit
    asc_base_reduction: float = 0.5                  # Base = 50% of prior 3-year average
    effective_from: Optional[str] = None             # ISO date; None = never date-selected
    section174_capitalization: bool = False          # R&D costs amortized, not expensed
    description: str = ""


@dataclass(frozen=True)
class TierParams:
    """One pricing band."""
    tier: int
    name: str
    price: float
    min_credit: float                                # Inclusive
    max_credit: Optional[float] = None               # Exclusive; None = unbounded
    features: tuple[str, ...] = ()
    popular: bool = False
    credit_range: str = ""


@dataclass(frozen=True)
class EngineParams:
    """Engine-wide settings."""
    default_regime: Optional[str] = None             # None = regime in effect on the load date
    regime_env_var: str = "LAW_REGIME"               # Overrides default_regime when set


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    engine: EngineParams
    regimes: dict[str, RegimeParams] = field(default_factory=dict)
    pricing_tiers: tuple[TierParams, ...] = ()


DEFAULT_REGIMES = {
    "legacy": RegimeParams(
        effective_from="2018-01-01",
        section174_capitalization=False,
        description="Pre-2022 law, R&D costs deductible when incurred",
    ),
    "current": RegimeParams(
        effective_from="2022-01-01",
        section174_capitalization=True,
        description="Section 41 ASC with Section 174 capitalization (2022 onward)",
    ),
    "proposed": RegimeParams(
        asc_rate_first_time=0.08,
        asc_rate_repeat=0.16,
        contractor_inclusion_rate=0.75,
        description="Proposed legislation, not yet enacted",
    ),
}

DEFAULT_PRICING_TIERS = (
    TierParams(
        tier=1,
        name="Starter",
        price=495,
        min_credit=0,
        max_credit=10000,
        features=(
            "Up to $10K federal credit",
            "Basic R&D documentation",
            "Email support",
            "IRS-compliant forms",
        ),
    ),
    TierParams(
        tier=2,
        name="Growth",
        price=1495,
        min_credit=10000,
        max_credit=25000,
        popular=True,
        features=(
            "Up to $25K federal credit",
            "Enhanced documentation",
            "Priority support",
            "Advanced compliance checks",
        ),
    ),
    TierParams(
        tier=3,
        name="Scale",
        price=2495,
        min_credit=25000,
        max_credit=50000,
        features=(
            "Up to $50K federal credit",
            "Comprehensive documentation",
            "Dedicated support",
            "Custom reporting",
        ),
    ),
    TierParams(
        tier=4,
        name="Enterprise",
        price=3995,
        min_credit=50000,
        max_credit=None,
        features=(
            "$50K+ federal credit",
            "White-glove service",
            "Expert consultation",
            "Multi-year planning",
        ),
    ),
)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        engine=EngineParams(),
        regimes=dict(DEFAULT_REGIMES),
        pricing_tiers=DEFAULT_PRICING_TIERS,
    )
