"""
Read-only catalogs shared by every calculation.

The law-regime table and the pricing catalog are built once at startup
and never mutated. A law or price change is a new catalog entry, not an
edit to an existing one.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..errors import ErrorKind, ValidationError
from ..utils.money import format_currency


@dataclass(frozen=True)
class LawRegime:
    """Rates in effect under one version of the tax law."""
    key: str
    asc_rate_first_time: Decimal          # No prior-year base
    asc_rate_repeat: Decimal              # Applied to QRE above the base amount
    contractor_inclusion_rate: Decimal    # Share of contract research that qualifies
    asc_base_reduction: Decimal = Decimal("0.5")  # Base = prior 3-yr average x this
    effective_from: Optional[date] = None
    section174_capitalization: bool = False
    description: str = ""


class RegimeTable:
    """Immutable keyed table of law regimes with a default selection."""

    def __init__(self, regimes: Mapping[str, LawRegime], default_key: str) -> None:
        if default_key not in regimes:
            raise ValueError(f"Default regime '{default_key}' is not in the table")
        self._regimes = MappingProxyType(dict(regimes))
        self._default_key = default_key

    @property
    def default_key(self) -> str:
        return self._default_key

    @property
    def regimes(self) -> Mapping[str, LawRegime]:
        return self._regimes

    def keys(self) -> tuple[str, ...]:
        return tuple(self._regimes)

    def __contains__(self, key: object) -> bool:
        return key in self._regimes

    def __len__(self) -> int:
        return len(self._regimes)

    def get(self, key: Optional[str] = None) -> LawRegime:
        """
        Look up a regime by key; None selects the default regime.

        Raises:
            ValidationError: UNSUPPORTED_REGIME if the key is not configured
        """
        if key is None:
            key = self._default_key

        regime = self._regimes.get(key)
        if regime is None:
            raise ValidationError(
                ErrorKind.UNSUPPORTED_REGIME,
                f"Law regime '{key}' is not supported",
                field="regime",
                context={"regime": key, "supported": sorted(self._regimes)},
            )
        return regime

    def key_for_date(self, on: date) -> str:
        """Key of the regime in effect on a date."""
        return effective_regime_key(self._regimes.values(), on)


def effective_regime_key(regimes: Iterable[LawRegime], on: date) -> str:
    """
    Key of the regime in effect on a date.

    Picks the regime with the latest effective_from on or before the
    date. Regimes without an effective date (e.g. proposed law) are
    never selected this way.

    Raises:
        ValidationError: UNSUPPORTED_REGIME if no regime is in effect
    """
    candidates = [
        regime for regime in regimes
        if regime.effective_from is not None and regime.effective_from <= on
    ]
    if not candidates:
        raise ValidationError(
            ErrorKind.UNSUPPORTED_REGIME,
            f"No law regime is in effect on {on.isoformat()}",
            field="regime",
            context={"date": on.isoformat()},
        )
    return max(candidates, key=lambda regime: regime.effective_from).key


@dataclass(frozen=True)
class PricingTier:
    """A service price band keyed to credit size.

    The lower bound is inclusive and the upper bound exclusive, so a
    credit exactly on a boundary belongs to the higher tier. An upper
    bound of None means the band is unbounded.
    """
    tier: int
    name: str
    price: Decimal
    min_credit: Decimal
    max_credit: Optional[Decimal] = None
    features: tuple[str, ...] = ()
    popular: bool = False
    credit_range: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(self.features))
        if not self.credit_range:
            upper = "∞" if self.max_credit is None else format_currency(self.max_credit)
            object.__setattr__(
                self, "credit_range", f"{format_currency(self.min_credit)} - {upper}"
            )

    def contains(self, credit: Decimal) -> bool:
        if credit < self.min_credit:
            return False
        return self.max_credit is None or credit < self.max_credit


@dataclass(frozen=True)
class PricingCatalog:
    """Ordered pricing tiers covering [0, ∞)."""
    tiers: tuple[PricingTier, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.tiers, key=lambda tier: tier.min_credit))
        object.__setattr__(self, "tiers", ordered)

    def __iter__(self) -> Iterator[PricingTier]:
        return iter(self.tiers)

    def __len__(self) -> int:
        return len(self.tiers)

    def by_number(self, tier: int) -> Optional[PricingTier]:
        return next((t for t in self.tiers if t.tier == tier), None)
