"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date
from decimal import Decimal
from typing import Dict, Any

from rdcredit_app.engine import CalculationEngine
from rdcredit_app.models.catalog import LawRegime, PricingCatalog, PricingTier, RegimeTable


@pytest.fixture
def sample_expenses() -> Dict[str, Any]:
    """Expense input for a small software company."""
    return {
        "wages": 200000,
        "contractors": 80000,
        "supplies": 10000,
        "cloud": 0,
    }


@pytest.fixture
def first_time_history() -> Dict[str, Any]:
    """History for a business claiming the credit for the first time."""
    return {"is_first_time_filer": True}


@pytest.fixture
def repeat_history() -> Dict[str, Any]:
    """History for a business with three prior years of QRE."""
    return {
        "is_first_time_filer": False,
        "prior_three_year_average_qre": 200000,
    }


@pytest.fixture
def current_regime() -> LawRegime:
    """Current-law rates."""
    return LawRegime(
        key="current",
        asc_rate_first_time=Decimal("0.06"),
        asc_rate_repeat=Decimal("0.14"),
        contractor_inclusion_rate=Decimal("0.65"),
        effective_from=date(2022, 1, 1),
        section174_capitalization=True,
    )


@pytest.fixture
def regime_table(current_regime: LawRegime) -> RegimeTable:
    """Legacy, current and proposed regimes with current as default."""
    legacy = LawRegime(
        key="legacy",
        asc_rate_first_time=Decimal("0.06"),
        asc_rate_repeat=Decimal("0.14"),
        contractor_inclusion_rate=Decimal("0.65"),
        effective_from=date(2018, 1, 1),
    )
    proposed = LawRegime(
        key="proposed",
        asc_rate_first_time=Decimal("0.08"),
        asc_rate_repeat=Decimal("0.16"),
        contractor_inclusion_rate=Decimal("0.75"),
    )
    return RegimeTable(
        {"legacy": legacy, "current": current_regime, "proposed": proposed},
        default_key="current",
    )


@pytest.fixture
def pricing_catalog() -> PricingCatalog:
    """Three contiguous bands: <10K, 10K-50K, 50K+."""
    return PricingCatalog((
        PricingTier(tier=1, name="Starter", price=Decimal("500"),
                    min_credit=Decimal("0"), max_credit=Decimal("10000"),
                    features=("Federal R&D credit forms",)),
        PricingTier(tier=2, name="Growth", price=Decimal("1500"),
                    min_credit=Decimal("10000"), max_credit=Decimal("50000"),
                    features=("Everything in Starter", "Priority support"), popular=True),
        PricingTier(tier=3, name="Enterprise", price=Decimal("2500"),
                    min_credit=Decimal("50000"), max_credit=None,
                    features=("Dedicated account manager",)),
    ))


@pytest.fixture
def engine(regime_table: RegimeTable, pricing_catalog: PricingCatalog) -> CalculationEngine:
    """Engine wired to the in-memory test catalogs."""
    return CalculationEngine(regimes=regime_table, catalog=pricing_catalog)
