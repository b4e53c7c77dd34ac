"""
Credit calculation engine.

Orchestrates the calculation pipeline, turning raw expense input, filer
history and a law-regime selector into a credit estimate and pricing tier.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog

from .config.loader import ConfigLoader
from .credit.calculator import CreditCalculator
from .credit.pricing import (
    PricingTierResolver,
    calculate_net_benefit,
    calculate_payback_days,
    calculate_roi,
)
from .credit.qre import QRECalculator
from .credit.rates import CreditRateResolver
from .data.models import ExpenseInput, FilerHistory
from .data.validators import InputValidator
from .errors import ErrorKind, ValidationError
from .logging.config import get_calculation_logger, log_stage_failure
from .models.catalog import PricingCatalog, RegimeTable
from .models.results import CalculationResult

logger = structlog.get_logger(__name__)
calculation_logger = get_calculation_logger(__name__)

SECTION_174_WARNING = (
    "R&D expenses must be capitalized and amortized under Section 174 (2022-2025)"
)


class CalculationEngine:
    """
    Main coordinator for the credit calculation pipeline.

    Pipeline:
    Input → Validation → Regime → QRE → Rate → Credit → Pricing Tier

    The engine holds only the read-only regime table and pricing catalog,
    so one instance can serve any number of concurrent calls.
    """

    def __init__(
        self,
        regimes: Optional[RegimeTable] = None,
        catalog: Optional[PricingCatalog] = None,
        config_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """Initialize the engine, loading any catalog not passed in."""
        self.logger = logger
        self.calculation_logger = calculation_logger

        if regimes is None or catalog is None:
            loaded_regimes, loaded_catalog = ConfigLoader.create(
                Path(config_dir) if config_dir is not None else None
            ).load()
            regimes = regimes if regimes is not None else loaded_regimes
            catalog = catalog if catalog is not None else loaded_catalog

        self.regimes = regimes
        self.catalog = catalog

        self.validator = InputValidator()
        self.qre_calculator = QRECalculator()
        self.rate_resolver = CreditRateResolver(regimes)
        self.credit_calculator = CreditCalculator()
        self.tier_resolver = PricingTierResolver(catalog)

        self.logger.info(
            "Credit calculation engine initialized",
            regimes=list(regimes.keys()),
            default_regime=regimes.default_key,
            pricing_tiers=len(catalog),
        )

    def calculate(
        self,
        expenses: Union[ExpenseInput, Mapping[str, Any]],
        history: Union[FilerHistory, Mapping[str, Any]],
        regime_key: Optional[str] = None,
    ) -> Union[CalculationResult, ValidationError]:
        """
        Calculate a federal credit estimate and pricing tier.

        Stages run in order and the first validation failure is returned
        without running later stages.

        Args:
            expenses: Expense amounts (wages, contractors, supplies, cloud)
            history: Filer history
            regime_key: Law regime key, None for the default regime

        Returns:
            CalculationResult, or the ValidationError that stopped the pipeline
        """
        stage = "validate_expenses"
        try:
            valid_expenses = self.validator.validate_expenses(expenses)

            stage = "validate_history"
            valid_history = self.validator.validate_history(history)

            stage = "resolve_regime"
            regime = self.rate_resolver.lookup(regime_key)

            stage = "calculate_qre"
            qre = self.qre_calculator.calculate(valid_expenses, regime)

            stage = "resolve_rate"
            selection = self.rate_resolver.resolve(valid_history, regime, qre.total)

            stage = "calculate_credit"
            federal_credit = self.credit_calculator.calculate(selection)

            stage = "resolve_tier"
            tier = self.tier_resolver.resolve(federal_credit)

        except ValidationError as e:
            log_stage_failure(
                self.calculation_logger,
                stage,
                e,
                context={"regime": regime_key},
            )
            return e

        warnings = self.validator.expense_warnings(valid_expenses)
        if regime.section174_capitalization:
            warnings += (SECTION_174_WARNING,)

        result = CalculationResult(
            total_qre=qre.total,
            federal_credit=federal_credit,
            pricing_tier=tier.tier,
            pricing_amount=tier.price,
            regime_key=regime.key,
            qre_breakdown=qre,
            rate_selection=selection,
            tier=tier,
            roi_multiple=calculate_roi(federal_credit, tier.price),
            net_benefit=calculate_net_benefit(federal_credit, tier.price),
            payback_days=calculate_payback_days(federal_credit, tier.price),
            warnings=warnings,
        )

        self.calculation_logger.debug(
            "Credit calculated",
            regime=regime.key,
            filer_status=selection.status.value,
            total_qre=str(result.total_qre),
            federal_credit=str(result.federal_credit),
            pricing_tier=result.pricing_tier,
        )
        return result

    def calculate_request(self, payload: Mapping[str, Any]) -> Union[CalculationResult, ValidationError]:
        """
        Calculate from an inbound request body.

        Expected shape: {"expenses": {...}, "history": {...}, "regime": key}
        where "regime" is optional.
        """
        for section in ("expenses", "history"):
            if payload.get(section) is None:
                error = ValidationError(
                    ErrorKind.MISSING_FIELD,
                    f"{section} is required",
                    field=section,
                )
                log_stage_failure(self.calculation_logger, "parse_request", error)
                return error

        return self.calculate(
            payload["expenses"],
            payload["history"],
            payload.get("regime"),
        )
