"""
Error handling tests for the credit calculation engine.

Covers the error taxonomy, serialization for form display and the
guarantee that the engine returns errors instead of raising them.
"""

import pytest
from decimal import Decimal
from typing import Any, Dict

from rdcredit_app.engine import CalculationEngine
from rdcredit_app.errors import (
    ConfigurationError,
    ErrorKind,
    SystemFailureError,
    ValidationError,
)
from rdcredit_app.errors.validation import GENERIC_MESSAGE
from rdcredit_app.models.results import CalculationResult
from rdcredit_app.utils.money import MAX_AMOUNT


class TestErrorClassification:
    """Test error classification system."""

    def test_validation_error_attributes(self) -> None:
        error = ValidationError(ErrorKind.NEGATIVE_VALUE, "wages cannot be negative", field="wages")

        assert isinstance(error, Exception)
        assert error.kind is ErrorKind.NEGATIVE_VALUE
        assert error.field == "wages"
        assert error.context == {}
        assert error.recoverable is True
        assert error.user_facing is True
        assert str(error) == "wages cannot be negative"

    def test_no_tier_match_is_internal(self) -> None:
        error = ValidationError(ErrorKind.NO_TIER_MATCH, "No pricing tier covers a credit of 5")

        assert error.user_facing is False
        assert error.recoverable is False

    def test_to_dict_user_facing(self) -> None:
        error = ValidationError(ErrorKind.MISSING_FIELD, "cloud is required", field="cloud")

        assert error.to_dict() == {
            "kind": "missing_field",
            "field": "cloud",
            "message": "cloud is required",
        }

    def test_to_dict_hides_internal_detail(self) -> None:
        error = ValidationError(ErrorKind.NO_TIER_MATCH, "No pricing tier covers a credit of 5")

        assert error.to_dict()["message"] == GENERIC_MESSAGE
        assert error.to_dict()["kind"] == "no_tier_match"

    def test_equality(self) -> None:
        first = ValidationError(ErrorKind.NON_NUMERIC, "wages must be a number", field="wages")
        second = ValidationError(ErrorKind.NON_NUMERIC, "wages must be a number", field="wages",
                                 context={"value": "'x'"})
        other = ValidationError(ErrorKind.NON_NUMERIC, "cloud must be a number", field="cloud")

        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_configuration_error_hierarchy(self) -> None:
        error = ConfigurationError("bad tiers", source="pricing_tiers.yaml", issues=["gap"])

        assert isinstance(error, SystemFailureError)
        assert error.recoverable is False
        assert error.source == "pricing_tiers.yaml"
        assert error.issues == ["gap"]


class TestEngineErrorHandling:
    """Test that the engine returns exactly one error and never raises for bad input."""

    @pytest.mark.parametrize("expenses, history, regime, kind", [
        ({"contractors": 1, "supplies": 1, "cloud": 1}, {"is_first_time_filer": True}, None,
         ErrorKind.MISSING_FIELD),
        ({"wages": "ten", "contractors": 1, "supplies": 1, "cloud": 1}, {"is_first_time_filer": True}, None,
         ErrorKind.NON_NUMERIC),
        ({"wages": 1, "contractors": 1, "supplies": -1, "cloud": 1}, {"is_first_time_filer": True}, None,
         ErrorKind.NEGATIVE_VALUE),
        ({"wages": 1, "contractors": 1, "supplies": 1, "cloud": 1}, {}, None,
         ErrorKind.MISSING_FIELD),
        ({"wages": 1, "contractors": 1, "supplies": 1, "cloud": 1}, {"is_first_time_filer": True}, "nope",
         ErrorKind.UNSUPPORTED_REGIME),
        ({"wages": 1, "contractors": 1, "supplies": 1, "cloud": 1}, {"is_first_time_filer": False}, None,
         ErrorKind.MISSING_FIELD),
        (None, {"is_first_time_filer": True}, None, ErrorKind.MISSING_FIELD),
        ({"wages": 1, "contractors": 1, "supplies": 1, "cloud": 1}, None, None, ErrorKind.MISSING_FIELD),
    ])
    def test_errors_are_returned(
        self, engine: CalculationEngine, expenses: Any, history: Any, regime: Any, kind: ErrorKind
    ) -> None:
        result = engine.calculate(expenses, history, regime)

        assert isinstance(result, ValidationError)
        assert result.kind is kind

    def test_input_error_precedes_regime_error(self, engine: CalculationEngine) -> None:
        """Malformed input is reported even when the regime is also unknown."""
        result = engine.calculate(
            {"wages": -5, "contractors": 0, "supplies": 0, "cloud": 0},
            {"is_first_time_filer": True},
            "unknown",
        )

        assert result.kind is ErrorKind.NEGATIVE_VALUE

    def test_history_error_precedes_regime_error(self, engine: CalculationEngine) -> None:
        result = engine.calculate(
            {"wages": 5, "contractors": 0, "supplies": 0, "cloud": 0},
            {"is_first_time_filer": "maybe"},
            "unknown",
        )

        assert result.kind is ErrorKind.MISSING_FIELD
        assert result.field == "is_first_time_filer"

    def test_later_stages_not_invoked_after_failure(
        self, engine: CalculationEngine, first_time_history: Dict[str, Any]
    ) -> None:
        """No arithmetic runs once validation has failed."""
        calls = []
        engine.qre_calculator.calculate = lambda *args: calls.append("qre")  # type: ignore[method-assign]
        engine.credit_calculator.calculate = lambda *args: calls.append("credit")  # type: ignore[method-assign]

        result = engine.calculate(
            {"wages": 1, "contractors": "bad", "supplies": 0, "cloud": 0}, first_time_history
        )

        assert isinstance(result, ValidationError)
        assert calls == []

    def test_unsupported_regime_stops_before_qre(
        self, engine: CalculationEngine, sample_expenses: Dict[str, Any], first_time_history: Dict[str, Any]
    ) -> None:
        calls = []
        engine.qre_calculator.calculate = lambda *args: calls.append("qre")  # type: ignore[method-assign]

        result = engine.calculate(sample_expenses, first_time_history, "missing")

        assert result.kind is ErrorKind.UNSUPPORTED_REGIME
        assert calls == []


class TestOutOfRangeAmounts:
    """Finite amounts too large for exact cent arithmetic come back as errors."""

    @pytest.mark.parametrize("wages", [10**27, 1e30, "1e40", "1000000000000000.01"])
    def test_huge_wages_returned_as_error(
        self, engine: CalculationEngine, first_time_history: Dict[str, Any], wages: Any
    ) -> None:
        result = engine.calculate(
            {"wages": wages, "contractors": 0, "supplies": 0, "cloud": 0}, first_time_history
        )

        assert isinstance(result, ValidationError)
        assert result.kind is ErrorKind.NON_NUMERIC
        assert result.field == "wages"
        assert result.context["reason"] == "out_of_range"

    def test_huge_prior_average_returned_as_error(self, engine: CalculationEngine) -> None:
        result = engine.calculate(
            {"wages": 100000, "contractors": 0, "supplies": 0, "cloud": 0},
            {"is_first_time_filer": False, "prior_three_year_average_qre": "1e28"},
        )

        assert isinstance(result, ValidationError)
        assert result.kind is ErrorKind.NON_NUMERIC
        assert result.field == "prior_three_year_average_qre"

    def test_ceiling_amounts_still_calculate(
        self, engine: CalculationEngine, first_time_history: Dict[str, Any]
    ) -> None:
        """Every field at the ceiling still fits cent precision end to end."""
        ceiling = str(MAX_AMOUNT)
        result = engine.calculate(
            {"wages": ceiling, "contractors": ceiling, "supplies": ceiling, "cloud": ceiling},
            first_time_history,
        )

        assert isinstance(result, CalculationResult)
        assert result.total_qre == Decimal("3650000000000000.00")
        assert result.federal_credit == Decimal("219000000000000")
