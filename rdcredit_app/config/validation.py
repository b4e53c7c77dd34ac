"""Configuration validation utilities."""

from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ConfigIssue:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates regime tables and pricing catalogs."""

    RATE_FIELDS = (
        "asc_rate_first_time",
        "asc_rate_repeat",
        "contractor_inclusion_rate",
        "asc_base_reduction",
    )

    @staticmethod
    def validate_regime_params(key: str, params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate the rates of one law regime."""
        errors = []

        for name in ConfigValidator.RATE_FIELDS:
            value = params.get(name)
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ConfigIssue(
                    field=f"regimes.{key}.{name}",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        # A zero inclusion rate would silently drop all contract research
        value = params.get("contractor_inclusion_rate")
        if _is_number(value) and value == 0:
            errors.append(ConfigIssue(
                field=f"regimes.{key}.contractor_inclusion_rate",
                message="Must be greater than 0",
                value=value
            ))

        effective_from = params.get("effective_from")
        if effective_from is not None and not isinstance(effective_from, date):
            try:
                date.fromisoformat(str(effective_from))
            except ValueError:
                errors.append(ConfigIssue(
                    field=f"regimes.{key}.effective_from",
                    message="Must be an ISO date (YYYY-MM-DD)",
                    value=effective_from
                ))

        if not isinstance(params.get("section174_capitalization", False), bool):
            errors.append(ConfigIssue(
                field=f"regimes.{key}.section174_capitalization",
                message="Must be a boolean",
                value=params.get("section174_capitalization")
            ))

        return errors

    @staticmethod
    def validate_pricing_tiers(tiers: Any) -> list[ConfigIssue]:
        """
        Validate that pricing tiers form contiguous bands over [0, inf).

        Bands are ordered by min_credit; each band must start where the
        previous one ends and only the last band may be unbounded.
        """
        errors = []

        if not isinstance(tiers, (list, tuple)) or not tiers:
            return [ConfigIssue(
                field="pricing_tiers",
                message="Must be a non-empty list of tiers",
                value=tiers
            )]

        well_formed = []
        for index, tier in enumerate(tiers):
            prefix = f"pricing_tiers[{index}]"
            if not isinstance(tier, dict):
                errors.append(ConfigIssue(field=prefix, message="Must be a mapping", value=tier))
                continue

            tier_errors = []
            if not isinstance(tier.get("tier"), int) or isinstance(tier.get("tier"), bool):
                tier_errors.append(ConfigIssue(
                    field=f"{prefix}.tier", message="Must be an integer", value=tier.get("tier")
                ))
            if not isinstance(tier.get("name"), str) or not tier.get("name"):
                tier_errors.append(ConfigIssue(
                    field=f"{prefix}.name", message="Must be a non-empty string", value=tier.get("name")
                ))
            for name in ("price", "min_credit"):
                value = tier.get(name)
                if not _is_number(value) or value < 0:
                    tier_errors.append(ConfigIssue(
                        field=f"{prefix}.{name}", message="Must be a non-negative number", value=value
                    ))
            max_credit = tier.get("max_credit")
            if max_credit is not None and not _is_number(max_credit):
                tier_errors.append(ConfigIssue(
                    field=f"{prefix}.max_credit", message="Must be a number or null", value=max_credit
                ))

            errors.extend(tier_errors)
            if not tier_errors:
                well_formed.append(tier)

        if errors:
            return errors

        numbers = [tier["tier"] for tier in well_formed]
        if len(set(numbers)) != len(numbers):
            errors.append(ConfigIssue(
                field="pricing_tiers", message="Tier numbers must be unique", value=numbers
            ))

        ordered = sorted(well_formed, key=lambda tier: tier["min_credit"])

        if ordered[0]["min_credit"] != 0:
            errors.append(ConfigIssue(
                field="pricing_tiers",
                message="Lowest tier must start at 0",
                value=ordered[0]["min_credit"]
            ))

        for current, following in zip(ordered, ordered[1:]):
            if current.get("max_credit") is None:
                errors.append(ConfigIssue(
                    field=f"pricing_tiers.tier_{current['tier']}.max_credit",
                    message="Only the highest tier may be unbounded",
                    value=None
                ))
            elif current["max_credit"] != following["min_credit"]:
                errors.append(ConfigIssue(
                    field=f"pricing_tiers.tier_{following['tier']}.min_credit",
                    message="Must equal the previous tier's max_credit (gap or overlap)",
                    value=following["min_credit"]
                ))

        for tier in ordered:
            max_credit = tier.get("max_credit")
            if max_credit is not None and max_credit <= tier["min_credit"]:
                errors.append(ConfigIssue(
                    field=f"pricing_tiers.tier_{tier['tier']}.max_credit",
                    message="Must be greater than min_credit",
                    value=max_credit
                ))

        if ordered[-1].get("max_credit") is not None:
            errors.append(ConfigIssue(
                field=f"pricing_tiers.tier_{ordered[-1]['tier']}.max_credit",
                message="Highest tier must be unbounded (null)",
                value=ordered[-1]["max_credit"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ConfigIssue]:
        """Validate complete configuration."""
        errors = []

        regimes = config.get("regimes") or {}
        if not regimes:
            errors.append(ConfigIssue(field="regimes", message="At least one regime is required", value=regimes))

        for key, params in regimes.items():
            if not isinstance(params, dict):
                errors.append(ConfigIssue(field=f"regimes.{key}", message="Must be a mapping", value=params))
                continue
            errors.extend(ConfigValidator.validate_regime_params(key, params))

        default_regime = config.get("engine", {}).get("default_regime")
        if default_regime is None:
            dated = [
                key for key, params in regimes.items()
                if isinstance(params, dict) and params.get("effective_from") is not None
            ]
            if regimes and not dated:
                errors.append(ConfigIssue(
                    field="engine.default_regime",
                    message="Required when no regime has an effective_from date",
                    value=default_regime
                ))
        elif default_regime not in regimes:
            errors.append(ConfigIssue(
                field="engine.default_regime",
                message="Must name a configured regime",
                value=default_regime
            ))

        errors.extend(ConfigValidator.validate_pricing_tiers(config.get("pricing_tiers")))

        return errors
