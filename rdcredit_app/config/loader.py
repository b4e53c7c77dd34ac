"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
import yaml

from ..errors import ConfigurationError, ValidationError
from ..models.catalog import (
    LawRegime,
    PricingCatalog,
    PricingTier,
    RegimeTable,
    effective_regime_key,
)
from ..utils.money import to_decimal
from .defaults import DefaultConfig, RegimeParams, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

REGIMES_FILE = "law_regimes.yaml"
PRICING_FILE = "pricing_tiers.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file(self, filename: str) -> dict[str, Any]:
        """Load one YAML file from the config directory; missing files are empty."""
        path = self.config_dir / filename

        if not path.exists():
            return {}

        try:
            with open(path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}", source=str(path)) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"{path} must contain a mapping", source=str(path))

        return content

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. YAML files in the config directory
        3. Built-in defaults (lowest priority)

        Regimes merge key by key; a pricing tier list replaces the
        default list wholesale.
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file(REGIMES_FILE))
        config = self._deep_merge(config, self.load_file(PRICING_FILE))

        if overrides:
            config = self._deep_merge(config, overrides)

        # Regimes added by YAML or overrides inherit the per-field defaults
        regime_defaults = self._dataclass_to_dict(RegimeParams())
        config["regimes"] = {
            key: self._deep_merge(regime_defaults, params) if isinstance(params, dict) else params
            for key, params in (config.get("regimes") or {}).items()
        }

        return config

    def load(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        on: Optional[date] = None,
    ) -> tuple[RegimeTable, PricingCatalog]:
        """
        Build the regime table and pricing catalog.

        Args:
            overrides: Highest-precedence configuration values
            environ: Environment for the regime override; os.environ if None
            on: Date used to pick the effective default regime; today if None

        Raises:
            ConfigurationError: if the merged configuration is invalid
        """
        config = self.merge_config(overrides)

        issues = ConfigValidator.validate_config(config)
        if issues:
            logger.error(
                "Configuration validation failed",
                config_dir=str(self.config_dir),
                issues=[f"{issue.field}: {issue.message} (got: {issue.value})" for issue in issues],
            )
            raise ConfigurationError(
                f"Invalid configuration: {len(issues)} issue(s)",
                source=str(self.config_dir),
                issues=issues,
            )

        regimes = {
            key: self._build_regime(key, params)
            for key, params in config["regimes"].items()
        }
        default_key = self._select_default_regime(config, regimes, environ, on)
        catalog = PricingCatalog(tuple(self._build_tier(params) for params in config["pricing_tiers"]))

        logger.info(
            "Calculation configuration loaded",
            regimes=sorted(regimes),
            default_regime=default_key,
            pricing_tiers=len(catalog),
        )
        return RegimeTable(regimes, default_key), catalog

    def load_regime_table(self, overrides: Optional[dict[str, Any]] = None,
                          environ: Optional[Mapping[str, str]] = None,
                          on: Optional[date] = None) -> RegimeTable:
        return self.load(overrides, environ, on)[0]

    def load_pricing_catalog(self, overrides: Optional[dict[str, Any]] = None) -> PricingCatalog:
        return self.load(overrides)[1]

    def _select_default_regime(
        self,
        config: dict[str, Any],
        regimes: dict[str, LawRegime],
        environ: Optional[Mapping[str, str]],
        on: Optional[date],
    ) -> str:
        """
        Pick the default regime.

        The environment variable wins, then engine.default_regime, then the
        regime in effect on the given date.
        """
        environ = os.environ if environ is None else environ
        env_var = config["engine"].get("regime_env_var")

        requested = environ.get(env_var) if env_var else None
        if requested and requested in regimes:
            return requested

        configured = config["engine"]["default_regime"]
        if configured is None:
            on = date.today() if on is None else on
            try:
                configured = effective_regime_key(regimes.values(), on)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Cannot pick a default regime: {e}",
                    source=str(self.config_dir),
                ) from e

        if requested:
            logger.warning(
                "Unknown law regime in environment, using configured default",
                env_var=env_var,
                requested=requested,
                default_regime=configured,
            )

        return configured

    @staticmethod
    def _build_regime(key: str, params: dict[str, Any]) -> LawRegime:
        effective_from = params.get("effective_from")
        if effective_from is not None and not isinstance(effective_from, date):
            effective_from = date.fromisoformat(str(effective_from))

        return LawRegime(
            key=key,
            asc_rate_first_time=to_decimal(params["asc_rate_first_time"]),
            asc_rate_repeat=to_decimal(params["asc_rate_repeat"]),
            contractor_inclusion_rate=to_decimal(params["contractor_inclusion_rate"]),
            asc_base_reduction=to_decimal(params["asc_base_reduction"]),
            effective_from=effective_from,
            section174_capitalization=params.get("section174_capitalization", False),
            description=params.get("description", ""),
        )

    @staticmethod
    def _build_tier(params: dict[str, Any]) -> PricingTier:
        max_credit = params.get("max_credit")
        return PricingTier(
            tier=params["tier"],
            name=params["name"],
            price=to_decimal(params["price"]),
            min_credit=to_decimal(params["min_credit"]),
            max_credit=None if max_credit is None else to_decimal(max_credit),
            features=tuple(params.get("features") or ()),
            popular=bool(params.get("popular", False)),
            credit_range=params.get("credit_range") or "",
        )

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses, dicts and tuples to plain containers."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, dict):
            return {key: self._dataclass_to_dict(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [self._dataclass_to_dict(value) for value in obj]
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
