"""
Command-line interface for the credit engine.

Usage:
    rdcredit calculate request.json
    rdcredit calculate - < request.json
    rdcredit validate-config --config-dir ./config
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config.loader import ConfigLoader
from .engine import CalculationEngine
from .errors import ConfigurationError, ValidationError
from .logging import configure_logging, get_logger

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdcredit",
        description="Estimate the federal R&D credit (ASC) and its pricing tier",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Directory holding law_regimes.yaml and pricing_tiers.yaml",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate_parser = subparsers.add_parser(
        "calculate",
        help="Calculate a credit estimate from a JSON request",
    )
    calculate_parser.add_argument(
        "request",
        help='Request file with "expenses", "history" and optional "regime"; - for stdin',
    )
    calculate_parser.add_argument(
        "--regime",
        help="Law regime key, overriding any regime in the request",
    )

    subparsers.add_parser(
        "validate-config",
        help="Load and validate the regime table and pricing catalog",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    # stdout carries the JSON response, so logs go to stderr
    configure_logging(level=args.log_level, format_json=args.json_logs, stream=sys.stderr)

    try:
        if args.command == "validate-config":
            return _validate_config(args.config_dir)
        return _calculate(args.request, args.regime, args.config_dir)
    except ConfigurationError as e:
        for issue in e.issues:
            print(f"{issue.field}: {issue.message} (got: {issue.value})", file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR


def _calculate(request: str, regime: Optional[str], config_dir: Optional[Path]) -> int:
    try:
        if request == "-":
            payload = json.load(sys.stdin)
        else:
            with open(request) as f:
                payload = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: request is not valid JSON: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if not isinstance(payload, dict):
        print("Error: request must be a JSON object", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    if regime is not None:
        payload["regime"] = regime

    engine = CalculationEngine(config_dir=config_dir)
    result = engine.calculate_request(payload)

    if isinstance(result, ValidationError):
        print(json.dumps({"error": result.to_dict()}, indent=2))
        return EXIT_VALIDATION_ERROR

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


def _validate_config(config_dir: Optional[Path]) -> int:
    regimes, catalog = ConfigLoader.create(config_dir).load()

    logger.info("Configuration is valid", config_dir=str(config_dir))
    print(f"Regimes: {', '.join(sorted(regimes.keys()))} (default: {regimes.default_key})")
    for tier in catalog:
        print(f"Tier {tier.tier} {tier.name}: {tier.credit_range} at ${tier.price:,}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
