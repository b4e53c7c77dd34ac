"""
Centralized logging configuration for the R&D credit engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger

from ..errors import ValidationError


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
        stream: Where log lines go; stdout when omitted
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream if stream is not None else sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for credit calculation audit events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for calculation stages
    """
    # Lazy proxy; picks up configure_logging settings on first use
    return structlog.get_logger(name, subsystem="calculation", audit_trail=True)


def log_stage_failure(
    logger: FilteringBoundLogger,
    stage: str,
    error: ValidationError,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a calculation stage that rejected its input.

    Internal defects (errors that are not user-facing) are logged at error
    level; ordinary input rejections at warning level.

    Args:
        logger: Structlog logger instance
        stage: Name of the stage that failed
        error: The validation error returned to the caller
        context: Additional context data
    """
    bound_logger = logger.bind(
        stage=stage,
        error_kind=error.kind.value,
        field=error.field,
        reason=error.message,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if error.user_facing:
        bound_logger.warning("Calculation stage rejected input")
    else:
        bound_logger.error("Calculation stage hit a configuration defect")
