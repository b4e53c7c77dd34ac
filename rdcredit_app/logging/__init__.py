"""
Logging configuration and utilities for the R&D credit engine.
"""
from .config import configure_logging, get_calculation_logger, get_logger, log_stage_failure

__all__ = ["configure_logging", "get_logger", "get_calculation_logger", "log_stage_failure"]
