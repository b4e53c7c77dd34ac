"""
System failure error classifications for unrecoverable errors.

These exceptions represent defects in the deployed configuration that
must be fixed before the engine can serve calculations.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Regime table or pricing catalog failed validation at load time."""

    def __init__(self, message: str, source: Optional[str] = None,
                 issues: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.issues = issues or []
