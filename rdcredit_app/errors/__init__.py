"""
Error classification for credit calculation.

Validation errors are returned to callers as structured values; system
failures signal broken configuration and are raised at load time.
"""

from .validation import (
    ErrorKind,
    ValidationError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
)

__all__ = [
    # Validation Errors
    "ErrorKind",
    "ValidationError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
]
