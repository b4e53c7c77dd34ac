"""
Validation error classifications for credit calculation requests.

Every failure the engine can return to a caller is a ValidationError
tagged with an ErrorKind, so the UI layer can attribute it to a form field.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Kinds of validation failure surfaced by the engine."""
    MISSING_FIELD = "missing_field"
    NEGATIVE_VALUE = "negative_value"
    NON_NUMERIC = "non_numeric"
    UNSUPPORTED_REGIME = "unsupported_regime"
    NO_TIER_MATCH = "no_tier_match"


# Kinds that indicate an internal defect rather than bad user input
INTERNAL_KINDS = frozenset({ErrorKind.NO_TIER_MATCH})

GENERIC_MESSAGE = "We could not complete this estimate. Please try again later."


class ValidationError(Exception):
    """A single structured validation failure."""

    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.message = message
        self.context = context or {}
        self.recoverable = kind not in INTERNAL_KINDS

    @property
    def user_facing(self) -> bool:
        """Whether the raw message may be shown to an end user."""
        return self.kind not in INTERNAL_KINDS

    def to_dict(self) -> dict[str, Any]:
        """Serialize for field-level form display."""
        return {
            "kind": self.kind.value,
            "field": self.field,
            "message": self.message if self.user_facing else GENERIC_MESSAGE,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.kind, self.field, self.message) == (other.kind, other.field, other.message)

    def __hash__(self) -> int:
        return hash((self.kind, self.field, self.message))

    def __repr__(self) -> str:
        return f"ValidationError(kind={self.kind.value!r}, field={self.field!r}, message={self.message!r})"
