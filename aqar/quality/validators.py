"""
Listing Validators

Completeness checks for listing records before they are published.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .detectors import is_empty_value

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["title", "location", "price", "property_type"]
OPTIONAL_FIELDS = ["description", "agent_name", "mobile", "area_size", "rooms"]


@dataclass
class PropertyValidation:
    """Result of a completeness check."""
    is_valid: bool
    missing_required: List[str] = field(default_factory=list)
    missing_optional: List[str] = field(default_factory=list)
    completeness_score: int = 0
    suggestions: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, suggestion: str) -> "PropertyValidation":
        """Create a result for input that cannot be checked at all."""
        return cls(is_valid=False, suggestions=[suggestion])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "missing_required": self.missing_required,
            "missing_optional": self.missing_optional,
            "completeness_score": self.completeness_score,
            "suggestions": self.suggestions,
        }


def _is_missing(record: Mapping[str, Any], name: str) -> bool:
    value = record.get(name)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return False  # 0 rooms or a 0 price is a value, not a gap
    return is_empty_value(value) or not value


def validate_property_data(record: Any) -> PropertyValidation:
    """
    Check a listing record for required and optional fields.

    Args:
        record: Listing as a key/value mapping

    Returns:
        PropertyValidation; non-mapping input gives an invalid result, not an error
    """
    if not isinstance(record, Mapping):
        logger.warning(f"Cannot validate listing of type {type(record).__name__}")
        return PropertyValidation.failure("Property data is required")

    missing_required = [name for name in REQUIRED_FIELDS if _is_missing(record, name)]
    missing_optional = [name for name in OPTIONAL_FIELDS if _is_missing(record, name)]

    total = len(REQUIRED_FIELDS) + len(OPTIONAL_FIELDS)
    filled = total - len(missing_required) - len(missing_optional)

    suggestions = []
    if missing_required:
        suggestions.append(f"Add required fields: {', '.join(missing_required)}")
    if missing_optional:
        suggestions.append(f"Consider adding optional fields: {', '.join(missing_optional)}")

    return PropertyValidation(
        is_valid=not missing_required,
        missing_required=missing_required,
        missing_optional=missing_optional,
        completeness_score=round(filled / total * 100),
        suggestions=suggestions,
    )
