"""
Field validation for plant input.

Validation never raises; it collects every violated constraint so the caller
can report all of them at once.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from rareplants.shared.types import (
    NAME_MAX_LENGTH,
    TYPE_MAX_LENGTH,
    WATER_REQUIREMENT_MIN,
    WATER_REQUIREMENT_MAX,
)


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint on a named input field."""
    field: str
    message: str


class ValidationResult:
    """Result of validation with details about errors."""

    def __init__(self, errors: Optional[List[FieldError]] = None):
        self.errors: List[FieldError] = list(errors or [])

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        """Add an error message for a field."""
        self.errors.append(FieldError(field=field, message=message))

    def by_field(self) -> Dict[str, List[str]]:
        """Group error messages by field name, preserving order."""
        grouped: Dict[str, List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


def validate_required_text(result: ValidationResult, field: str, value: Any, max_length: int, label: str) -> None:
    """Check that a text field is present, non-blank and within its length limit."""
    if not isinstance(value, str) or not value.strip():
        result.add_error(field, f"{label} is required")
    elif len(value.strip()) > max_length:
        result.add_error(field, f"{label} must be at most {max_length} characters")


def validate_water_requirement(result: ValidationResult, value: Any) -> None:
    # bool is an int subclass; reject it explicitly
    if (
        not isinstance(value, int)
        or isinstance(value, bool)
        or not (WATER_REQUIREMENT_MIN <= value <= WATER_REQUIREMENT_MAX)
    ):
        result.add_error(
            "water_requirement",
            f"waterRequirement must be between {WATER_REQUIREMENT_MIN} and {WATER_REQUIREMENT_MAX}",
        )


def validate_plant_fields(name: Any, type: Any, water_requirement: Any) -> ValidationResult:
    """
    Validate the fields needed to persist a complete plant record.

    Args:
        name: Plant name, required, at most 100 characters
        type: Plant type, required, at most 50 characters
        water_requirement: Millilitres of water, 1 to 1000 inclusive

    Returns:
        ValidationResult listing every violated constraint
    """
    result = ValidationResult()
    validate_required_text(result, "name", name, NAME_MAX_LENGTH, "name")
    validate_required_text(result, "type", type, TYPE_MAX_LENGTH, "type")
    validate_water_requirement(result, water_requirement)
    return result
