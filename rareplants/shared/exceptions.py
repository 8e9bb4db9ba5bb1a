"""
Custom exceptions for RarePlants.

Expected outcomes (not found, bad identifier, failed validation) are plain
return values; see ``rareplants.core.domain.outcomes``. The exceptions here
cover the unexpected conditions that unwind to the request boundary.
"""

from typing import Optional, Dict, Any


class RarePlantsError(Exception):
    """Base exception for all RarePlants errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code


class ConfigurationError(RarePlantsError):
    """Raised when there are configuration or setup issues."""
    pass


class StorageError(RarePlantsError):
    """Raised when the plant store cannot complete a read or write."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation


class BusinessRuleViolation(RarePlantsError):
    """Raised when a domain rule is broken by the caller."""
    pass


class PlantAlreadyAdoptedError(BusinessRuleViolation):
    """Raised when adopting a plant that already carries an adoption date."""

    def __init__(self, plant_id: Optional[int] = None, **kwargs):
        super().__init__(f"Plant already adopted: {plant_id}", **kwargs)
        self.plant_id = plant_id


# Exception mapping for HTTP status codes
EXCEPTION_STATUS_MAP = {
    ConfigurationError: 500,
    StorageError: 500,
    BusinessRuleViolation: 409,
    PlantAlreadyAdoptedError: 409,
}


def get_http_status_code(exception: Exception) -> int:
    """Get appropriate HTTP status code for an exception."""
    return EXCEPTION_STATUS_MAP.get(type(exception), 500)


def should_log_error(exception: Exception) -> bool:
    """Determine if an error should be logged at error level."""
    # Rule violations are caller mistakes, not faults
    return not isinstance(exception, BusinessRuleViolation)
