"""
Type definitions for RarePlants.

This module contains the custom type definitions and field limits used
throughout the application to keep interfaces explicit.
"""

from typing import NewType
from enum import Enum

# Domain-specific type aliases
PlantID = NewType('PlantID', int)
WaterAmount = NewType('WaterAmount', int)  # milliliters

# Field limits for plant records
NAME_MAX_LENGTH = 100
TYPE_MAX_LENGTH = 50
WATER_REQUIREMENT_MIN = 1
WATER_REQUIREMENT_MAX = 1000

# Placeholder used when a water requirement is not known (e.g. mapped from a view)
UNKNOWN_WATER_REQUIREMENT = WaterAmount(0)


class PlantStatus(str, Enum):
    """Adoption status of a plant in the catalog."""
    AVAILABLE = "available"
    ADOPTED = "adopted"
