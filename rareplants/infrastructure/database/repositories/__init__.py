"""
Repository implementations for database operations.

This module exports the concrete repository implementations that provide
data access abstraction using the Repository pattern.
"""

from .plant_repository import SQLAlchemyPlantRepository

__all__ = [
    "SQLAlchemyPlantRepository",
]
