"""
Database dependency injection.

This module provides FastAPI dependencies that hand out repository instances
bound to the application's database manager.
"""

from fastapi import Depends

from rareplants.core.domain.repositories import PlantRepository
from rareplants.infrastructure.database.config import DatabaseManager, get_database_manager
from rareplants.infrastructure.database.repositories.plant_repository import SQLAlchemyPlantRepository


def get_plant_repository(
    db_manager: DatabaseManager = Depends(get_database_manager)
) -> PlantRepository:
    """Get plant repository instance."""
    return SQLAlchemyPlantRepository(db_manager)
