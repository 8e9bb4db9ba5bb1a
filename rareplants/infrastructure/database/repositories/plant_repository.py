"""
SQLAlchemy implementation of PlantRepository.

Each operation opens its own session through the DatabaseManager and
releases it before returning, so no connection is held between calls.
"""

import logging
from datetime import timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from rareplants.core.domain.entities import Plant
from rareplants.core.domain.repositories import PlantRepository
from rareplants.infrastructure.database.config import DatabaseManager
from rareplants.infrastructure.database.models import PLANT_ID_MAX, PlantModel
from rareplants.shared.types import PlantID, WaterAmount
from rareplants.shared.exceptions import StorageError

logger = logging.getLogger(__name__)


class SQLAlchemyPlantRepository(PlantRepository):
    """SQLAlchemy implementation of PlantRepository."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def get_all(self) -> List[Plant]:
        """Retrieve all plants in one query, oldest first."""
        try:
            async with self.db_manager.get_session() as session:
                stmt = select(PlantModel).order_by(PlantModel.id)
                result = await session.execute(stmt)
                plant_models = result.scalars().all()

            return [self._model_to_entity(model) for model in plant_models]

        except SQLAlchemyError as e:
            logger.error(f"Failed to get all plants: {e}")
            raise StorageError(f"Failed to retrieve plants: {e}", operation="get_all")

    async def get_by_id(self, plant_id: PlantID) -> Optional[Plant]:
        """Retrieve a plant by its ID."""
        if plant_id > PLANT_ID_MAX:
            return None

        try:
            async with self.db_manager.get_session() as session:
                plant_model = await session.get(PlantModel, plant_id)

            if plant_model:
                return self._model_to_entity(plant_model)
            return None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get plant by ID {plant_id}: {e}")
            raise StorageError(f"Failed to retrieve plant: {e}", operation="get_by_id")

    async def add(self, plant: Plant) -> Plant:
        """Insert a new plant; the database assigns its ID."""
        plant_model = PlantModel(
            name=plant.name,
            type=plant.type,
            water_requirement=plant.water_requirement,
            adoption_date=plant.adoption_date,
        )

        try:
            async with self.db_manager.get_session() as session:
                session.add(plant_model)
                await session.flush()  # Assigns the ID; commit happens on exit

        except SQLAlchemyError as e:
            logger.error(f"Failed to add plant {plant.name}: {e}")
            raise StorageError(f"Failed to add plant: {e}", operation="add")

        created = self._model_to_entity(plant_model)
        logger.info(f"Added plant: {created.name} (ID: {created.id})")
        return created

    def _model_to_entity(self, model: PlantModel) -> Plant:
        """Convert database model to domain entity."""
        adoption_date = model.adoption_date
        # SQLite returns naive datetimes; everything is stored as UTC
        if adoption_date is not None and adoption_date.tzinfo is None:
            adoption_date = adoption_date.replace(tzinfo=timezone.utc)

        return Plant(
            id=PlantID(model.id),
            name=model.name,
            type=model.type,
            water_requirement=WaterAmount(model.water_requirement),
            adoption_date=adoption_date,
        )
