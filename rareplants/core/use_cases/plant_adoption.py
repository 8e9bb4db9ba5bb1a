"""
Plant adoption use cases.

The adoption service owns the catalog business rules: listing plants,
looking them up, and recording adoptions.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

import structlog

from rareplants.core.domain.entities import AdoptionRequest, PlantCareInfo, PlantView
from rareplants.core.domain.mapping import to_care_info, to_entity, to_view
from rareplants.core.domain.outcomes import (
    Adopted,
    AdoptionOutcome,
    Found,
    LookupOutcome,
    NotFound,
    ValidationFailed,
)
from rareplants.core.domain.repositories import PlantRepository
from rareplants.shared.types import PlantID, WaterAmount
from rareplants.shared.validation import validate_plant_fields

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdoptionService:
    """Service for browsing the catalog and adopting plants."""

    def __init__(self, plant_repo: PlantRepository, clock: Optional[Clock] = None):
        self.plant_repo = plant_repo
        self.clock = clock or utc_now

    async def list_plants(self) -> List[PlantView]:
        """
        List every plant in the catalog.

        Returns:
            Views of all stored plants, in store order
        """
        plants = await self.plant_repo.get_all()
        logger.info("Plants listed", count=len(plants))
        return [to_view(plant) for plant in plants]

    async def get_plant(self, plant_id: PlantID) -> LookupOutcome[PlantView]:
        """
        Get a plant by its ID.

        Returns:
            Found with the plant view, or NotFound
        """
        plant = await self.plant_repo.get_by_id(plant_id)
        if plant is None:
            logger.info("Plant not found", plant_id=plant_id)
            return NotFound(plant_id)
        return Found(to_view(plant))

    async def get_care_info(self, plant_id: PlantID) -> LookupOutcome[PlantCareInfo]:
        """Get the care requirement of a plant by its ID."""
        plant = await self.plant_repo.get_by_id(plant_id)
        if plant is None:
            logger.info("Plant not found for care info", plant_id=plant_id)
            return NotFound(plant_id)
        return Found(to_care_info(plant))

    async def adopt_plant(self, request: AdoptionRequest) -> AdoptionOutcome:
        """
        Record the adoption of a plant.

        Every successful call inserts a new adopted record; a request carrying
        the ID of an existing catalog entry does not update that entry.

        Args:
            request: Plant fields plus the water requirement

        Returns:
            Adopted with the persisted view, or ValidationFailed with field errors

        Raises:
            StorageError: If the record cannot be persisted
        """
        validation = validate_plant_fields(request.name, request.type, request.water_requirement)
        if not validation.is_valid:
            logger.info(
                "Adoption rejected by validation",
                fields=sorted(validation.by_field()),
            )
            return ValidationFailed(submitted=request, errors=validation.errors)

        view = PlantView(id=request.id, name=request.name.strip(), type=request.type.strip())
        plant = (
            to_entity(view)
            .with_water_requirement(WaterAmount(request.water_requirement))
            .adopt(self.clock())
        )

        created = await self.plant_repo.add(plant)

        logger.info(
            "Plant adopted",
            plant_id=created.id,
            requested_id=request.id,
            adoption_date=created.adoption_date.isoformat(),
        )
        return Adopted(to_view(created))
