"""
Domain entities for RarePlants.

These represent the catalog records and the projections handed to callers.
Entities are immutable; state changes return a new instance.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from rareplants.shared.types import (
    PlantID,
    PlantStatus,
    WaterAmount,
    UNKNOWN_WATER_REQUIREMENT,
)
from rareplants.shared.exceptions import PlantAlreadyAdoptedError


@dataclass(frozen=True)
class Plant:
    """A rare plant catalog entry with its care requirement and adoption status."""
    id: Optional[PlantID]
    name: str
    type: str
    water_requirement: WaterAmount = UNKNOWN_WATER_REQUIREMENT
    adoption_date: Optional[datetime] = None

    def __post_init__(self):
        if self.water_requirement < 0:
            raise ValueError("Water requirement cannot be negative")

    @property
    def status(self) -> PlantStatus:
        if self.adoption_date is None:
            return PlantStatus.AVAILABLE
        return PlantStatus.ADOPTED

    @property
    def is_adopted(self) -> bool:
        return self.adoption_date is not None

    def adopt(self, adopted_at: Optional[datetime] = None) -> 'Plant':
        """Return an adopted copy of this plant stamped with the adoption time."""
        if self.is_adopted:
            raise PlantAlreadyAdoptedError(self.id)
        return replace(self, adoption_date=adopted_at or datetime.now(timezone.utc))

    def with_water_requirement(self, water_requirement: WaterAmount) -> 'Plant':
        """Return a copy carrying the given water requirement."""
        return replace(self, water_requirement=water_requirement)


@dataclass(frozen=True)
class PlantView:
    """Adoption-facing projection of a plant. Carries no care requirement."""
    id: Optional[PlantID]
    name: str
    type: str
    adoption_date: Optional[datetime] = None


@dataclass(frozen=True)
class PlantCareInfo:
    """Care-facing projection of a plant."""
    id: PlantID
    name: str
    water_requirement: WaterAmount


@dataclass(frozen=True)
class AdoptionRequest:
    """Input for adopting a plant: the view fields plus the water requirement."""
    name: str
    type: str
    water_requirement: int
    id: Optional[PlantID] = None


def create_plant(name: str, type: str, water_requirement: WaterAmount) -> Plant:
    """Factory function to create a new, available, not yet persisted plant."""
    return Plant(
        id=None,
        name=name.strip(),
        type=type.strip(),
        water_requirement=water_requirement,
    )
