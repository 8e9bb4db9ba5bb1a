"""
Explicit mapping between plant entities and their projections.

Each function names every field it copies, so what a projection omits is
visible here rather than decided by a generic mapper.
"""

from rareplants.core.domain.entities import Plant, PlantView, PlantCareInfo
from rareplants.shared.types import UNKNOWN_WATER_REQUIREMENT


def to_view(plant: Plant) -> PlantView:
    """Project a plant for adoption-facing callers. Drops water_requirement."""
    return PlantView(
        id=plant.id,
        name=plant.name,
        type=plant.type,
        adoption_date=plant.adoption_date,
    )


def to_entity(view: PlantView) -> Plant:
    """
    Build a plant entity from a view.

    The view carries no water requirement, so the result holds
    UNKNOWN_WATER_REQUIREMENT; callers must supply the real value before
    persisting.
    """
    return Plant(
        id=view.id,
        name=view.name,
        type=view.type,
        water_requirement=UNKNOWN_WATER_REQUIREMENT,
        adoption_date=view.adoption_date,
    )


def to_care_info(plant: Plant) -> PlantCareInfo:
    return PlantCareInfo(
        id=plant.id,
        name=plant.name,
        water_requirement=plant.water_requirement,
    )
