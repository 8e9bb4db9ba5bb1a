"""
Unit tests for Plant entity and the mapping layer.
"""
from dataclasses import FrozenInstanceError, fields
from datetime import datetime, timezone

import pytest

from rareplants.core.domain.entities import Plant, PlantView, create_plant
from rareplants.core.domain.mapping import to_care_info, to_entity, to_view
from rareplants.shared.exceptions import PlantAlreadyAdoptedError
from rareplants.shared.types import PlantID, PlantStatus, UNKNOWN_WATER_REQUIREMENT, WaterAmount


class TestPlant:
    """Test cases for Plant entity."""

    def test_create_plant_is_available(self):
        plant = create_plant(name="  Corpse Flower ", type="Titan Arum", water_requirement=WaterAmount(800))

        assert plant.id is None
        assert plant.name == "Corpse Flower"
        assert plant.type == "Titan Arum"
        assert plant.water_requirement == 800
        assert plant.adoption_date is None
        assert plant.status == PlantStatus.AVAILABLE

    def test_adopt_stamps_date_and_returns_new_instance(self, sample_plant):
        adopted_at = datetime(2024, 5, 1, tzinfo=timezone.utc)

        adopted = sample_plant.adopt(adopted_at)

        assert adopted.adoption_date == adopted_at
        assert adopted.status == PlantStatus.ADOPTED
        assert sample_plant.adoption_date is None

    def test_adopt_defaults_to_now(self, sample_plant):
        before = datetime.now(timezone.utc)

        adopted = sample_plant.adopt()

        assert adopted.adoption_date >= before

    def test_adoption_is_one_way(self, sample_plant):
        adopted = sample_plant.adopt()

        with pytest.raises(PlantAlreadyAdoptedError):
            adopted.adopt()

    def test_id_cannot_be_reassigned(self):
        plant = Plant(id=PlantID(3), name="Middlemist Red", type="Camellia", water_requirement=WaterAmount(200))

        with pytest.raises(FrozenInstanceError):
            plant.id = PlantID(4)

    def test_negative_water_requirement_rejected(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            Plant(id=None, name="Kokia", type="Shrub", water_requirement=WaterAmount(-1))


class TestMapping:
    """Test cases for entity/view mapping."""

    def test_to_view_drops_water_requirement(self):
        adopted_at = datetime(2024, 2, 2, tzinfo=timezone.utc)
        plant = Plant(
            id=PlantID(7),
            name="Rafflesia",
            type="Parasitic",
            water_requirement=WaterAmount(300),
            adoption_date=adopted_at,
        )

        view = to_view(plant)

        assert view == PlantView(id=PlantID(7), name="Rafflesia", type="Parasitic", adoption_date=adopted_at)
        assert "water_requirement" not in {f.name for f in fields(PlantView)}

    def test_to_entity_uses_unknown_water_requirement(self):
        view = PlantView(id=PlantID(2), name="Lady's Slipper", type="Orchid")

        plant = to_entity(view)

        assert plant.id == 2
        assert plant.name == "Lady's Slipper"
        assert plant.type == "Orchid"
        assert plant.adoption_date is None
        assert plant.water_requirement == UNKNOWN_WATER_REQUIREMENT

    def test_to_care_info_exposes_water_requirement(self):
        plant = Plant(id=PlantID(5), name="Youtan Poluo", type="Flower", water_requirement=WaterAmount(15))

        care = to_care_info(plant)

        assert care.id == 5
        assert care.name == "Youtan Poluo"
        assert care.water_requirement == 15
