"""
Global pytest configuration and fixtures for RarePlants tests.
"""
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from rareplants.core.domain.entities import AdoptionRequest, Plant, create_plant
from rareplants.core.domain.repositories import PlantRepository
from rareplants.core.use_cases.plant_adoption import AdoptionService
from rareplants.infrastructure.database.config import DatabaseConfig, DatabaseManager
from rareplants.infrastructure.database import models  # noqa: F401  registers tables
from rareplants.shared.types import PlantID, WaterAmount

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakePlantRepository(PlantRepository):
    """In-memory plant store that records every call made to it."""

    def __init__(self, plants: Optional[List[Plant]] = None):
        self._plants: Dict[int, Plant] = {}
        self._next_id = 1
        self.calls: List[str] = []
        self.fail_with: Optional[Exception] = None
        for plant in plants or []:
            self._insert(plant)

    def _insert(self, plant: Plant) -> Plant:
        stored = replace(plant, id=PlantID(self._next_id))
        self._plants[stored.id] = stored
        self._next_id += 1
        return stored

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def get_all(self) -> List[Plant]:
        self.calls.append("get_all")
        self._maybe_fail()
        return list(self._plants.values())

    async def get_by_id(self, plant_id: PlantID) -> Optional[Plant]:
        self.calls.append("get_by_id")
        self._maybe_fail()
        return self._plants.get(plant_id)

    async def add(self, plant: Plant) -> Plant:
        self.calls.append("add")
        self._maybe_fail()
        return self._insert(plant)

    @property
    def stored(self) -> List[Plant]:
        return list(self._plants.values())


@pytest.fixture
def sample_plant() -> Plant:
    """An available plant that has not been stored yet."""
    return create_plant(name="Ghost Orchid", type="Epiphyte", water_requirement=WaterAmount(120))


@pytest.fixture
def fake_repo(sample_plant) -> FakePlantRepository:
    """Fake store seeded with one available and one adopted plant."""
    adopted = create_plant(name="Jade Vine", type="Climber", water_requirement=WaterAmount(400))
    return FakePlantRepository([sample_plant, adopted.adopt(FIXED_NOW)])


@pytest.fixture
def empty_repo() -> FakePlantRepository:
    return FakePlantRepository()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def service(fake_repo, fixed_clock) -> AdoptionService:
    return AdoptionService(fake_repo, clock=fixed_clock)


@pytest.fixture
def venus_flytrap() -> AdoptionRequest:
    return AdoptionRequest(name="Venus Flytrap", type="Carnivorous", water_requirement=50)


@pytest.fixture
async def db_manager():
    """Database manager over a fresh in-memory SQLite store."""
    manager = DatabaseManager(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await manager.initialize()
    await manager.create_tables()
    yield manager
    await manager.drop_tables()
    await manager.close()
