"""
Repository interfaces for RarePlants domain entities.

These abstract interfaces define the contracts for data access, keeping the
adoption service independent of the storage technology and allowing fake
repositories in tests.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from rareplants.shared.types import PlantID
from rareplants.core.domain.entities import Plant


class PlantRepository(ABC):
    """Repository interface for Plant entities."""

    @abstractmethod
    async def get_all(self) -> List[Plant]:
        """Retrieve every stored plant in a single bulk read, in creation order."""
        pass

    @abstractmethod
    async def get_by_id(self, plant_id: PlantID) -> Optional[Plant]:
        """Retrieve a plant by its ID. Returns None if no record matches."""
        pass

    @abstractmethod
    async def add(self, plant: Plant) -> Plant:
        """
        Insert a new plant and return the persisted entity.

        The store always assigns a fresh ID; any ID on the argument is ignored.
        The write is committed before this returns.

        Raises:
            StorageError: If the write cannot complete
        """
        pass
