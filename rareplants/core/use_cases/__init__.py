"""
Application business logic and use cases.

This module contains the services that orchestrate the business logic of the
RarePlants catalog.
"""

from .plant_adoption import AdoptionService

__all__ = [
    "AdoptionService",
]
