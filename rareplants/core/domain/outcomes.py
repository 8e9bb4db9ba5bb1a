"""
Outcome values returned by the adoption service.

Expected results such as "not found" or "validation failed" are returned as
tagged values so callers must handle them explicitly. Only unexpected
failures are raised.
"""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar, Union

from rareplants.core.domain.entities import AdoptionRequest, PlantView
from rareplants.shared.validation import FieldError

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """A lookup that matched a record."""
    value: T


@dataclass(frozen=True)
class NotFound:
    """A lookup that matched nothing."""
    plant_id: int


@dataclass(frozen=True)
class Adopted:
    """A successful adoption, carrying the persisted record's view."""
    plant: PlantView


@dataclass(frozen=True)
class ValidationFailed:
    """An adoption rejected before persistence, echoing the submitted input."""
    submitted: AdoptionRequest
    errors: List[FieldError] = field(default_factory=list)


LookupOutcome = Union[Found[T], NotFound]
AdoptionOutcome = Union[Adopted, ValidationFailed]
