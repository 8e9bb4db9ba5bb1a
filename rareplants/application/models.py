"""
Pydantic models for RarePlants API requests and responses.

These models are the boundary between the external JSON shape (camelCase)
and the internal domain dataclasses (snake_case).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rareplants.core.domain.entities import AdoptionRequest, PlantCareInfo, PlantView


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# Configuration models
class APIConfig(BaseModel):
    """Configuration for FastAPI application."""
    title: str = "RarePlants API"
    version: str = "1.0.0"
    description: str = "Rare plant catalog and adoption service"
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    cors_origins: List[str] = ["*"]
    cors_methods: List[str] = ["*"]
    cors_headers: List[str] = ["*"]


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str


# Plant models
class PlantViewResponse(CamelModel):
    """Response model for the adoption-facing plant view."""
    id: int
    name: str
    type: str
    adoption_date: Optional[datetime] = None

    @classmethod
    def from_domain(cls, view: PlantView) -> "PlantViewResponse":
        return cls(
            id=view.id,
            name=view.name,
            type=view.type,
            adoption_date=view.adoption_date,
        )


class PlantCareResponse(CamelModel):
    """Response model for a plant's care requirement."""
    id: int
    name: str
    water_requirement: int

    @classmethod
    def from_domain(cls, care: PlantCareInfo) -> "PlantCareResponse":
        return cls(id=care.id, name=care.name, water_requirement=care.water_requirement)


class AdoptPlantRequest(CamelModel):
    """
    Request model for adopting a plant.

    Fields are loosely typed on purpose: constraint checking happens in the
    adoption service so a failed submission can be echoed back with
    per-field messages.
    """
    id: Any = None
    name: Any = None
    type: Any = None
    water_requirement: Any = None

    def to_domain(self) -> AdoptionRequest:
        return AdoptionRequest(
            id=self.id if isinstance(self.id, int) and not isinstance(self.id, bool) else None,
            name=self.name if self.name is not None else "",
            type=self.type if self.type is not None else "",
            water_requirement=self.water_requirement,
        )


class AdoptionFailureResponse(BaseModel):
    """Validation failure: the submitted input plus messages per field."""
    input: Dict[str, Any]
    errors: Dict[str, List[str]] = Field(default_factory=dict)


# Health models
class DependencyStatus(BaseModel):
    """Status of a system dependency."""
    name: str
    status: str
    response_time_ms: float
    details: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str
    dependencies: List[DependencyStatus]
