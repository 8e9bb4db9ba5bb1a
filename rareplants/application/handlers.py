"""
Request handling for the plant catalog.

The handler validates request-shaped input, calls the adoption service and
turns each outcome into a status code and body. It never talks to storage or
the mapping layer, and it never returns internal error text to the caller;
diagnostic detail goes to the log only.
"""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi import status
from pydantic.alias_generators import to_camel
import structlog

from rareplants.application.models import (
    AdoptPlantRequest,
    AdoptionFailureResponse,
    ErrorResponse,
    PlantCareResponse,
    PlantViewResponse,
)
from rareplants.core.domain.outcomes import NotFound, ValidationFailed
from rareplants.core.use_cases.plant_adoption import AdoptionService
from rareplants.shared.exceptions import StorageError
from rareplants.shared.types import PlantID

logger = structlog.get_logger(__name__)

PLANT_LIST_URL = "/api/v1/plants/"

INVALID_PLANT_ID = "invalid plant id"
PLANT_NOT_FOUND = "plant not found"
INTERNAL_ERROR = "internal server error"

UNPROCESSABLE_CONTENT = 422


@dataclass(frozen=True)
class HandlerResponse:
    """Framework-neutral response: status code, JSON-ready body, redirect target."""
    status_code: int
    body: Any = None
    location: Optional[str] = None


def error_response(status_code: int, message: str) -> HandlerResponse:
    return HandlerResponse(status_code, ErrorResponse(error=message).model_dump())


def parse_plant_id(raw: Any) -> Optional[PlantID]:
    """Return the plant ID for a path segment, or None when it is not a positive integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        if not (raw.isascii() and raw.isdigit()):
            return None
        try:
            raw = int(raw)
        except ValueError:
            # Past the interpreter's digit limit for int()
            return None
    if not isinstance(raw, int) or raw <= 0:
        return None
    return PlantID(raw)


class PlantRequestHandler:
    """Translates catalog requests into service calls and service outcomes into responses."""

    def __init__(self, service: AdoptionService):
        self.service = service

    async def list_plants(self) -> HandlerResponse:
        try:
            views = await self.service.list_plants()
        except Exception as e:
            self._log_failure("list_plants", e)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

        return HandlerResponse(
            status.HTTP_200_OK,
            [PlantViewResponse.from_domain(view).to_wire() for view in views],
        )

    async def get_plant(self, raw_id: Any) -> HandlerResponse:
        """
        Look up one plant.

        Returns:
            200 with the plant view, 400 for a malformed or non-positive ID, 404 when no
            record matches, 500 on unexpected failure
        """
        plant_id = parse_plant_id(raw_id)
        if plant_id is None:
            logger.warning("Rejected plant lookup", plant_id=raw_id, reason=INVALID_PLANT_ID)
            return error_response(status.HTTP_400_BAD_REQUEST, INVALID_PLANT_ID)

        try:
            outcome = await self.service.get_plant(plant_id)
        except Exception as e:
            self._log_failure("get_plant", e, plant_id=plant_id)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

        if isinstance(outcome, NotFound):
            return error_response(status.HTTP_404_NOT_FOUND, PLANT_NOT_FOUND)

        return HandlerResponse(status.HTTP_200_OK, PlantViewResponse.from_domain(outcome.value).to_wire())

    async def get_care_info(self, raw_id: Any) -> HandlerResponse:
        plant_id = parse_plant_id(raw_id)
        if plant_id is None:
            logger.warning("Rejected care info lookup", plant_id=raw_id, reason=INVALID_PLANT_ID)
            return error_response(status.HTTP_400_BAD_REQUEST, INVALID_PLANT_ID)

        try:
            outcome = await self.service.get_care_info(plant_id)
        except Exception as e:
            self._log_failure("get_care_info", e, plant_id=plant_id)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

        if isinstance(outcome, NotFound):
            return error_response(status.HTTP_404_NOT_FOUND, PLANT_NOT_FOUND)

        return HandlerResponse(status.HTTP_200_OK, PlantCareResponse.from_domain(outcome.value).to_wire())

    async def adopt_plant(self, payload: AdoptPlantRequest) -> HandlerResponse:
        """
        Adopt a plant.

        Returns:
            303 pointing at the plant list on success, 422 echoing the input
            with per-field errors on validation failure, 500 on unexpected failure
        """
        try:
            outcome = await self.service.adopt_plant(payload.to_domain())
        except Exception as e:
            self._log_failure("adopt_plant", e, name=payload.name)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

        if isinstance(outcome, ValidationFailed):
            errors = {}
            for error in outcome.errors:
                errors.setdefault(to_camel(error.field), []).append(error.message)
            body = AdoptionFailureResponse(input=payload.to_wire(), errors=errors)
            return HandlerResponse(UNPROCESSABLE_CONTENT, body.model_dump())

        logger.info("Adoption accepted", plant_id=outcome.plant.id)
        return HandlerResponse(status.HTTP_303_SEE_OTHER, location=PLANT_LIST_URL)

    @staticmethod
    def _log_failure(operation: str, exc: Exception, **context: Any) -> None:
        logger.error(
            "Plant request failed",
            operation=operation,
            error_type=type(exc).__name__,
            error=str(exc),
            storage_failure=isinstance(exc, StorageError),
            exc_info=True,
            **context,
        )
