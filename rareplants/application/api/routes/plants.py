"""
Plant catalog API routes.

Routes only wire HTTP to the request handler; status selection and error
shaping live in ``rareplants.application.handlers``.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from rareplants.application.handlers import HandlerResponse, PlantRequestHandler
from rareplants.application.models import (
    AdoptPlantRequest,
    AdoptionFailureResponse,
    ErrorResponse,
    PlantCareResponse,
    PlantViewResponse,
)
from rareplants.core.domain.repositories import PlantRepository
from rareplants.core.use_cases.plant_adoption import AdoptionService
from rareplants.infrastructure.database.dependency import get_plant_repository

router = APIRouter()


def get_adoption_service(
    plant_repo: PlantRepository = Depends(get_plant_repository)
) -> AdoptionService:
    """Get adoption service instance."""
    return AdoptionService(plant_repo)


def get_plant_handler(
    service: AdoptionService = Depends(get_adoption_service)
) -> PlantRequestHandler:
    """Get plant request handler instance."""
    return PlantRequestHandler(service)


def to_http(result: HandlerResponse) -> Response:
    if result.location is not None:
        return RedirectResponse(url=result.location, status_code=result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get(
    "/",
    response_model=List[PlantViewResponse],
    responses={500: {"model": ErrorResponse}},
)
async def list_plants(handler: PlantRequestHandler = Depends(get_plant_handler)) -> Response:
    """List every plant in the catalog."""
    return to_http(await handler.list_plants())


@router.post(
    "/adopt",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={422: {"model": AdoptionFailureResponse}, 500: {"model": ErrorResponse}},
)
async def adopt_plant(
    request: AdoptPlantRequest,
    handler: PlantRequestHandler = Depends(get_plant_handler)
) -> Response:
    """Adopt a plant, then redirect to the plant list."""
    return to_http(await handler.adopt_plant(request))


@router.get(
    "/{plant_id}",
    response_model=PlantViewResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_plant(
    plant_id: str,
    handler: PlantRequestHandler = Depends(get_plant_handler)
) -> Response:
    """Get plant by ID."""
    return to_http(await handler.get_plant(plant_id))


@router.get(
    "/{plant_id}/care",
    response_model=PlantCareResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_plant_care(
    plant_id: str,
    handler: PlantRequestHandler = Depends(get_plant_handler)
) -> Response:
    """Get the care requirement of a plant."""
    return to_http(await handler.get_care_info(plant_id))
