"""
Mflix API - Theater Route Handlers
===================================

What:  /api/theaters (list) and /api/theaters/{theater_id} (single theater).
       Same verb table as movies.
"""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from mflix_api.database import get_store
from mflix_api.models.documents import TheaterDocument
from mflix_api.routes.dispatch import reject_methods
from mflix_api.schemas.envelope import Envelope
from mflix_api.services.identifiers import require_valid_ids
from mflix_api.services.store_base import Store
from mflix_api.services.theater_service import TheaterService

router = APIRouter(prefix="/api", tags=["Theaters"])

ERROR_RESPONSES = {
    400: {"description": "Invalid theater ID or body", "model": Envelope},
    404: {"description": "Theater not found", "model": Envelope},
    500: {"description": "Store failure", "model": Envelope},
}


def get_theater_service(store: Store = Depends(get_store)) -> TheaterService:
    return TheaterService(store)


def valid_theater_id(theater_id: str) -> str:
    require_valid_ids([("theater", theater_id)])
    return theater_id


@router.get(
    "/theaters",
    response_model=Envelope,
    responses={500: ERROR_RESPONSES[500]},
    summary="List theaters",
)
async def list_theaters(service: TheaterService = Depends(get_theater_service)) -> JSONResponse:
    envelope = await service.list_documents()
    return envelope.to_response()


reject_methods(router, "/theaters", ["POST", "PUT", "DELETE"], tags=["Theaters"])


@router.get(
    "/theaters/{theater_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Get a theater by ID",
)
async def get_theater(
    theater_id: str = Depends(valid_theater_id),
    service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    envelope = await service.get_document(theater_id)
    return envelope.to_response()


@router.post(
    "/theaters/{theater_id}",
    status_code=201,
    response_model=Envelope,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Create a theater",
)
async def create_theater(
    theater_id: str = Depends(valid_theater_id),
    theater: TheaterDocument = Body(...),
    service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    envelope = await service.create_document(theater, resource_id=theater_id)
    return envelope.to_response()


@router.put(
    "/theaters/{theater_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Replace a theater",
)
async def update_theater(
    theater_id: str = Depends(valid_theater_id),
    theater: TheaterDocument = Body(...),
    service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    envelope = await service.update_document(theater_id, theater)
    return envelope.to_response()


@router.delete(
    "/theaters/{theater_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Delete a theater",
)
async def delete_theater(
    theater_id: str = Depends(valid_theater_id),
    service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    envelope = await service.delete_document(theater_id)
    return envelope.to_response()
