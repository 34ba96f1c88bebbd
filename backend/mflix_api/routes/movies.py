"""
Mflix API - Movie Route Handlers
=================================

What:  /api/movies (list) and /api/movies/{movie_id} (single movie).
How:   Each handler delegates to MovieService and renders the returned
       Envelope; failures are raised and rendered by the global handlers.

Route table:
    GET     /api/movies              list (max LIST_LIMIT)
    POST    /api/movies              405
    PUT     /api/movies              405
    DELETE  /api/movies              405
    GET     /api/movies/{movie_id}   read
    POST    /api/movies/{movie_id}   create (new id assigned by the store)
    PUT     /api/movies/{movie_id}   full replace
    DELETE  /api/movies/{movie_id}   delete
"""

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from mflix_api.database import get_store
from mflix_api.models.documents import MovieDocument
from mflix_api.routes.dispatch import reject_methods
from mflix_api.schemas.envelope import Envelope
from mflix_api.services.identifiers import require_valid_ids
from mflix_api.services.movie_service import MovieService
from mflix_api.services.store_base import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Movies"])

ERROR_RESPONSES = {
    400: {"description": "Invalid movie ID or body", "model": Envelope},
    404: {"description": "Movie not found", "model": Envelope},
    500: {"description": "Store failure", "model": Envelope},
}


def get_movie_service(store: Store = Depends(get_store)) -> MovieService:
    return MovieService(store)


def valid_movie_id(movie_id: str) -> str:
    """Path check, resolved before FastAPI validates the request body."""
    require_valid_ids([("movie", movie_id)])
    return movie_id


@router.get(
    "/movies",
    response_model=Envelope,
    responses={500: ERROR_RESPONSES[500]},
    summary="List movies",
    description="Returns up to 10 movies.",
)
async def list_movies(service: MovieService = Depends(get_movie_service)) -> JSONResponse:
    envelope = await service.list_documents()
    return envelope.to_response()


reject_methods(router, "/movies", ["POST", "PUT", "DELETE"], tags=["Movies"])


@router.get(
    "/movies/{movie_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Get a movie by ID",
)
async def get_movie(
    movie_id: str = Depends(valid_movie_id),
    service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    envelope = await service.get_document(movie_id)
    return envelope.to_response()


@router.post(
    "/movies/{movie_id}",
    status_code=201,
    response_model=Envelope,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Create a movie",
    description=(
        "Inserts the movie described by the request body. The path identifier "
        "must be well-formed but the new movie receives a store-assigned ID."
    ),
)
async def create_movie(
    movie_id: str = Depends(valid_movie_id),
    movie: MovieDocument = Body(...),
    service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    envelope = await service.create_document(movie, resource_id=movie_id)
    return envelope.to_response()


@router.put(
    "/movies/{movie_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Replace a movie",
)
async def update_movie(
    movie_id: str = Depends(valid_movie_id),
    movie: MovieDocument = Body(...),
    service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    envelope = await service.update_document(movie_id, movie)
    return envelope.to_response()


@router.delete(
    "/movies/{movie_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Delete a movie",
)
async def delete_movie(
    movie_id: str = Depends(valid_movie_id),
    service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    envelope = await service.delete_document(movie_id)
    return envelope.to_response()
