"""
Mflix API - Movie Comment Route Handlers
=========================================

What:  Comments nested under a movie.
How:   Handlers pass both path identifiers to CommentService, which validates
       the movie id first, then the comment id, before any store access.

Route table:
    GET     /api/movies/{movie_id}/comments                 list (max LIST_LIMIT)
    POST    /api/movies/{movie_id}/comments                 405
    PUT     /api/movies/{movie_id}/comments                 405
    DELETE  /api/movies/{movie_id}/comments                 405
    GET     /api/movies/{movie_id}/comments/{comment_id}    read (scoped to movie)
    POST    /api/movies/{movie_id}/comments/{comment_id}    create under movie
    PUT     /api/movies/{movie_id}/comments/{comment_id}    full replace
    DELETE  /api/movies/{movie_id}/comments/{comment_id}    delete
"""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from mflix_api.database import get_store
from mflix_api.models.documents import CommentDocument
from mflix_api.routes.dispatch import reject_methods
from mflix_api.schemas.envelope import Envelope
from mflix_api.services.comment_service import CommentService
from mflix_api.services.identifiers import require_valid_ids
from mflix_api.services.store_base import Store

router = APIRouter(prefix="/api", tags=["Movie Comments"])

ERROR_RESPONSES = {
    400: {"description": "Invalid movie/comment ID or body", "model": Envelope},
    404: {"description": "Comment not found for this movie", "model": Envelope},
    500: {"description": "Store failure", "model": Envelope},
}


def get_comment_service(store: Store = Depends(get_store)) -> CommentService:
    return CommentService(store)


# Path checks, resolved before FastAPI validates the request body. The movie id
# is a sub-dependency of the comment id, so it is always checked first.
def valid_movie_id(movie_id: str) -> str:
    require_valid_ids([("movie", movie_id)])
    return movie_id


def valid_comment_id(comment_id: str, movie_id: str = Depends(valid_movie_id)) -> str:
    require_valid_ids([("comment", comment_id)])
    return comment_id


@router.get(
    "/movies/{movie_id}/comments",
    response_model=Envelope,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="List the comments of a movie",
)
async def list_comments(
    movie_id: str = Depends(valid_movie_id),
    service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    envelope = await service.list_documents(parent_id=movie_id)
    return envelope.to_response()


reject_methods(
    router, "/movies/{movie_id}/comments", ["POST", "PUT", "DELETE"], tags=["Movie Comments"]
)


@router.get(
    "/movies/{movie_id}/comments/{comment_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Get a comment of a movie",
)
async def get_comment(
    movie_id: str = Depends(valid_movie_id),
    comment_id: str = Depends(valid_comment_id),
    service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    envelope = await service.get_document(comment_id, parent_id=movie_id)
    return envelope.to_response()


@router.post(
    "/movies/{movie_id}/comments/{comment_id}",
    status_code=201,
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Add a comment to a movie",
    description="The comment's movie_id is always the movie in the path.",
)
async def create_comment(
    movie_id: str = Depends(valid_movie_id),
    comment_id: str = Depends(valid_comment_id),
    comment: CommentDocument = Body(...),
    service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    envelope = await service.create_document(comment, resource_id=comment_id, parent_id=movie_id)
    return envelope.to_response()


@router.put(
    "/movies/{movie_id}/comments/{comment_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Replace a comment of a movie",
)
async def update_comment(
    movie_id: str = Depends(valid_movie_id),
    comment_id: str = Depends(valid_comment_id),
    comment: CommentDocument = Body(...),
    service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    envelope = await service.update_document(comment_id, comment, parent_id=movie_id)
    return envelope.to_response()


@router.delete(
    "/movies/{movie_id}/comments/{comment_id}",
    response_model=Envelope,
    responses=ERROR_RESPONSES,
    summary="Delete a comment of a movie",
)
async def delete_comment(
    movie_id: str = Depends(valid_movie_id),
    comment_id: str = Depends(valid_comment_id),
    service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    envelope = await service.delete_document(comment_id, parent_id=movie_id)
    return envelope.to_response()
