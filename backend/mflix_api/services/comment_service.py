"""
Mflix API - Movie Comment Service
==================================

What:  Resource handler for comments nested under a movie.
How:   Comments live in the `comments` collection and reference their movie
       through `movie_id`. Every single-comment query conjoins the comment's
       own `_id` with `movie_id` from the path, so a comment that belongs to
       another movie is reported as not found.

Referential integrity:
    A comment's lifecycle is independent of its movie: deleting a movie does
    not touch its comments. Creating a comment under a movie that does not
    exist is allowed unless ENFORCE_COMMENT_PARENT is set, in which case the
    movie is looked up first and a missing movie yields 404.
"""

import logging
from typing import Optional

from bson import ObjectId

from mflix_api.config import settings
from mflix_api.exceptions import NotFoundError
from mflix_api.services.movie_service import MovieService
from mflix_api.services.resource_service import ResourceService
from mflix_api.services.store_base import Store

logger = logging.getLogger(__name__)


class CommentService(ResourceService):
    """Nested resource: /api/movies/{movie_id}/comments[/{comment_id}]."""

    collection = "comments"
    resource = "comment"
    plural = "comments"
    parent_resource = "movie"
    parent_field = "movie_id"

    def __init__(
        self,
        store: Store,
        list_limit: Optional[int] = None,
        enforce_parent: Optional[bool] = None,
    ):
        super().__init__(store, list_limit=list_limit)
        self.enforce_parent = (
            settings.enforce_comment_parent if enforce_parent is None else enforce_parent
        )

    async def _check_parent(self, parent_oid: Optional[ObjectId]) -> None:
        if not self.enforce_parent:
            return
        movies = MovieService.collection
        movie = await self._run(
            "find_one", self.store.find_one(movies, {"_id": parent_oid})
        )
        if movie is None:
            logger.info("Rejecting comment for missing movie %s", parent_oid)
            raise NotFoundError(resource=self.parent_resource, resource_id=str(parent_oid))
