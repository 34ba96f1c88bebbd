"""
Mflix API - Movie Service
==========================

What:  Resource handler for the `movies` collection.
Who:   Used by routes/movies.py through `get_movie_service()`.
"""

from mflix_api.services.resource_service import ResourceService


class MovieService(ResourceService):
    """Top-level resource: /api/movies and /api/movies/{movie_id}."""

    collection = "movies"
    resource = "movie"
    plural = "movies"
