"""
Mflix API - Method Dispatch
============================

What:  Maps HTTP verbs that a route does not implement to the 405 envelope.
How:   Supported verbs are registered as ordinary FastAPI operations. The
       unsupported verbs of each documented path are registered here to a
       single operation that raises MethodNotAllowedError, so they show up in
       the API docs. Any other verb (PATCH, ...) is rejected by the router
       itself and rendered as the same envelope by the HTTP error handler in
       main.py.

Neither path touches the store.
"""

from typing import Iterable, Optional

from fastapi import APIRouter, Request

from mflix_api.exceptions import MethodNotAllowedError
from mflix_api.schemas.envelope import Envelope

METHOD_NOT_ALLOWED_RESPONSE = {
    405: {"description": "Method not supported on this path", "model": Envelope},
}


async def method_not_allowed(request: Request) -> None:
    """Operation bound to every unsupported verb."""
    raise MethodNotAllowedError(method=request.method)


def reject_methods(
    router: APIRouter,
    path: str,
    methods: Iterable[str],
    tags: Optional[list] = None,
) -> None:
    """
    Register `methods` on `path` as unsupported.

    Example:
        reject_methods(router, "/movies", ["POST", "PUT", "DELETE"])
    """
    for method in methods:
        router.add_api_route(
            path,
            method_not_allowed,
            methods=[method],
            responses=METHOD_NOT_ALLOWED_RESPONSE,
            summary=f"{method} is not supported on {path}",
            tags=tags,
        )
