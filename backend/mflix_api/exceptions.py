"""
Mflix API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions, one per failure class of a request.
How:   Each exception carries a `message` and an `error` string, which become
       the corresponding fields of the response envelope, plus an optional
       context dict that is logged but never returned to the client.
       Global exception handlers (registered in main.py) translate them.
Who:   Raised by resource services, the store and the method dispatcher.

Exception Hierarchy:
    MflixError (base)
    ├── ValidationError        → 400 Bad Request
    ├── NotFoundError          → 404 Not Found
    ├── MethodNotAllowedError  → 405 Method Not Allowed
    └── StoreError             → 500 Internal Server Error

The four subclasses are mutually exclusive: every request that does not
succeed ends in exactly one of them.
"""

from typing import Any, Dict, Optional

from mflix_api.middleware.request_id import current_request_id


class MflixError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Short description, returned as the envelope `message`
        error:    Detail string, returned as the envelope `error`
        context:  Additional debug info (logged, NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error = error or message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MflixError):
    """
    Raised when a path identifier or request body is malformed.

    When:    Path id is not a 24-character hex ObjectId, or the JSON body
             does not describe a valid document.
    HTTP:    400 Bad Request. Raised before any store access.

    Example response:
        {
            "status": 400,
            "message": "Invalid movie ID",
            "error": "ID format is incorrect"
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        error: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, error=error, context=ctx)
        self.field = field

    @classmethod
    def invalid_id(cls, resource: str, field: Optional[str] = None) -> "ValidationError":
        return cls(
            message=f"Invalid {resource} ID",
            error="ID format is incorrect",
            field=field,
        )


class NotFoundError(MflixError):
    """
    Raised when a well-formed identifier matches no document.

    Also covers the nested case: a comment that exists but belongs to a
    different movie than the one in the path.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=f"{resource.capitalize()} not found",
            error=f"No {resource} found with the given ID",
            context=ctx,
        )
        self.resource = resource
        self.resource_id = resource_id


class MethodNotAllowedError(MflixError):
    """
    Raised by the method dispatcher for a verb a route does not implement.

    HTTP:    405 Method Not Allowed. Never touches the store.
    """

    status_code = 405

    def __init__(self, method: str, context: Optional[Dict[str, Any]] = None):
        method = method.upper()
        ctx = context or {}
        ctx["method"] = method
        super().__init__(
            message="Method Not Allowed",
            error=f"{method} method is not supported",
            context=ctx,
        )
        self.method = method


class StoreError(MflixError):
    """
    Raised when a store operation fails (driver, network, server error).

    The driver's message is carried in `error` for diagnostics; stack traces
    are logged server-side only. The context records the request id so the
    log line can be matched to the response header.
    HTTP:    500 Internal Server Error. Not retried.
    """

    status_code = 500

    def __init__(
        self,
        detail: str = "Store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx.setdefault("request_id", current_request_id())
        super().__init__(
            message="Internal Server Error",
            error=detail,
            context=ctx,
        )
        self.detail = detail
