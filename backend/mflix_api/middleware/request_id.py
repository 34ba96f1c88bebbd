"""
Mflix API - Request ID Middleware
==================================

What:  Gives every request a correlation id, echoed in `X-Request-ID`.
How:   A client-supplied id is reused when it is a short token of letters,
       digits, '.', '_' or '-'; anything else (missing, oversized, odd
       characters) is replaced by a fresh 12-char hex id so log lines stay
       parseable. The id lives in a ContextVar for the duration of the
       request: access log lines, exception handlers and StoreError context
       read it through `current_request_id()`.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def resolve_request_id(supplied: Optional[str]) -> str:
    """The client's id if it is a safe token, otherwise a new one."""
    if supplied and REQUEST_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


def current_request_id() -> str:
    """Id of the request being served, "" outside a request."""
    return request_id_var.get()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
