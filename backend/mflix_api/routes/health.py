"""
Mflix API - Health Check Route
===============================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the document store and reports aggregate status.
Who:   Called by container health checks, load balancers and monitoring.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mflix_api import __version__
from mflix_api.database import get_store
from mflix_api.schemas.envelope import Envelope
from mflix_api.services.store_base import Store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=Envelope,
    responses={503: {"description": "Store unreachable", "model": Envelope}},
    summary="Service health check",
)
async def health_check(store: Store = Depends(get_store)) -> JSONResponse:
    """
    Check the service and its store.

    Healthy: 200 with `data` = {status, version, database, uptime_seconds}.
    Unreachable store: 503 failure envelope, the store status in `error`.
    A lightweight `ping` command is used; no collection is read.
    """
    if not await store.ping():
        logger.warning("Health check: document store unreachable")
        return Envelope.failure(
            503,
            "Service Unavailable",
            "Document store unreachable (database: disconnected)",
        ).to_response()

    data = {
        "status": "healthy",
        "version": __version__,
        "database": "connected",
        "uptime_seconds": round(time.time() - _start_time, 2),
    }
    return Envelope.ok(data).to_response()
