"""Liveness and readiness endpoints."""

import logging
import time
from datetime import datetime, timezone

from litestar import Response, get
from litestar.status_codes import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from gpl_site.config import DEBUG
from gpl_site.store import Store

logger = logging.getLogger("GPL.health")

STARTED_AT = time.monotonic()


@get("/health", tags=["health"])
async def health(store: Store) -> Response:
    """Readiness: the app is up and the database answers."""
    now = datetime.now(timezone.utc).isoformat()
    if await store.ping():
        return Response(
            content={
                "status": "healthy",
                "database": "ok",
                "timestamp": now,
                "uptime": round(time.monotonic() - STARTED_AT, 3),
                "environment": "development" if DEBUG else "production",
            },
            status_code=HTTP_200_OK,
            media_type="application/json",
        )
    logger.error("Health check failed: database unreachable")
    return Response(
        content={
            "status": "unhealthy",
            "database": "unreachable",
            "error": "Database connection failed",
            "timestamp": now,
        },
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        media_type="application/json",
    )


@get("/ping", tags=["health"], sync_to_thread=False)
def ping() -> dict:
    """Liveness only."""
    return {"message": "pong"}


routes = [health, ping]
