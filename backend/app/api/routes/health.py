"""Health check endpoints.

- /health: process liveness
- /healthz: backing user store reachability
"""

import json
from typing import Any

from fastapi import APIRouter, Response
from sqlalchemy import text

from backend.app.config import Settings, get_settings
from backend.app.db.engine import create_session_factory, get_engine

router = APIRouter()


async def check_store(settings: Settings) -> tuple[bool, str]:
    """Check backing user store connectivity.

    Returns:
        (is_ok, status_message)
    """
    if not settings.database_url:
        return (True, "in_memory")

    try:
        with create_session_factory(get_engine())() as session:
            session.execute(text("SELECT 1"))

        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if the user store is reachable
        503 otherwise
    """
    settings = get_settings()

    store_ok, store_status = await check_store(settings)

    response_body = {
        "status": "ok" if store_ok else "degraded",
        "components": {
            "store": store_status,
        },
    }

    if not store_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
