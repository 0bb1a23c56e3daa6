"""FastAPI application - organization-scoped user accounts."""

from fastapi import FastAPI

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.users import router as users_router
from backend.app.config import get_settings
from backend.app.utils.logging import configure_logging

configure_logging(get_settings())

app = FastAPI(title="Organization Users API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(users_router, tags=["users"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Organization Users API", "version": "0.1.0"}
