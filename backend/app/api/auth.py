"""Request context dependency.

Resolves the active organization once at the HTTP boundary and hands it to
the scoped user store as an explicit RequestContext. Caller authentication
happens upstream of this service.
"""

from fastapi import Request

from backend.app.config import get_settings
from backend.app.db.context import RequestContext


async def get_current_context(request: Request) -> RequestContext:
    """Extract request context from the organization header.

    Falls back to the configured default organization when the header is
    missing. An empty result is passed through as "no organization"; the
    scoped store rejects it.

    Args:
        request: Incoming request

    Returns:
        RequestContext with org_id (possibly empty)
    """
    settings = get_settings()
    org_id = request.headers.get(settings.organization_header, "").strip()

    if not org_id:
        org_id = settings.default_organization

    return RequestContext(org_id=org_id)
