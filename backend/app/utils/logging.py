"""Logging setup and structured logging for scoped user operations."""

import logging
from typing import Any

from backend.app.config import Settings
from backend.app.db.context import RequestContext

logger = logging.getLogger("backend.app.organizations")


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class StructuredUserLogger:
    """Structured logger for organization-scoped user operations."""

    def log_operation(
        self,
        ctx: RequestContext,
        op: str,
        outcome: str,
        user_id: int | None = None,
        reason: str | None = None,
    ) -> None:
        """Log a scoped operation with structured data."""
        log_data: dict[str, Any] = {
            "org_id": ctx.org_id,
            "op": op,
            "outcome": outcome,
        }

        if user_id is not None:
            log_data["user_id"] = user_id
        if reason:
            log_data["reason"] = reason

        log_msg = f"Scoped user {op}: {outcome}"

        if outcome == "ok":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
