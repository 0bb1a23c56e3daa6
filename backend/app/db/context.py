"""Request context for organization scoping."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Request context carrying the active organization.

    An empty org_id means no organization scope; every scoped user store
    operation rejects such a context.
    """

    org_id: str = ""

    @property
    def has_organization(self) -> bool:
        """Whether an organization scope is set."""
        return bool(self.org_id)
