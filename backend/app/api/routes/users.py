"""User endpoints scoped to the request's organization.

GET /users, POST /users, GET /users/{user_id}, PATCH /users/{user_id},
DELETE /users/{user_id}
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from backend.app.api.auth import get_current_context
from backend.app.db.context import RequestContext
from backend.app.db.repositories import UserStore
from backend.app.db.stores import get_backing_store
from backend.app.errors import (
    InvalidContextError,
    UserExistsError,
    UserNotFoundError,
    UserStoreError,
    UserValidationError,
)
from backend.app.models.users import Role, User, UserQuery
from backend.app.organizations.users import OrganizationUsersStore
from backend.app.utils.logging import StructuredUserLogger
from backend.app.utils.metrics import PrometheusUserStoreMetrics

router = APIRouter(prefix="/users", tags=["users"])


class CreateUserRequest(BaseModel):
    """Request body for POST /users."""

    name: str = Field(..., min_length=1, description="User name")
    provider: str = Field("", description="Authentication provider")
    scheme: str = Field("", description="Authentication scheme")
    roles: list[Role] = Field(default_factory=list)


class UpdateUserRequest(BaseModel):
    """Request body for PATCH /users/{user_id}."""

    roles: list[Role] = Field(default_factory=list)


class UserListResponse(BaseModel):
    """Response for GET /users."""

    users: list[User]


def get_users_store(
    store: Annotated[UserStore, Depends(get_backing_store)],
) -> OrganizationUsersStore:
    """Wrap the backing store in the organization-scoped store."""
    return OrganizationUsersStore(
        store,
        metrics=PrometheusUserStoreMetrics(),
        logger=StructuredUserLogger(),
    )


def _http_error(exc: UserStoreError) -> HTTPException:
    """Map a user store error to its HTTP status."""
    if isinstance(exc, InvalidContextError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, UserValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, UserNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if isinstance(exc, UserExistsError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=UserListResponse)
def list_users(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    users: Annotated[OrganizationUsersStore, Depends(get_users_store)],
) -> UserListResponse:
    """List users of the current organization.

    Args:
        ctx: Request context (org_id)
        users: Scoped user store

    Returns:
        Users reduced to their role in the organization
    """
    try:
        return UserListResponse(users=users.all(ctx))
    except UserStoreError as e:
        raise _http_error(e) from e


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    users: Annotated[OrganizationUsersStore, Depends(get_users_store)],
) -> User:
    """Add a user to the current organization.

    An existing name/provider/scheme identity is granted the role instead
    of being duplicated.
    """
    user = User(
        name=request.name,
        provider=request.provider,
        scheme=request.scheme,
        roles=request.roles,
    )

    try:
        return users.add(ctx, user)
    except UserStoreError as e:
        raise _http_error(e) from e


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: int,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    users: Annotated[OrganizationUsersStore, Depends(get_users_store)],
) -> User:
    """Get one user of the current organization."""
    try:
        return users.get(ctx, UserQuery.by_id(user_id))
    except UserStoreError as e:
        raise _http_error(e) from e


@router.patch("/{user_id}", response_model=User)
def update_user(
    user_id: int,
    request: UpdateUserRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    users: Annotated[OrganizationUsersStore, Depends(get_users_store)],
) -> User:
    """Change the user's role in the current organization.

    Returns:
        Updated user as seen from the organization
    """
    try:
        current = users.get(ctx, UserQuery.by_id(user_id))
        users.update(ctx, current.model_copy(update={"roles": request.roles}))
        return users.get(ctx, UserQuery.by_id(user_id))
    except UserStoreError as e:
        raise _http_error(e) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    users: Annotated[OrganizationUsersStore, Depends(get_users_store)],
) -> Response:
    """Remove the user from the current organization."""
    try:
        current = users.get(ctx, UserQuery.by_id(user_id))
        users.delete(ctx, current)
    except UserStoreError as e:
        raise _http_error(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
