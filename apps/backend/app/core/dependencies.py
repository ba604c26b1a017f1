"""FastAPI dependencies for authentication, tenancy and database."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from packages.core.tenancy import build_tenant_auth_path, canonicalize_slug

from app.core.security import decode_access_token
from app.db.session import get_async_session
from app.models.user import User
from app.services.context import CallerContext

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> User:
    """
    Dependency to get the current authenticated user.

    Validates the JWT token and returns the corresponding User with its
    organization loaded.

    Raises:
        HTTPException 401: If token is invalid or user not found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id_str: str | None = payload.get("sub")
    if user_id_str is None:
        raise credentials_exception

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise credentials_exception

    result = await session.execute(
        select(User)
        .options(selectinload(User.organization))
        .where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if user is None:
        raise credentials_exception

    return user


def get_tenant_slug(request: Request) -> str | None:
    """Tenant slug resolved by TenantPathMiddleware, if the path had one."""
    return getattr(request.state, "tenant_slug", None)


async def get_tenant_user(
    user: Annotated[User, Depends(get_current_user)],
    tenant_slug: Annotated[str | None, Depends(get_tenant_slug)],
) -> User:
    """
    Dependency that ties the authenticated user to the requested tenant.

    On tenant-scoped requests the user's organization slug must match the
    slug in the path; otherwise the client is sent to that tenant's login.

    Raises:
        HTTPException 401: If the user does not belong to the tenant.
    """
    if tenant_slug is None:
        return user

    user_slug = (
        canonicalize_slug(user.organization.slug)
        if user.organization is not None
        else None
    )
    if user_slug != canonicalize_slug(tenant_slug):
        logger.info(
            "User %s rejected for tenant %r (belongs to %r)",
            user.id,
            tenant_slug,
            user_slug,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in to this organization to continue",
            headers={
                "WWW-Authenticate": "Bearer",
                "Location": build_tenant_auth_path(tenant_slug),
            },
        )

    return user


def get_caller_context(
    user: Annotated[User, Depends(get_tenant_user)],
) -> CallerContext:
    """Explicit caller context for service operations."""
    return CallerContext.from_user(user)


# Type aliases for convenience
CurrentUser = Annotated[User, Depends(get_current_user)]
TenantUser = Annotated[User, Depends(get_tenant_user)]
CallerContextDep = Annotated[CallerContext, Depends(get_caller_context)]
AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]
