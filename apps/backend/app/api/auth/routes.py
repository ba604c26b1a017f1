"""Auth API routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from packages.core.tenancy import build_tenant_path, canonicalize_slug

from app.core.dependencies import AsyncSessionDep, TenantUser
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User, UserRole
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from app.services.tenant_service import get_organization_by_slug

router = APIRouter()
logger = logging.getLogger(__name__)

SYSTEM_OWNER_HOME = "/system-owner"
HR_ADMIN_HOME = "/hr-admin"


def home_path_for(user: User) -> str:
    """Where a user lands after signing in."""
    if user.organization is None:
        return SYSTEM_OWNER_HOME
    if user.is_hr_admin:
        return build_tenant_path(user.organization.slug, HR_ADMIN_HOME)
    return build_tenant_path(user.organization.slug)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        organization_id=user.organization_id,
        organization_slug=user.organization.slug if user.organization else None,
        home_path=home_path_for(user),
        created_at=user.created_at,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    session: AsyncSessionDep,
) -> LoginResponse:
    """
    Authenticate user and return JWT token.

    When an organization slug is given, the user must belong to it.

    Raises:
        HTTPException 401: If credentials are invalid.
    """
    invalid_credentials = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )

    result = await session.execute(
        select(User)
        .options(selectinload(User.organization))
        .where(User.email == payload.email.lower())
    )
    user = result.scalar_one_or_none()

    if user is None or not verify_password(payload.password, user.hashed_password):
        raise invalid_credentials

    if payload.organization_slug is not None:
        user_slug = user.organization.slug if user.organization else None
        if user_slug != canonicalize_slug(payload.organization_slug):
            logger.info("Login for %s rejected for tenant %r", user.id, payload.organization_slug)
            raise invalid_credentials

    user.last_login_at = datetime.now(timezone.utc)

    claims = {"role": user.role.value}
    if user.organization is not None:
        claims["org"] = user.organization.slug

    access_token = create_access_token(subject=str(user.id), extra_claims=claims)

    return LoginResponse(access_token=access_token, redirect_path=home_path_for(user))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    session: AsyncSessionDep,
) -> UserResponse:
    """
    Register a new employee account in an existing organization.

    Raises:
        HTTPException 400: If email already exists.
        HTTPException 404: If the organization does not exist.
    """
    organization = await get_organization_by_slug(session, payload.organization_slug)
    if organization is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )

    email = payload.email.lower()
    result = await session.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = User(
        organization=organization,
        email=email,
        hashed_password=hash_password(payload.password),
        role=UserRole.EMPLOYEE,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user, attribute_names=["created_at"])

    return to_user_response(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: TenantUser,
) -> UserResponse:
    """Get current authenticated user info."""
    return to_user_response(current_user)
