"""Tenant (organization) API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from packages.core.tenancy import build_tenant_absolute_url, build_tenant_path
from packages.core.tenancy.routing import DEFAULT_AUTH_PATH

from app.api.errors import to_http_exception
from app.core.config import get_settings
from app.core.dependencies import AsyncSessionDep, CurrentUser
from app.models.organization import Organization
from app.schemas.tenant import (
    OrganizationCreateRequest,
    OrganizationDeleteResponse,
    OrganizationListResponse,
    OrganizationResponse,
    PasswordConfirmationRequest,
    PasswordConfirmationResponse,
    TenantBrand,
)
from app.services import tenant_service
from app.services.context import CallerContext, require_super_admin
from app.services.errors import ServiceError

router = APIRouter()
settings = get_settings()


def _to_response(organization: Organization) -> OrganizationResponse:
    return OrganizationResponse(
        id=organization.id,
        name=organization.name,
        slug=organization.slug,
        domain=organization.domain,
        logo_url=organization.logo_url,
        is_active=organization.is_active,
        created_at=organization.created_at,
        home_path=build_tenant_path(organization.slug),
        login_url=build_tenant_absolute_url(
            settings.public_base_url,
            organization.slug,
            DEFAULT_AUTH_PATH,
        ),
    )


@router.get("/{slug}/brand", response_model=TenantBrand)
async def get_tenant_brand(
    slug: str,
    session: AsyncSessionDep,
) -> TenantBrand:
    """
    Public branding for a tenant login page.

    Raises:
        HTTPException 404: If no active organization uses the slug.
    """
    brand = await tenant_service.get_tenant_brand(session, slug)
    if brand is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )
    return brand


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    payload: OrganizationCreateRequest,
    current_user: CurrentUser,
    session: AsyncSessionDep,
) -> OrganizationResponse:
    """
    Provision a new organization (system owners only).

    Raises:
        HTTPException 400: If the slug is malformed or reserved.
        HTTPException 403: If the caller is not a system owner.
        HTTPException 409: If the slug, domain or owner email is taken.
    """
    try:
        require_super_admin(CallerContext.from_user(current_user))
        organization = await tenant_service.create_organization(session, payload)
    except ServiceError as e:
        raise to_http_exception(e)
    return _to_response(organization)


@router.get("", response_model=OrganizationListResponse)
async def list_organizations(
    current_user: CurrentUser,
    session: AsyncSessionDep,
) -> OrganizationListResponse:
    """
    List every organization with member counts (system owners only).

    Raises:
        HTTPException 403: If the caller is not a system owner.
    """
    try:
        organizations = await tenant_service.list_organizations(
            session, CallerContext.from_user(current_user)
        )
    except ServiceError as e:
        raise to_http_exception(e)
    return OrganizationListResponse(organizations=organizations)


@router.post("/password-confirmation", response_model=PasswordConfirmationResponse)
async def confirm_password(
    payload: PasswordConfirmationRequest,
    current_user: CurrentUser,
    session: AsyncSessionDep,
) -> PasswordConfirmationResponse:
    """
    Check the system owner's password ahead of a delete.

    Raises:
        HTTPException 401: If the password is wrong.
        HTTPException 403: If the caller is not a system owner.
    """
    try:
        await tenant_service.confirm_caller_password(
            session, CallerContext.from_user(current_user), payload.password
        )
    except ServiceError as e:
        raise to_http_exception(e)
    return PasswordConfirmationResponse(valid=True)


@router.delete("/{organization_id}", response_model=OrganizationDeleteResponse)
async def delete_organization(
    organization_id: UUID,
    payload: PasswordConfirmationRequest,
    current_user: CurrentUser,
    session: AsyncSessionDep,
) -> OrganizationDeleteResponse:
    """
    Delete an organization with all of its members and notifications.

    Raises:
        HTTPException 401: If the password is wrong.
        HTTPException 403: If the caller is not a system owner.
        HTTPException 404: If the organization does not exist.
    """
    try:
        deleted_id = await tenant_service.delete_organization(
            session,
            CallerContext.from_user(current_user),
            organization_id,
            payload.password,
        )
    except ServiceError as e:
        raise to_http_exception(e)
    return OrganizationDeleteResponse(organization_id=deleted_id, deleted=True)
