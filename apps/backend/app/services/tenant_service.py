"""Tenant (organization) lookup, provisioning and system-owner management."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from packages.core.tenancy import (
    InvalidTenantSlugError,
    canonicalize_slug,
    validate_tenant_slug,
)

from app.core.constants import DEFAULT_ORGANIZATION_LOGO
from app.core.security import hash_password, verify_password
from app.models.organization import Organization
from app.models.user import EmploymentStatus, User, UserRole
from app.schemas.tenant import (
    OrganizationCreateRequest,
    OrganizationStatus,
    OrganizationSummary,
    TenantBrand,
)
from app.services.context import CallerContext, require_super_admin
from app.services.errors import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Window for counting monthly-active users
MONTHLY_ACTIVE_WINDOW = timedelta(days=30)


async def get_organization_by_slug(
    session: AsyncSession,
    slug: str,
    *,
    active_only: bool = True,
) -> Organization | None:
    """Look up an organization by slug, compared in canonical form."""
    query = select(Organization).where(Organization.slug == canonicalize_slug(slug))
    if active_only:
        query = query.where(Organization.is_active.is_(True))

    result = await session.execute(query)
    return result.scalar_one_or_none()


async def get_tenant_brand(session: AsyncSession, slug: str) -> TenantBrand | None:
    """
    Public branding for a tenant's login page.

    Returns:
        Name and logo, or None when no active organization has the slug.
    """
    organization = await get_organization_by_slug(session, slug)
    if organization is None:
        return None

    return TenantBrand(
        name=organization.name,
        logo_url=organization.logo_url or DEFAULT_ORGANIZATION_LOGO,
    )


async def create_organization(
    session: AsyncSession,
    payload: OrganizationCreateRequest,
) -> Organization:
    """
    Provision a new organization, optionally with its owner account.

    Raises:
        InvalidRequestError: If the slug is malformed or reserved, or the
            owner password is missing.
        ConflictError: If the slug, domain or owner email is taken.
    """
    try:
        slug = validate_tenant_slug(payload.slug)
    except InvalidTenantSlugError as e:
        raise InvalidRequestError(str(e))

    if payload.owner_email is not None and not payload.owner_password:
        raise InvalidRequestError("Set a password for the organization owner.")

    if await get_organization_by_slug(session, slug, active_only=False) is not None:
        raise ConflictError("That sub-domain is already in use.")

    domain = payload.domain.strip().lower() if payload.domain else None
    if domain:
        result = await session.execute(
            select(Organization.id).where(Organization.domain == domain)
        )
        if result.scalar_one_or_none() is not None:
            raise ConflictError("That organization domain is already in use.")

    organization = Organization(
        name=payload.name.strip(),
        slug=slug,
        domain=domain,
        timezone=payload.timezone,
        locale=payload.locale,
        logo_url=payload.logo_url,
        is_active=True,
    )
    session.add(organization)

    if payload.owner_email is not None:
        owner_email = payload.owner_email.strip().lower()
        result = await session.execute(select(User.id).where(User.email == owner_email))
        if result.scalar_one_or_none() is not None:
            raise ConflictError("An account already exists for that email address.")

        session.add(
            User(
                organization=organization,
                email=owner_email,
                hashed_password=hash_password(payload.owner_password),
                role=UserRole.ORG_OWNER,
                status=EmploymentStatus.ACTIVE,
            )
        )

    try:
        await session.flush()
    except IntegrityError:
        raise ConflictError("That organization already exists.")

    await session.refresh(organization)
    logger.info("Provisioned organization %s (%s)", organization.slug, organization.id)
    return organization


# -----------------------------
# System-owner console
# -----------------------------


def derive_organization_status(user_count: int, active_count: int) -> OrganizationStatus:
    """
    Status shown for an organization.

    No members yet is ONBOARDING; members but none ACTIVE is SUSPENDED.
    """
    if user_count == 0:
        return OrganizationStatus.ONBOARDING
    if active_count == 0:
        return OrganizationStatus.SUSPENDED
    return OrganizationStatus.ACTIVE


async def list_organizations(
    session: AsyncSession,
    caller: CallerContext,
    now: datetime | None = None,
) -> list[OrganizationSummary]:
    """Every organization, oldest first, with member counts and status."""
    require_super_admin(caller)
    cutoff = (now or datetime.now(timezone.utc)) - MONTHLY_ACTIVE_WINDOW

    result = await session.execute(
        select(Organization).order_by(Organization.created_at.asc())
    )
    organizations = result.scalars().all()

    counts = await session.execute(
        select(
            User.organization_id,
            func.count(User.id),
            func.count(User.id).filter(User.status == EmploymentStatus.ACTIVE),
            func.count(User.id).filter(User.last_login_at >= cutoff),
        )
        .where(User.organization_id.is_not(None))
        .group_by(User.organization_id)
    )
    counts_by_org = {
        organization_id: (user_count, active_count, monthly_active)
        for organization_id, user_count, active_count, monthly_active in counts.all()
    }

    summaries = []
    for organization in organizations:
        user_count, active_count, monthly_active = counts_by_org.get(
            organization.id, (0, 0, 0)
        )
        summaries.append(
            OrganizationSummary(
                id=organization.id,
                name=organization.name,
                slug=organization.slug,
                domain=organization.domain,
                timezone=organization.timezone,
                locale=organization.locale,
                logo_url=organization.logo_url,
                created_at=organization.created_at,
                updated_at=organization.updated_at,
                user_count=user_count,
                monthly_active_users=monthly_active,
                status=derive_organization_status(user_count, active_count),
            )
        )
    return summaries


async def confirm_caller_password(
    session: AsyncSession,
    caller: CallerContext,
    password: str,
) -> None:
    """
    Re-check a system owner's password before a destructive action.

    Raises:
        PermissionDeniedError: If the caller is not a system owner.
        AuthenticationError: If the account is gone or the password is wrong.
    """
    require_super_admin(caller)

    result = await session.execute(
        select(User.hashed_password).where(User.id == caller.user_id)
    )
    hashed_password = result.scalar_one_or_none()
    if not hashed_password:
        raise AuthenticationError("Unable to verify your account.")

    if not verify_password(password, hashed_password):
        logger.warning("Password confirmation failed for %s", caller.user_id)
        raise AuthenticationError("Incorrect password. Try again.")


async def delete_organization(
    session: AsyncSession,
    caller: CallerContext,
    organization_id: UUID,
    password: str,
) -> UUID:
    """
    Delete an organization and everything it owns.

    Members and notifications go with it through the ON DELETE CASCADE
    foreign keys. The delete runs in its own savepoint.

    Raises:
        PermissionDeniedError: If the caller is not a system owner.
        AuthenticationError: If the password does not confirm.
        NotFoundError: If no organization has that id.
    """
    await confirm_caller_password(session, caller, password)

    organization = await session.get(Organization, organization_id)
    if organization is None:
        raise NotFoundError("Organization not found.")

    slug = organization.slug
    async with session.begin_nested():
        await session.execute(
            delete(Organization).where(Organization.id == organization_id)
        )

    logger.info(
        "Organization %s (%s) deleted by %s",
        slug,
        organization_id,
        caller.user_id,
    )
    return organization_id
