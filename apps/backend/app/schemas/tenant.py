"""Tenant (organization) schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class TenantBrand(BaseModel):
    """Public branding shown on a tenant's login page."""

    name: str
    logo_url: str | None = None


class OrganizationCreateRequest(BaseModel):
    """Request schema for provisioning a new organization."""

    name: str = Field(min_length=2, max_length=255)
    slug: str = Field(min_length=1, max_length=100, description="Sub-domain / tenant slug")
    domain: str | None = Field(default=None, max_length=255)
    timezone: str | None = Field(default=None, max_length=64)
    locale: str | None = Field(default=None, max_length=16)
    logo_url: str | None = Field(default=None, max_length=1024)
    owner_email: EmailStr | None = Field(
        default=None,
        description="Optional first user, created with the ORG_OWNER role",
    )
    owner_password: str | None = Field(default=None, min_length=6)


class OrganizationResponse(BaseModel):
    """Response schema for an organization."""

    id: UUID
    name: str
    slug: str
    domain: str | None
    logo_url: str | None
    is_active: bool
    created_at: datetime
    home_path: str
    login_url: str


class OrganizationStatus(str, Enum):
    """Lifecycle status shown in the system-owner console."""

    ONBOARDING = "ONBOARDING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class OrganizationSummary(BaseModel):
    """One row of the system-owner organization list."""

    id: UUID
    name: str
    slug: str
    domain: str | None
    timezone: str | None
    locale: str | None
    logo_url: str | None
    created_at: datetime
    updated_at: datetime
    user_count: int
    monthly_active_users: int
    status: OrganizationStatus


class OrganizationListResponse(BaseModel):
    """Every organization, oldest first."""

    organizations: list[OrganizationSummary]


class PasswordConfirmationRequest(BaseModel):
    """The system owner's password, re-entered before a destructive action."""

    password: str = Field(min_length=1)


class PasswordConfirmationResponse(BaseModel):
    valid: bool


class OrganizationDeleteResponse(BaseModel):
    """Result of deleting an organization."""

    organization_id: UUID
    deleted: bool
