"""Pydantic schemas."""

from app.schemas.announcements import (
    AnnouncementSendRequest,
    AnnouncementSendResponse,
    OrganizationAnnouncementRequest,
    RecipientDirectoryResponse,
    SpecificAnnouncementRequest,
)
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from app.schemas.tenant import (
    OrganizationCreateRequest,
    OrganizationDeleteResponse,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationStatus,
    OrganizationSummary,
    PasswordConfirmationRequest,
    PasswordConfirmationResponse,
    TenantBrand,
)

__all__ = [
    # Announcements
    "AnnouncementSendRequest",
    "AnnouncementSendResponse",
    "OrganizationAnnouncementRequest",
    "RecipientDirectoryResponse",
    "SpecificAnnouncementRequest",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "UserResponse",
    # Tenant
    "OrganizationCreateRequest",
    "OrganizationDeleteResponse",
    "OrganizationListResponse",
    "OrganizationResponse",
    "OrganizationStatus",
    "OrganizationSummary",
    "PasswordConfirmationRequest",
    "PasswordConfirmationResponse",
    "TenantBrand",
]
