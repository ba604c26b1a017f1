"""Authentication schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: EmailStr
    password: str = Field(min_length=6)
    organization_slug: str | None = Field(
        default=None,
        description="Tenant to sign in to; omitted for system owners",
    )


class LoginResponse(BaseModel):
    """Response schema for successful login."""

    access_token: str
    token_type: str = "bearer"
    redirect_path: str


class RegisterRequest(BaseModel):
    """Request schema for user registration into an existing organization."""

    email: EmailStr
    password: str = Field(min_length=6)
    organization_slug: str = Field(min_length=1)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class UserResponse(BaseModel):
    """Response schema for user info."""

    id: UUID
    email: str
    role: UserRole
    organization_id: UUID | None
    organization_slug: str | None = None
    home_path: str
    created_at: datetime
