"""User model."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class UserRole(str, Enum):
    """Access level of a user, highest first."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ORG_OWNER = "ORG_OWNER"
    ORG_ADMIN = "ORG_ADMIN"
    HR_ADMIN = "HR_ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class EmploymentStatus(str, Enum):
    """Employment lifecycle of a user within their organization."""

    INVITED = "INVITED"
    ACTIVE = "ACTIVE"
    PROBATION = "PROBATION"
    SABBATICAL = "SABBATICAL"
    TERMINATED = "TERMINATED"


# Roles allowed to manage HR features (announcements, employees, ...)
HR_ADMIN_ROLES = frozenset(
    {
        UserRole.SUPER_ADMIN,
        UserRole.ORG_OWNER,
        UserRole.ORG_ADMIN,
        UserRole.HR_ADMIN,
    }
)


class User(Base):
    """User account for authentication, scoped to an organization."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    organization_id: Mapped[UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="NULL for system owners (super admins)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", create_constraint=True),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    status: Mapped[EmploymentStatus] = mapped_column(
        SQLEnum(EmploymentStatus, name="employment_status", create_constraint=True),
        nullable=False,
        default=EmploymentStatus.ACTIVE,
        index=True,
    )

    # ── Profile ──────────────────────────────
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    preferred_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    designation: Mapped[str | None] = mapped_column(String(150), nullable=True)

    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    organization: Mapped["Organization | None"] = relationship(
        "Organization",
        back_populates="users",
    )

    @property
    def is_hr_admin(self) -> bool:
        return self.role in HR_ADMIN_ROLES

    def __repr__(self) -> str:
        return f"<User {self.email}>"
