"""Explicit caller context passed to every service operation."""

from dataclasses import dataclass
from uuid import UUID

from app.models.user import HR_ADMIN_ROLES, User, UserRole
from app.services.errors import PermissionDeniedError


@dataclass(frozen=True)
class CallerContext:
    """Who is calling, and on behalf of which organization."""

    user_id: UUID
    organization_id: UUID | None
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "CallerContext":
        return cls(
            user_id=user.id,
            organization_id=user.organization_id,
            role=user.role,
        )

    @property
    def is_hr_admin(self) -> bool:
        return self.role in HR_ADMIN_ROLES

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN


def require_hr_admin(caller: CallerContext) -> CallerContext:
    """Raise PermissionDeniedError unless the caller is HR admin or higher."""
    if not caller.is_hr_admin:
        raise PermissionDeniedError("HR admin access required.")
    return caller


def require_super_admin(caller: CallerContext) -> CallerContext:
    """Raise PermissionDeniedError unless the caller is a system owner."""
    if not caller.is_super_admin:
        raise PermissionDeniedError("System owner access required.")
    return caller


def require_organization(caller: CallerContext, message: str) -> UUID:
    """Return the caller's organization id, or raise with ``message``."""
    if caller.organization_id is None:
        raise PermissionDeniedError(message)
    return caller.organization_id
