"""SQLAlchemy models."""

from app.models.organization import Organization
from app.models.user import HR_ADMIN_ROLES, EmploymentStatus, User, UserRole
from app.models.notification import Notification, NotificationType

__all__ = [
    "Organization",
    "User",
    "UserRole",
    "EmploymentStatus",
    "HR_ADMIN_ROLES",
    "Notification",
    "NotificationType",
]
