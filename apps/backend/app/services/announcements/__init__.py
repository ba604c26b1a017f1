"""HR announcement services."""

from app.services.announcements.service import AnnouncementService, SendResult

__all__ = [
    "AnnouncementService",
    "SendResult",
]
