"""Mapping from ORM rows to announcement domain records."""

from packages.core.announcements.models import (
    AnnouncementMetadata,
    AnnouncementRecipient,
    AnnouncementSender,
    DeliveryRecord,
    PersonProfile,
    format_display_name,
)

from app.models.notification import Notification
from app.models.user import User


def profile_of(user: User) -> PersonProfile:
    return PersonProfile(
        first_name=user.first_name,
        last_name=user.last_name,
        preferred_name=user.preferred_name,
        avatar_url=user.profile_photo_url,
        designation=user.designation,
    )


def to_sender(user: User | None) -> AnnouncementSender:
    """Sender summary; all-None when the sender account is gone."""
    if user is None:
        return AnnouncementSender()
    return AnnouncementSender(
        id=str(user.id),
        email=user.email,
        name=format_display_name(profile_of(user), user.email),
    )


def to_recipient(user: User) -> AnnouncementRecipient:
    profile = profile_of(user)
    return AnnouncementRecipient(
        id=str(user.id),
        name=format_display_name(profile, user.email),
        email=user.email,
        designation=profile.designation,
        avatar_url=profile.avatar_url,
    )


def to_delivery_record(row: Notification) -> DeliveryRecord:
    """
    Convert a notification row into a DeliveryRecord.

    The JSON metadata is parsed here, at the data-access boundary; payloads
    that do not validate become empty metadata.
    """
    return DeliveryRecord(
        id=str(row.id),
        title=row.title,
        body=row.body,
        audience=row.audience,
        status=row.status,
        metadata=AnnouncementMetadata.parse(row.meta),
        created_at=row.created_at,
        sent_at=row.sent_at,
        scheduled_at=row.scheduled_at,
        sender=to_sender(row.sender),
        target=to_recipient(row.target_user) if row.target_user is not None else None,
    )
