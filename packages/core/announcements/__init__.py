"""Announcement grouping for PeopleDesk."""

from packages.core.announcements.aggregator import (
    ANNOUNCEMENT_FETCH_LIMIT,
    ANNOUNCEMENT_HISTORY_LIMIT,
    AnnouncementAggregator,
    AnnouncementGroup,
    aggregate_announcements,
    build_recipient_label,
    grouping_key,
    resolve_scope,
    scope_from_audience,
)
from packages.core.announcements.models import (
    AnnouncementFeed,
    AnnouncementMetadata,
    AnnouncementRecipient,
    AnnouncementSender,
    AnnouncementSummary,
    DeliveryRecord,
    NotificationAudience,
    NotificationStatus,
    PersonProfile,
    RecipientScope,
    RecipientSummary,
    format_display_name,
)

__all__ = [
    # Aggregation
    "ANNOUNCEMENT_FETCH_LIMIT",
    "ANNOUNCEMENT_HISTORY_LIMIT",
    "AnnouncementAggregator",
    "AnnouncementGroup",
    "aggregate_announcements",
    "build_recipient_label",
    "grouping_key",
    "resolve_scope",
    "scope_from_audience",
    # Models
    "AnnouncementFeed",
    "AnnouncementMetadata",
    "AnnouncementRecipient",
    "AnnouncementSender",
    "AnnouncementSummary",
    "DeliveryRecord",
    "NotificationAudience",
    "NotificationStatus",
    "PersonProfile",
    "RecipientScope",
    "RecipientSummary",
    "format_display_name",
]
