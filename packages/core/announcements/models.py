"""
Announcement models for PeopleDesk.

A delivery record is one persisted (announcement, recipient) pairing.
An announcement is the logical broadcast the sender intended; it is never
stored, only derived at read time from the delivery records sharing a
batch id.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# -----------------------------
# Enums
# -----------------------------


class RecipientScope(str, Enum):
    """Breadth of an announcement's intended audience."""

    ORGANIZATION = "ORGANIZATION"
    ROLE = "ROLE"
    SPECIFIC = "SPECIFIC"


class NotificationAudience(str, Enum):
    """Audience classifier stored on every delivery record."""

    ORGANIZATION = "ORGANIZATION"
    ROLE = "ROLE"
    INDIVIDUAL = "INDIVIDUAL"


class NotificationStatus(str, Enum):
    """Delivery status of a notification record."""

    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    SENT = "SENT"
    FAILED = "FAILED"


_SCOPE_VALUES = frozenset(scope.value for scope in RecipientScope)


# -----------------------------
# Metadata
# -----------------------------


class AnnouncementMetadata(BaseModel):
    """
    Structured view of the metadata payload on a delivery record.

    Stored as JSON under the keys ``announcementBatchId`` and
    ``announcementScope``. Reading is fail-closed: anything that does not
    validate is treated as "no metadata" (see ``parse``).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    batch_id: str | None = Field(default=None, alias="announcementBatchId")
    scope: RecipientScope | None = Field(default=None, alias="announcementScope")

    @field_validator("batch_id", mode="before")
    @classmethod
    def _batch_id_must_be_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    @field_validator("scope", mode="before")
    @classmethod
    def _drop_unknown_scope(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value in _SCOPE_VALUES else None

    @classmethod
    def empty(cls) -> "AnnouncementMetadata":
        """The fallback used when a record carries no usable metadata."""
        return cls()

    @classmethod
    def parse(cls, raw: Any) -> "AnnouncementMetadata":
        """
        Parse a raw JSON payload read from storage.

        Non-mapping payloads (None, lists, scalars) and payloads that fail
        validation fall back to ``empty()``. Never raises.
        """
        if not isinstance(raw, Mapping):
            return cls.empty()
        try:
            return cls.model_validate(dict(raw))
        except ValidationError:
            return cls.empty()

    def to_storage(self) -> dict[str, str]:
        """Serialize to the JSON payload written at send time."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# -----------------------------
# People
# -----------------------------


@dataclass(frozen=True)
class PersonProfile:
    """Profile fields used to render a person's name and avatar."""

    first_name: str | None = None
    last_name: str | None = None
    preferred_name: str | None = None
    avatar_url: str | None = None
    designation: str | None = None


def format_display_name(profile: PersonProfile | None, fallback: str) -> str:
    """
    Pick the name shown for a person.

    Preferred name wins, then first and last name, then ``fallback``
    (normally the email address).
    """
    if profile is None:
        return fallback

    if profile.preferred_name and profile.preferred_name.strip():
        return profile.preferred_name.strip()

    parts = [
        piece.strip()
        for piece in (profile.first_name, profile.last_name)
        if piece and piece.strip()
    ]
    if parts:
        return " ".join(parts)

    return fallback


class AnnouncementSender(BaseModel):
    """Who sent an announcement. All fields are None for deleted senders."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str | None = None
    email: str | None = None


class AnnouncementRecipient(BaseModel):
    """A teammate targeted by (or eligible for) an announcement."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    designation: str | None = None
    avatar_url: str | None = None


# -----------------------------
# Delivery records
# -----------------------------


@dataclass(frozen=True)
class DeliveryRecord:
    """
    One persisted (announcement, recipient) pairing.

    Attributes:
        id: Record id; doubles as the grouping key for unbatched records.
        metadata: Already-parsed metadata (see AnnouncementMetadata.parse).
        target: The targeted teammate for individual deliveries, else None.
    """

    id: str
    title: str
    body: str
    audience: NotificationAudience
    status: NotificationStatus
    created_at: datetime
    metadata: AnnouncementMetadata = field(default_factory=AnnouncementMetadata)
    sent_at: datetime | None = None
    scheduled_at: datetime | None = None
    sender: AnnouncementSender = field(default_factory=AnnouncementSender)
    target: AnnouncementRecipient | None = None

    @property
    def delivered_at(self) -> datetime:
        return self.sent_at or self.scheduled_at or self.created_at


# -----------------------------
# Read-side summaries
# -----------------------------


class RecipientSummary(BaseModel):
    """Who an announcement reached, as shown in the history view."""

    scope: RecipientScope
    label: str
    count: int | None = None
    people: list[AnnouncementRecipient] = Field(default_factory=list)


class AnnouncementSummary(BaseModel):
    """A logical announcement derived from one batch of delivery records."""

    id: str
    title: str
    body: str
    status: NotificationStatus
    audience: NotificationAudience
    delivered_at: datetime
    created_at: datetime
    sender: AnnouncementSender
    recipients: RecipientSummary


class AnnouncementFeed(BaseModel):
    """Announcement history for one organization."""

    announcements: list[AnnouncementSummary]
    total: int
