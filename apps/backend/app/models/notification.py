"""Notification model: one row per (notification content, recipient)."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packages.core.announcements.models import NotificationAudience, NotificationStatus

from app.db.base import Base


class NotificationType(str, Enum):
    """What kind of event a notification describes."""

    ANNOUNCEMENT = "ANNOUNCEMENT"
    LEAVE = "LEAVE"
    ATTENDANCE = "ATTENDANCE"
    SYSTEM = "SYSTEM"


class Notification(Base):
    """
    A single delivery record.

    Announcements sent to specific teammates produce one row per recipient,
    all sharing a batch id in ``meta``; organization-wide announcements
    produce a single row without a target user.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index(
            "ix_notifications_org_type_created",
            "organization_id",
            "type",
            "created_at",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    organization_id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    target_user_id: Mapped[UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="NULL for organization and role broadcasts",
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    type: Mapped[NotificationType] = mapped_column(
        SQLEnum(NotificationType, name="notification_type", create_constraint=True),
        nullable=False,
    )
    audience: Mapped[NotificationAudience] = mapped_column(
        SQLEnum(NotificationAudience, name="notification_audience", create_constraint=True),
        nullable=False,
    )
    status: Mapped[NotificationStatus] = mapped_column(
        SQLEnum(NotificationStatus, name="notification_status", create_constraint=True),
        nullable=False,
        default=NotificationStatus.SENT,
    )
    meta: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONB,
        nullable=True,
        comment="Announcement batch id and scope",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    scheduled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="notifications",
    )
    sender: Mapped["User | None"] = relationship(
        "User",
        foreign_keys=[sender_id],
    )
    target_user: Mapped["User | None"] = relationship(
        "User",
        foreign_keys=[target_user_id],
    )

    def __repr__(self) -> str:
        return f"<Notification {self.id} {self.type}>"
