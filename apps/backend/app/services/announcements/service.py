"""
HR Announcement Service.

Lists announcement history (grouped from per-recipient delivery records),
lists eligible recipients, and sends announcements.

Every operation takes an explicit CallerContext and requires an HR admin
(or higher) caller who belongs to an organization.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from packages.core.announcements import (
    ANNOUNCEMENT_FETCH_LIMIT,
    AnnouncementAggregator,
    AnnouncementFeed,
    AnnouncementMetadata,
    AnnouncementRecipient,
    NotificationAudience,
    NotificationStatus,
    RecipientScope,
)

from app.models.notification import Notification, NotificationType
from app.models.user import EmploymentStatus, User
from app.schemas.announcements import (
    OrganizationAnnouncementRequest,
    SpecificAnnouncementRequest,
)
from app.services.announcements.mapping import to_delivery_record, to_recipient
from app.services.context import CallerContext, require_hr_admin, require_organization
from app.services.errors import InvalidRequestError

logger = logging.getLogger(__name__)

NO_ORGANIZATION_VIEW = "Join an organization to view announcements."
NO_ORGANIZATION_SEND = "Join an organization to send announcements."
NO_RECIPIENTS = "Select at least one teammate to notify."
UNKNOWN_RECIPIENTS = "One or more selected teammates could not be found."


@dataclass(frozen=True)
class SendResult:
    """Outcome of a successful send."""

    delivered_count: int
    batch_id: str


class AnnouncementService:
    """Announcement operations for one database session."""

    def __init__(
        self,
        session: AsyncSession,
        aggregator: AnnouncementAggregator | None = None,
    ):
        """
        Initialize the service.

        Args:
            session: Async database session (committed by the caller).
            aggregator: Grouping strategy. Uses the default history limit
                if not provided.
        """
        self._session = session
        self._aggregator = aggregator or AnnouncementAggregator()

    # -------------------------
    # Read side
    # -------------------------

    async def list_announcements(self, caller: CallerContext) -> AnnouncementFeed:
        """Return the organization's announcement history, newest first."""
        require_hr_admin(caller)
        organization_id = require_organization(caller, NO_ORGANIZATION_VIEW)

        result = await self._session.execute(
            select(Notification)
            .options(
                selectinload(Notification.sender),
                selectinload(Notification.target_user),
            )
            .where(
                Notification.organization_id == organization_id,
                Notification.type == NotificationType.ANNOUNCEMENT,
            )
            .order_by(Notification.created_at.desc())
            .limit(ANNOUNCEMENT_FETCH_LIMIT)
        )
        rows = result.scalars().all()

        return self._aggregator.build_feed(to_delivery_record(row) for row in rows)

    async def list_recipients(
        self, caller: CallerContext
    ) -> list[AnnouncementRecipient]:
        """Return the active members of the caller's organization."""
        require_hr_admin(caller)
        organization_id = require_organization(caller, NO_ORGANIZATION_SEND)

        result = await self._session.execute(
            select(User)
            .where(
                User.organization_id == organization_id,
                User.status != EmploymentStatus.TERMINATED,
            )
            .order_by(
                User.preferred_name.asc().nulls_last(),
                User.first_name.asc().nulls_last(),
                User.email.asc(),
            )
        )
        return [to_recipient(user) for user in result.scalars().all()]

    # -------------------------
    # Write side
    # -------------------------

    async def send_announcement(
        self,
        caller: CallerContext,
        payload: OrganizationAnnouncementRequest | SpecificAnnouncementRequest,
    ) -> SendResult:
        """
        Send an announcement.

        ORGANIZATION mode writes a single organization-wide record.
        SPECIFIC mode writes one record per recipient, all sharing one batch
        id, after checking every recipient is an active member of the
        caller's organization. Nothing is written if any id is unknown.

        Raises:
            PermissionDeniedError: Caller is not an HR admin or has no
                organization.
            InvalidRequestError: No recipients, or an unknown recipient.
        """
        require_hr_admin(caller)
        organization_id = require_organization(caller, NO_ORGANIZATION_SEND)

        topic = payload.topic.strip()
        details = payload.details.strip()
        batch_id = str(uuid4())
        now = datetime.now(timezone.utc)

        if isinstance(payload, OrganizationAnnouncementRequest):
            notification = Notification(
                organization_id=organization_id,
                sender_id=caller.user_id,
                title=topic,
                body=details,
                type=NotificationType.ANNOUNCEMENT,
                audience=NotificationAudience.ORGANIZATION,
                status=NotificationStatus.SENT,
                meta=AnnouncementMetadata(
                    batch_id=batch_id,
                    scope=RecipientScope.ORGANIZATION,
                ).to_storage(),
                sent_at=now,
            )
            self._session.add(notification)
            await self._session.flush()

            logger.info(
                "Organization announcement %s sent by %s to org %s",
                batch_id,
                caller.user_id,
                organization_id,
            )
            return SendResult(delivered_count=1, batch_id=batch_id)

        recipient_ids = await self._resolve_recipients(
            organization_id, payload.recipient_ids
        )
        metadata = AnnouncementMetadata(
            batch_id=batch_id,
            scope=RecipientScope.SPECIFIC,
        ).to_storage()

        async with self._session.begin_nested():
            notifications = [
                Notification(
                    organization_id=organization_id,
                    sender_id=caller.user_id,
                    target_user_id=recipient_id,
                    title=topic,
                    body=details,
                    type=NotificationType.ANNOUNCEMENT,
                    audience=NotificationAudience.INDIVIDUAL,
                    status=NotificationStatus.SENT,
                    meta=dict(metadata),
                    sent_at=now,
                )
                for recipient_id in recipient_ids
            ]
            self._session.add_all(notifications)
            await self._session.flush()

        logger.info(
            "Announcement %s sent by %s to %d teammates",
            batch_id,
            caller.user_id,
            len(notifications),
        )
        return SendResult(delivered_count=len(notifications), batch_id=batch_id)

    async def _resolve_recipients(
        self, organization_id: UUID, raw_ids: list[str]
    ) -> list[UUID]:
        """
        Resolve requested ids to active members of the organization.

        Returns:
            The de-duplicated ids, in request order.

        Raises:
            InvalidRequestError: If the list is empty or any id does not
                resolve.
        """
        unique_ids = list(dict.fromkeys(raw_id.strip() for raw_id in raw_ids))
        unique_ids = [raw_id for raw_id in unique_ids if raw_id]
        if not unique_ids:
            raise InvalidRequestError(NO_RECIPIENTS)

        try:
            requested = list(dict.fromkeys(UUID(raw_id) for raw_id in unique_ids))
        except ValueError:
            raise InvalidRequestError(UNKNOWN_RECIPIENTS)

        result = await self._session.execute(
            select(User.id).where(
                User.id.in_(requested),
                User.organization_id == organization_id,
                User.status != EmploymentStatus.TERMINATED,
            )
        )
        found = set(result.scalars().all())

        missing = [user_id for user_id in requested if user_id not in found]
        if missing:
            logger.warning(
                "Rejected announcement to org %s: %d unknown recipients",
                organization_id,
                len(missing),
            )
            raise InvalidRequestError(UNKNOWN_RECIPIENTS)

        return requested
