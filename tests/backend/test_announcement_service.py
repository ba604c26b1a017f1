"""
Tests for the HR Announcement Service.

The database session is mocked; these tests check authorization, the
all-or-nothing recipient check, and the records written on send.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from packages.core.announcements import (
    NotificationAudience,
    NotificationStatus,
    RecipientScope,
)

from app.models import EmploymentStatus, Notification, NotificationType, User, UserRole
from app.schemas.announcements import (
    OrganizationAnnouncementRequest,
    SpecificAnnouncementRequest,
)
from app.services.announcements import AnnouncementService
from app.services.announcements.service import NO_RECIPIENTS, UNKNOWN_RECIPIENTS
from app.services.context import CallerContext
from app.services.errors import InvalidRequestError, PermissionDeniedError

ORG_ID = uuid4()
BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


# -----------------------------
# Fixtures
# -----------------------------


def make_session(*scalar_batches: list) -> MagicMock:
    """Mock AsyncSession whose execute() calls return the given scalar rows."""
    session = MagicMock(spec=AsyncSession)
    results = []
    for rows in scalar_batches:
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        results.append(result)
    session.execute.side_effect = results
    return session


def make_user(first_name: str, **kwargs) -> User:
    return User(
        id=uuid4(),
        organization_id=ORG_ID,
        email=f"{first_name.lower()}@acme.test",
        hashed_password="x",
        role=kwargs.pop("role", UserRole.EMPLOYEE),
        status=kwargs.pop("status", EmploymentStatus.ACTIVE),
        first_name=first_name,
        **kwargs,
    )


@pytest.fixture
def hr_caller() -> CallerContext:
    return CallerContext(user_id=uuid4(), organization_id=ORG_ID, role=UserRole.HR_ADMIN)


@pytest.fixture
def org_request() -> OrganizationAnnouncementRequest:
    return OrganizationAnnouncementRequest(
        mode="ORGANIZATION",
        topic="  Office closed Friday ",
        details="The office will be closed for maintenance.",
    )


def specific_request(recipient_ids: list[str]) -> SpecificAnnouncementRequest:
    return SpecificAnnouncementRequest(
        mode="SPECIFIC",
        topic="Welcome aboard",
        details="Please complete your onboarding checklist.",
        recipient_ids=recipient_ids,
    )


# -----------------------------
# Authorization
# -----------------------------


class TestAuthorization:
    """Every operation requires an HR admin who belongs to an organization."""

    @pytest.mark.parametrize("role", [UserRole.EMPLOYEE, UserRole.MANAGER])
    def test_non_admin_is_forbidden(
        self, role: UserRole, org_request: OrganizationAnnouncementRequest
    ) -> None:
        session = make_session()
        service = AnnouncementService(session)
        caller = CallerContext(user_id=uuid4(), organization_id=ORG_ID, role=role)

        with pytest.raises(PermissionDeniedError):
            asyncio.run(service.send_announcement(caller, org_request))
        with pytest.raises(PermissionDeniedError):
            asyncio.run(service.list_announcements(caller))
        with pytest.raises(PermissionDeniedError):
            asyncio.run(service.list_recipients(caller))

        session.execute.assert_not_called()
        session.add.assert_not_called()

    def test_admin_without_organization_is_forbidden(
        self, org_request: OrganizationAnnouncementRequest
    ) -> None:
        session = make_session()
        service = AnnouncementService(session)
        caller = CallerContext(
            user_id=uuid4(), organization_id=None, role=UserRole.SUPER_ADMIN
        )

        with pytest.raises(PermissionDeniedError) as exc_info:
            asyncio.run(service.send_announcement(caller, org_request))

        assert "Join an organization" in exc_info.value.message
        session.add.assert_not_called()


# -----------------------------
# Sending
# -----------------------------


class TestSendAnnouncement:
    """Tests for send_announcement."""

    def test_organization_send_writes_one_record(
        self, hr_caller: CallerContext, org_request: OrganizationAnnouncementRequest
    ) -> None:
        session = make_session()
        service = AnnouncementService(session)

        result = asyncio.run(service.send_announcement(hr_caller, org_request))

        assert result.delivered_count == 1
        session.add.assert_called_once()
        session.flush.assert_awaited_once()

        notification = session.add.call_args.args[0]
        assert isinstance(notification, Notification)
        assert notification.title == "Office closed Friday"
        assert notification.organization_id == ORG_ID
        assert notification.sender_id == hr_caller.user_id
        assert notification.target_user_id is None
        assert notification.type == NotificationType.ANNOUNCEMENT
        assert notification.audience == NotificationAudience.ORGANIZATION
        assert notification.status == NotificationStatus.SENT
        assert notification.meta == {
            "announcementBatchId": result.batch_id,
            "announcementScope": "ORGANIZATION",
        }

    def test_specific_send_writes_one_record_per_recipient(
        self, hr_caller: CallerContext
    ) -> None:
        first, second = uuid4(), uuid4()
        session = make_session([second, first])
        service = AnnouncementService(session)

        result = asyncio.run(
            service.send_announcement(
                hr_caller, specific_request([str(first), str(second), str(first)])
            )
        )

        assert result.delivered_count == 2
        session.begin_nested.assert_called_once()
        session.add_all.assert_called_once()

        notifications = session.add_all.call_args.args[0]
        assert [n.target_user_id for n in notifications] == [first, second]
        for notification in notifications:
            assert notification.audience == NotificationAudience.INDIVIDUAL
            assert notification.meta == {
                "announcementBatchId": result.batch_id,
                "announcementScope": RecipientScope.SPECIFIC.value,
            }

    def test_uuid_spellings_are_deduplicated(self, hr_caller: CallerContext) -> None:
        recipient = uuid4()
        session = make_session([recipient])
        service = AnnouncementService(session)

        result = asyncio.run(
            service.send_announcement(
                hr_caller, specific_request([str(recipient), str(recipient).upper()])
            )
        )

        assert result.delivered_count == 1

    def test_malformed_id_rejects_whole_send(self, hr_caller: CallerContext) -> None:
        """One bad id among good ones writes nothing."""
        session = make_session()
        service = AnnouncementService(session)

        with pytest.raises(InvalidRequestError) as exc_info:
            asyncio.run(
                service.send_announcement(
                    hr_caller, specific_request([str(uuid4()), "invalid-id"])
                )
            )

        assert exc_info.value.message == UNKNOWN_RECIPIENTS
        session.execute.assert_not_called()
        session.add_all.assert_not_called()

    def test_unknown_member_rejects_whole_send(self, hr_caller: CallerContext) -> None:
        """An id outside the organization (or terminated) writes nothing."""
        member, outsider = uuid4(), uuid4()
        session = make_session([member])
        service = AnnouncementService(session)

        with pytest.raises(InvalidRequestError) as exc_info:
            asyncio.run(
                service.send_announcement(
                    hr_caller, specific_request([str(member), str(outsider)])
                )
            )

        assert exc_info.value.message == UNKNOWN_RECIPIENTS
        session.begin_nested.assert_not_called()
        session.add_all.assert_not_called()
        session.flush.assert_not_awaited()

    def test_blank_ids_mean_no_recipients(self, hr_caller: CallerContext) -> None:
        session = make_session()
        service = AnnouncementService(session)
        payload = specific_request(["placeholder"]).model_copy(
            update={"recipient_ids": ["", "  "]}
        )

        with pytest.raises(InvalidRequestError) as exc_info:
            asyncio.run(service.send_announcement(hr_caller, payload))

        assert exc_info.value.message == NO_RECIPIENTS
        session.execute.assert_not_called()


# -----------------------------
# Reading
# -----------------------------


class TestReadSide:
    """Tests for list_announcements and list_recipients."""

    def test_list_announcements_groups_rows(self, hr_caller: CallerContext) -> None:
        sender = make_user("Hana", role=UserRole.HR_ADMIN)
        alice, bob = make_user("Alice"), make_user("Bob", preferred_name="Bobby")

        def row(target: User | None, minutes: int, batch_id: str | None) -> Notification:
            notification = Notification(
                id=uuid4(),
                organization_id=ORG_ID,
                title="Welcome aboard",
                body="Please complete your onboarding checklist.",
                type=NotificationType.ANNOUNCEMENT,
                audience=NotificationAudience.INDIVIDUAL,
                status=NotificationStatus.SENT,
                meta={"announcementBatchId": batch_id} if batch_id else None,
                created_at=BASE_TIME + timedelta(minutes=minutes),
                sent_at=BASE_TIME + timedelta(minutes=minutes),
            )
            notification.sender = sender
            notification.target_user = target
            return notification

        legacy = row(None, 0, None)
        session = make_session([row(alice, 5, "B1"), row(bob, 4, "B1"), legacy])

        feed = asyncio.run(AnnouncementService(session).list_announcements(hr_caller))

        assert feed.total == 2
        batch, single = feed.announcements
        assert batch.id == "B1"
        assert batch.sender.name == "Hana"
        assert batch.recipients.label == "Selected teammates"
        assert [person.name for person in batch.recipients.people] == ["Alice", "Bobby"]
        assert single.id == str(legacy.id)
        assert single.recipients.people == []

    def test_list_recipients(self, hr_caller: CallerContext) -> None:
        alice = make_user("Alice", designation="Engineer", profile_photo_url="a.png")
        session = make_session([alice])

        recipients = asyncio.run(AnnouncementService(session).list_recipients(hr_caller))

        assert len(recipients) == 1
        assert recipients[0].id == str(alice.id)
        assert recipients[0].name == "Alice"
        assert recipients[0].designation == "Engineer"
        assert recipients[0].avatar_url == "a.png"
        session.execute.assert_awaited_once()
