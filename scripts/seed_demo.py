#!/usr/bin/env python
"""Seed a demo organization with teammates and announcement history."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from random import randint, sample
from uuid import uuid4

# Add project root and backend app to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "apps" / "backend"))

from dotenv import load_dotenv

load_dotenv()

from faker import Faker
from sqlalchemy import select

from packages.core.announcements import (
    AnnouncementMetadata,
    NotificationAudience,
    NotificationStatus,
    RecipientScope,
)
from packages.core.tenancy import build_tenant_auth_path, validate_tenant_slug

from app.core.security import hash_password
from app.db.session import sync_session_factory
from app.models import (
    EmploymentStatus,
    Notification,
    NotificationType,
    Organization,
    User,
    UserRole,
)

fake = Faker()

DEMO_PASSWORD = "changeme123"
DESIGNATIONS = ["Engineer", "Designer", "Product Manager", "Recruiter", "Accountant"]


def seed_organization(session, slug: str, name: str) -> Organization:
    organization = Organization(name=name, slug=validate_tenant_slug(slug), is_active=True)
    session.add(organization)
    session.flush()
    return organization


def seed_members(session, organization: Organization, count: int) -> tuple[User, list[User]]:
    hr_admin = User(
        organization=organization,
        email=f"hr@{organization.slug}.example.com",
        hashed_password=hash_password(DEMO_PASSWORD),
        role=UserRole.HR_ADMIN,
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        designation="HR Lead",
    )
    employees = []
    for idx in range(count):
        employees.append(
            User(
                organization=organization,
                email=f"employee{idx + 1}@{organization.slug}.example.com",
                hashed_password=hash_password(DEMO_PASSWORD),
                role=UserRole.EMPLOYEE,
                status=EmploymentStatus.TERMINATED if idx == 0 else EmploymentStatus.ACTIVE,
                first_name=fake.first_name(),
                last_name=fake.last_name(),
                designation=DESIGNATIONS[idx % len(DESIGNATIONS)],
            )
        )
    session.add(hr_admin)
    session.add_all(employees)
    session.flush()
    return hr_admin, employees


def seed_announcements(
    session,
    organization: Organization,
    sender: User,
    employees: list[User],
    batches: int,
) -> None:
    active = [user for user in employees if user.status != EmploymentStatus.TERMINATED]
    now = datetime.now(timezone.utc)

    for idx in range(batches):
        sent_at = now - timedelta(days=batches - idx, hours=randint(0, 8))
        batch_id = str(uuid4())

        if idx % 2 == 0 or not active:
            session.add(
                Notification(
                    organization_id=organization.id,
                    sender_id=sender.id,
                    title=fake.sentence(nb_words=5).rstrip("."),
                    body=fake.paragraph(nb_sentences=3),
                    type=NotificationType.ANNOUNCEMENT,
                    audience=NotificationAudience.ORGANIZATION,
                    status=NotificationStatus.SENT,
                    meta=AnnouncementMetadata(
                        batch_id=batch_id, scope=RecipientScope.ORGANIZATION
                    ).to_storage(),
                    sent_at=sent_at,
                )
            )
            continue

        title = fake.sentence(nb_words=4).rstrip(".")
        body = fake.paragraph(nb_sentences=2)
        metadata = AnnouncementMetadata(batch_id=batch_id, scope=RecipientScope.SPECIFIC)
        for recipient in sample(active, k=min(len(active), randint(1, 3))):
            session.add(
                Notification(
                    organization_id=organization.id,
                    sender_id=sender.id,
                    target_user_id=recipient.id,
                    title=title,
                    body=body,
                    type=NotificationType.ANNOUNCEMENT,
                    audience=NotificationAudience.INDIVIDUAL,
                    status=NotificationStatus.SENT,
                    meta=metadata.to_storage(),
                    sent_at=sent_at,
                )
            )


def main(slug: str, name: str, employees: int, batches: int) -> None:
    session = sync_session_factory()
    try:
        existing = session.execute(
            select(Organization).where(Organization.slug == slug.strip().lower())
        ).scalar_one_or_none()
        if existing is not None:
            print(f"Organization '{existing.slug}' already exists, nothing to do.")
            return

        organization = seed_organization(session, slug, name)
        hr_admin, members = seed_members(session, organization, employees)
        seed_announcements(session, organization, hr_admin, members, batches)
        session.commit()
        print(f"Seeded '{organization.slug}' with {len(members)} teammates.")
        print(f"Sign in at {build_tenant_auth_path(organization.slug)} as {hr_admin.email}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed a PeopleDesk demo organization")
    parser.add_argument("--slug", default="acme")
    parser.add_argument("--name", default="Acme Corporation")
    parser.add_argument("--employees", type=int, default=8)
    parser.add_argument("--batches", type=int, default=6)
    args = parser.parse_args()

    main(args.slug, args.name, args.employees, args.batches)
