#!/usr/bin/env python
"""Script to create database tables and seed the default organization."""

import sys
from pathlib import Path

# Add project root and backend app to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "apps" / "backend"))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import create_engine, select, text
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.constants import (
    DEFAULT_TENANT_ID,
    DEFAULT_TENANT_NAME,
    DEFAULT_TENANT_SLUG,
)
from app.core.security import hash_password
from app.db.base import Base

# Import ALL models so their tables are registered with Base.metadata
from app.models import (  # noqa: F401
    EmploymentStatus,
    Notification,
    Organization,
    User,
    UserRole,
)

settings = get_settings()


def create_tables(drop_existing: bool = False) -> None:
    """Create all database tables."""
    engine = create_engine(settings.database_url_sync, echo=True)

    if drop_existing:
        print("Dropping existing tables...")
        Base.metadata.drop_all(engine)
        print("✓ Existing tables dropped")

    Base.metadata.create_all(engine)
    print("✓ All tables created successfully")

    # Create default organization
    with engine.connect() as conn:
        conn.execute(
            text("""
                INSERT INTO organizations (id, name, slug, is_active, created_at, updated_at)
                VALUES (
                    CAST(:tenant_id AS uuid),
                    :name,
                    :slug,
                    :is_active,
                    NOW(),
                    NOW()
                )
                ON CONFLICT (slug) DO NOTHING
                """),
            {
                "tenant_id": str(DEFAULT_TENANT_ID),
                "name": DEFAULT_TENANT_NAME,
                "slug": DEFAULT_TENANT_SLUG,
                "is_active": True,
            },
        )
        conn.commit()
    print("✓ Default organization created")


def create_system_owner(email: str, password: str) -> None:
    """Create a super admin (system owner) account if it does not exist."""
    engine = create_engine(settings.database_url_sync)

    with Session(engine) as session:
        existing = session.execute(
            select(User).where(User.email == email.lower())
        ).scalar_one_or_none()
        if existing is not None:
            print(f"• System owner {email} already exists")
            return

        session.add(
            User(
                email=email.lower(),
                hashed_password=hash_password(password),
                role=UserRole.SUPER_ADMIN,
                status=EmploymentStatus.ACTIVE,
            )
        )
        session.commit()
    print(f"✓ System owner {email} created")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create PeopleDesk database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )
    parser.add_argument(
        "--owner-email",
        help="Also create a system owner account with this email",
    )
    parser.add_argument(
        "--owner-password",
        help="Password for the system owner account",
    )
    args = parser.parse_args()

    create_tables(drop_existing=args.drop)

    if args.owner_email:
        if not args.owner_password:
            parser.error("--owner-password is required with --owner-email")
        create_system_owner(args.owner_email, args.owner_password)
