"""create_organizations_users_notifications

Revision ID: 3c9d1e7a52b4
Revises:
Create Date: 2026-10-19 09:12:40.118204

Adds:
- organizations table (tenants, addressed by slug)
- users table (organization members and system owners)
- notifications table (one delivery record per recipient; announcement
  batch id and scope in the metadata column)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c9d1e7a52b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

USER_ROLES = ("SUPER_ADMIN", "ORG_OWNER", "ORG_ADMIN", "HR_ADMIN", "MANAGER", "EMPLOYEE")
EMPLOYMENT_STATUSES = ("INVITED", "ACTIVE", "PROBATION", "SABBATICAL", "TERMINATED")
NOTIFICATION_TYPES = ("ANNOUNCEMENT", "LEAVE", "ATTENDANCE", "SYSTEM")
NOTIFICATION_AUDIENCES = ("ORGANIZATION", "ROLE", "INDIVIDUAL")
NOTIFICATION_STATUSES = ("DRAFT", "SCHEDULED", "SENT", "FAILED")


def upgrade() -> None:
    """Upgrade schema: organizations, users and notifications."""

    # ── organizations ─────────────────────────────────────────────────
    op.create_table(
        "organizations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "slug",
            sa.String(length=100),
            nullable=False,
            comment="Canonical (trimmed, lowercase) tenant slug",
        ),
        sa.Column("domain", sa.String(length=255), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=True),
        sa.Column("locale", sa.String(length=16), nullable=True),
        sa.Column("logo_url", sa.String(length=1024), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_organizations")),
        sa.UniqueConstraint("domain", name=op.f("uq_organizations_domain")),
    )
    op.create_index(
        op.f("ix_organizations_slug"), "organizations", ["slug"], unique=True
    )

    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "organization_id",
            sa.UUID(),
            nullable=True,
            comment="NULL for system owners (super admins)",
        ),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum(*USER_ROLES, name="user_role", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*EMPLOYMENT_STATUSES, name="employment_status", create_constraint=True),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("preferred_name", sa.String(length=100), nullable=True),
        sa.Column("profile_photo_url", sa.String(length=1024), nullable=True),
        sa.Column("designation", sa.String(length=150), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["organization_id"],
            ["organizations.id"],
            name=op.f("fk_users_organization_id_organizations"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_organization_id"), "users", ["organization_id"], unique=False)
    op.create_index(op.f("ix_users_status"), "users", ["status"], unique=False)

    # ── notifications ─────────────────────────────────────────────────
    op.create_table(
        "notifications",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=True),
        sa.Column(
            "target_user_id",
            sa.UUID(),
            nullable=True,
            comment="NULL for organization and role broadcasts",
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*NOTIFICATION_TYPES, name="notification_type", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "audience",
            sa.Enum(*NOTIFICATION_AUDIENCES, name="notification_audience", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*NOTIFICATION_STATUSES, name="notification_status", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
            comment="Announcement batch id and scope",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["organization_id"],
            ["organizations.id"],
            name=op.f("fk_notifications_organization_id_organizations"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["sender_id"],
            ["users.id"],
            name=op.f("fk_notifications_sender_id_users"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["target_user_id"],
            ["users.id"],
            name=op.f("fk_notifications_target_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_notifications")),
    )
    op.create_index(
        op.f("ix_notifications_organization_id"),
        "notifications",
        ["organization_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_notifications_target_user_id"),
        "notifications",
        ["target_user_id"],
        unique=False,
    )
    op.create_index(
        "ix_notifications_org_type_created",
        "notifications",
        ["organization_id", "type", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema: drop notifications, users and organizations."""

    op.drop_index("ix_notifications_org_type_created", table_name="notifications")
    op.drop_index(op.f("ix_notifications_target_user_id"), table_name="notifications")
    op.drop_index(op.f("ix_notifications_organization_id"), table_name="notifications")
    op.drop_table("notifications")

    op.drop_index(op.f("ix_users_status"), table_name="users")
    op.drop_index(op.f("ix_users_organization_id"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")

    op.drop_index(op.f("ix_organizations_slug"), table_name="organizations")
    op.drop_table("organizations")

    for enum_name in (
        "notification_status",
        "notification_audience",
        "notification_type",
        "employment_status",
        "user_role",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
