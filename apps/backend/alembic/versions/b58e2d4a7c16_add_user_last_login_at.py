"""add_user_last_login_at

Revision ID: b58e2d4a7c16
Revises: 7e41b0c9d8f3
Create Date: 2026-10-20 11:12:40.381907

Tracks the last successful sign-in per user, used for monthly-active counts
in the system-owner organization list.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "b58e2d4a7c16"
down_revision: Union[str, Sequence[str], None] = "7e41b0c9d8f3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add users.last_login_at."""
    op.add_column(
        "users",
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    """Drop users.last_login_at."""
    op.drop_column("users", "last_login_at")
