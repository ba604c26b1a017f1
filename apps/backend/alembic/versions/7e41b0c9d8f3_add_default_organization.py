"""add_default_organization

Revision ID: 7e41b0c9d8f3
Revises: 3c9d1e7a52b4
Create Date: 2026-10-19 09:30:02.554117

Creates the default organization used by single-tenant and development
deployments.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7e41b0c9d8f3"
down_revision: Union[str, Sequence[str], None] = "3c9d1e7a52b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Default organization UUID (fixed for consistency across environments)
DEFAULT_TENANT_ID = "00000000-0000-0000-0000-000000000001"


def upgrade() -> None:
    """Insert the default organization."""
    op.execute(
        sa.text("""
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
        """).bindparams(
            tenant_id=DEFAULT_TENANT_ID,
            name="Default Organization",
            slug="default",
            is_active=True,
        )
    )


def downgrade() -> None:
    """Remove the default organization (cascades to its members)."""
    op.execute(
        sa.text("""
        DELETE FROM organizations
        WHERE id = CAST(:tenant_id AS uuid)
        """).bindparams(tenant_id=DEFAULT_TENANT_ID)
    )
