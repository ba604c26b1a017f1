"""Application-wide constants."""

from uuid import UUID

# ──────────────────────────────────────────────────────────────────────
# Default Organization
# ──────────────────────────────────────────────────────────────────────

# Default organization for single-tenant and development usage
DEFAULT_TENANT_ID = UUID("00000000-0000-0000-0000-000000000001")
DEFAULT_TENANT_SLUG = "default"
DEFAULT_TENANT_NAME = "Default Organization"

# ──────────────────────────────────────────────────────────────────────
# Branding
# ──────────────────────────────────────────────────────────────────────

DEFAULT_ORGANIZATION_LOGO = "/logos/default-organization.svg"
