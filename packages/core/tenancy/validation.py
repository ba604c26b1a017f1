"""Tenant slug format validation."""

import re

from packages.core.tenancy.routing import TENANT_ROUTE_SEGMENT, canonicalize_slug

TENANT_SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")
TENANT_SLUG_MAX_LENGTH = 100

# Slugs that would shadow application routes when used as a sub-domain.
RESERVED_TENANT_SLUGS = frozenset(
    {
        TENANT_ROUTE_SEGMENT,
        "api",
        "app",
        "auth",
        "admin",
        "healthz",
        "static",
        "system-owner",
        "www",
    }
)


class InvalidTenantSlugError(ValueError):
    """Raised when a tenant slug cannot be used for a new organization."""

    pass


def is_valid_tenant_slug(raw: str) -> bool:
    """Check a slug without raising."""
    try:
        validate_tenant_slug(raw)
    except InvalidTenantSlugError:
        return False
    return True


def validate_tenant_slug(raw: str) -> str:
    """
    Canonicalize and validate a tenant slug.

    Args:
        raw: User-supplied slug (sub-domain).

    Returns:
        The canonical slug.

    Raises:
        InvalidTenantSlugError: If the slug is empty, too long, contains
            characters outside ``[a-z0-9-]``, starts or ends with a hyphen,
            or is reserved.
    """
    slug = canonicalize_slug(raw)

    if not slug:
        raise InvalidTenantSlugError("Organization slug is required.")

    if len(slug) > TENANT_SLUG_MAX_LENGTH:
        raise InvalidTenantSlugError(
            f"Organization slug must be at most {TENANT_SLUG_MAX_LENGTH} characters."
        )

    if not TENANT_SLUG_PATTERN.match(slug):
        raise InvalidTenantSlugError(
            "Use lowercase letters, numbers, and hyphens only "
            "(no leading or trailing hyphen)."
        )

    if slug in RESERVED_TENANT_SLUGS:
        raise InvalidTenantSlugError(f"'{slug}' is reserved.")

    return slug
