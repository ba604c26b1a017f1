"""Tenancy module - tenant slug canonicalization and path routing."""

from packages.core.tenancy.routing import (
    TENANT_ROUTE_SEGMENT,
    TenantPathMatch,
    build_tenant_absolute_url,
    build_tenant_auth_path,
    build_tenant_path,
    canonicalize_slug,
    is_tenant_path,
    match_tenant_path,
    strip_tenant_prefix,
)
from packages.core.tenancy.validation import (
    InvalidTenantSlugError,
    is_valid_tenant_slug,
    validate_tenant_slug,
)

__all__ = [
    # Routing
    "TENANT_ROUTE_SEGMENT",
    "TenantPathMatch",
    "build_tenant_absolute_url",
    "build_tenant_auth_path",
    "build_tenant_path",
    "canonicalize_slug",
    "is_tenant_path",
    "match_tenant_path",
    "strip_tenant_prefix",
    # Validation
    "InvalidTenantSlugError",
    "is_valid_tenant_slug",
    "validate_tenant_slug",
]
