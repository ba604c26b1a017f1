"""Tests for tenant slug validation."""

import pytest

from packages.core.tenancy import (
    InvalidTenantSlugError,
    is_valid_tenant_slug,
    validate_tenant_slug,
)


class TestValidateTenantSlug:
    """Tests for validate_tenant_slug."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("acme", "acme"),
            ("  Acme-Labs ", "acme-labs"),
            ("a", "a"),
            ("team42", "team42"),
            ("x" * 100, "x" * 100),
        ],
    )
    def test_valid_slugs(self, raw: str, expected: str) -> None:
        """Valid slugs come back canonical."""
        assert validate_tenant_slug(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "-acme", "acme-", "ac me", "acme_corp", "acme.io", "ümlaut", "x" * 101],
    )
    def test_invalid_slugs(self, raw: str) -> None:
        """Malformed slugs raise InvalidTenantSlugError."""
        with pytest.raises(InvalidTenantSlugError):
            validate_tenant_slug(raw)

    @pytest.mark.parametrize("raw", ["org", "AUTH", "api", "system-owner"])
    def test_reserved_slugs(self, raw: str) -> None:
        """Slugs that shadow application routes are rejected."""
        with pytest.raises(InvalidTenantSlugError) as exc_info:
            validate_tenant_slug(raw)
        assert "reserved" in str(exc_info.value)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_tenant_slug("not valid")

    def test_is_valid_tenant_slug(self) -> None:
        assert is_valid_tenant_slug("acme") is True
        assert is_valid_tenant_slug("-acme") is False
