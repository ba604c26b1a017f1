"""
Tests for tenant path routing.

Covers slug canonicalization, tenant path construction, auth path
rewriting, and parsing paths back into (slug, path).
"""

import pytest

from packages.core.tenancy.routing import (
    TENANT_ROUTE_SEGMENT,
    TenantPathMatch,
    build_tenant_absolute_url,
    build_tenant_auth_path,
    build_tenant_path,
    canonicalize_slug,
    is_tenant_path,
    match_tenant_path,
    normalize_path,
    split_path_and_suffix,
    strip_tenant_prefix,
)


# -----------------------------
# Canonicalization
# -----------------------------


class TestCanonicalizeSlug:
    """Tests for canonicalize_slug."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("acme", "acme"),
            ("  Acme  ", "acme"),
            ("ACME-Labs", "acme-labs"),
            ("\tMixed Case\n", "mixed case"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_trims_and_lowercases(self, raw: str, expected: str) -> None:
        """Slugs are trimmed and lowercased, nothing else."""
        assert canonicalize_slug(raw) == expected

    @pytest.mark.parametrize("raw", ["Acme", "  acme ", "ÄCME", "a_b", " ", "Org/Path"])
    def test_idempotent(self, raw: str) -> None:
        """Canonicalizing twice equals canonicalizing once."""
        once = canonicalize_slug(raw)
        assert canonicalize_slug(once) == once

    def test_no_character_validation(self) -> None:
        """Unusual characters pass through untouched."""
        assert canonicalize_slug("Acme_Corp!") == "acme_corp!"


# -----------------------------
# Helpers
# -----------------------------


class TestPathHelpers:
    """Tests for suffix splitting and path normalization."""

    def test_split_on_query(self) -> None:
        assert split_path_and_suffix("/leave?tab=open") == ("/leave", "?tab=open")

    def test_split_on_first_delimiter(self) -> None:
        """The first of ? or # starts the suffix."""
        assert split_path_and_suffix("/a#frag?x=1") == ("/a", "#frag?x=1")

    def test_split_without_suffix(self) -> None:
        assert split_path_and_suffix("/a/b") == ("/a/b", "")

    @pytest.mark.parametrize("value", [None, "", "   ", "/", " / "])
    def test_normalize_root(self, value: str | None) -> None:
        """Empty and root paths normalize to nothing."""
        assert normalize_path(value) == ("", "")

    def test_normalize_adds_leading_slash(self) -> None:
        assert normalize_path("hr-admin") == ("/hr-admin", "")

    def test_normalize_root_with_suffix(self) -> None:
        """A bare suffix keeps the suffix but drops the root pathname."""
        assert normalize_path("/?tab=1") == ("", "?tab=1")
        assert normalize_path("?tab=1") == ("", "?tab=1")


# -----------------------------
# Building Paths
# -----------------------------


class TestBuildTenantPath:
    """Tests for build_tenant_path."""

    def test_base_path(self) -> None:
        assert build_tenant_path("acme") == f"/{TENANT_ROUTE_SEGMENT}/acme"

    @pytest.mark.parametrize("path", [None, "", "/", "  "])
    def test_root_equivalents(self, path: str | None) -> None:
        """Root-like paths never add a trailing slash."""
        assert build_tenant_path("acme", path) == "/org/acme"

    def test_canonicalizes_slug(self) -> None:
        assert build_tenant_path("  ACME ", "/hr-admin") == "/org/acme/hr-admin"

    def test_relative_path_gets_leading_slash(self) -> None:
        assert build_tenant_path("acme", "hr-admin/announcements") == (
            "/org/acme/hr-admin/announcements"
        )

    def test_suffix_preserved_verbatim(self) -> None:
        assert build_tenant_path("acme", "/leave?tab=Open&x=1#top") == (
            "/org/acme/leave?tab=Open&x=1#top"
        )

    def test_root_with_suffix(self) -> None:
        assert build_tenant_path("acme", "/?welcome=1") == "/org/acme?welcome=1"


class TestBuildTenantAuthPath:
    """Tests for build_tenant_auth_path."""

    def test_defaults_to_login(self) -> None:
        assert build_tenant_auth_path("acme") == "/org/acme/auth/login"

    def test_no_path_equals_explicit_login(self) -> None:
        """No path always equals the tenant path of /auth/login."""
        for slug in ["acme", " Acme ", "beta-co"]:
            assert build_tenant_auth_path(slug) == build_tenant_path(slug, "/auth/login")

    def test_keeps_auth_prefixed_path(self) -> None:
        assert build_tenant_auth_path("acme", "/auth/reset-password") == (
            "/org/acme/auth/reset-password"
        )

    def test_prefixes_other_paths(self) -> None:
        assert build_tenant_auth_path("acme", "login") == "/org/acme/auth/login"
        assert build_tenant_auth_path("acme", "/signup") == "/org/acme/auth/signup"

    def test_prefixed_and_unprefixed_differ_in_general(self) -> None:
        """Only exact /auth-prefixed paths pass through unchanged."""
        assert build_tenant_auth_path("acme", "/auth/login") != build_tenant_auth_path(
            "acme", "auth-help"
        )

    def test_keeps_suffix(self) -> None:
        assert build_tenant_auth_path("acme", "/reset-password?token=abc") == (
            "/org/acme/auth/reset-password?token=abc"
        )

    def test_suffix_only_goes_to_login(self) -> None:
        assert build_tenant_auth_path("acme", "?next=/leave") == (
            "/org/acme/auth/login?next=/leave"
        )


class TestBuildTenantAbsoluteUrl:
    """Tests for build_tenant_absolute_url."""

    def test_joins_base_and_path(self) -> None:
        assert build_tenant_absolute_url("https://app.example.com", "Acme", "/leave") == (
            "https://app.example.com/org/acme/leave"
        )

    def test_drops_one_trailing_slash(self) -> None:
        assert build_tenant_absolute_url("https://app.example.com/", "acme") == (
            "https://app.example.com/org/acme"
        )


# -----------------------------
# Parsing Paths
# -----------------------------


class TestMatchTenantPath:
    """Tests for match_tenant_path and friends."""

    def test_match_base(self) -> None:
        assert match_tenant_path("/org/acme") == TenantPathMatch(slug="acme", path="/")

    def test_match_nested(self) -> None:
        assert match_tenant_path("/org/ACME/hr-admin/announcements") == TenantPathMatch(
            slug="acme", path="/hr-admin/announcements"
        )

    def test_match_keeps_suffix(self) -> None:
        match = match_tenant_path("/org/acme/leave?tab=open")
        assert match == TenantPathMatch(slug="acme", path="/leave?tab=open")

    def test_match_base_with_suffix(self) -> None:
        assert match_tenant_path("/org/acme?x=1") == TenantPathMatch(slug="acme", path="/?x=1")

    def test_match_without_leading_slash(self) -> None:
        assert match_tenant_path("org/acme/leave") == TenantPathMatch(slug="acme", path="/leave")

    def test_collapses_empty_segments(self) -> None:
        assert match_tenant_path("/org//acme//leave/") == TenantPathMatch(
            slug="acme", path="/leave"
        )

    @pytest.mark.parametrize(
        "pathname",
        ["/support", "/", "", None, "/org", "/org/", "/organization/acme", "/api/org/acme"],
    )
    def test_non_tenant_paths(self, pathname: str | None) -> None:
        """Anything not shaped /org/{slug}... is not a tenant path."""
        assert match_tenant_path(pathname) is None
        assert is_tenant_path(pathname) is False

    def test_is_tenant_path(self) -> None:
        assert is_tenant_path("/org/acme/leave") is True

    def test_strip_tenant_prefix(self) -> None:
        assert strip_tenant_prefix("/org/acme/leave?tab=1") == "/leave?tab=1"
        assert strip_tenant_prefix("/org/acme") == "/"

    def test_strip_non_tenant_path(self) -> None:
        assert strip_tenant_prefix("/support") == "/support"
        assert strip_tenant_prefix("support") == "/support"
        assert strip_tenant_prefix("") == "/"


# -----------------------------
# Round Trip
# -----------------------------


class TestRoundTrip:
    """Building then parsing recovers the canonical slug and the path."""

    @pytest.mark.parametrize("slug", ["acme", " Acme ", "BETA-co", "x1"])
    @pytest.mark.parametrize(
        "path, expected",
        [
            (None, "/"),
            ("/", "/"),
            ("hr-admin", "/hr-admin"),
            ("/hr-admin/announcements", "/hr-admin/announcements"),
            ("/leave?tab=open", "/leave?tab=open"),
            ("/leave#history", "/leave#history"),
            ("/a/b/c?x=1#y", "/a/b/c?x=1#y"),
        ],
    )
    def test_round_trip(self, slug: str, path: str | None, expected: str) -> None:
        match = match_tenant_path(build_tenant_path(slug, path))
        assert match is not None
        assert match.slug == canonicalize_slug(slug)
        assert match.path == expected
