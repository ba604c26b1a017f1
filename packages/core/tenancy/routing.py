"""
Tenant path routing for PeopleDesk.

Maps a tenant slug plus a tenant-relative path onto a single global path
(``/org/{slug}/...``) that the web router can dispatch on, and parses such
paths back.

Every function here is total: malformed input degrades to the
"not a tenant path" or root-path case; nothing here raises.
"""

import re
from dataclasses import dataclass

# Literal path component marking tenant-scoped routes.
TENANT_ROUTE_SEGMENT = "org"

AUTH_NAMESPACE = "/auth"
DEFAULT_AUTH_PATH = "/auth/login"

_SUFFIX_DELIMITER = re.compile(r"[?#]")


@dataclass(frozen=True)
class TenantPathMatch:
    """Result of parsing a tenant-scoped path."""

    slug: str
    path: str


# -----------------------------
# Helpers
# -----------------------------


def split_path_and_suffix(value: str) -> tuple[str, str]:
    """
    Split a path at the first ``?`` or ``#``.

    The suffix keeps its delimiter and is returned verbatim.
    """
    match = _SUFFIX_DELIMITER.search(value)
    if match is None:
        return value, ""
    return value[: match.start()], value[match.start() :]


def normalize_path(value: str | None) -> tuple[str, str]:
    """
    Normalize a relative path into ``(pathname, suffix)``.

    The pathname is empty for the root path, otherwise it carries exactly
    one leading slash.
    """
    if not value:
        return "", ""

    trimmed = value.strip()
    if not trimmed or trimmed == "/":
        return "", ""

    pathname, suffix = split_path_and_suffix(trimmed)
    if not pathname or pathname == "/":
        return "", suffix

    return _ensure_leading_slash(pathname), suffix


def _ensure_leading_slash(value: str) -> str:
    return value if value.startswith("/") else f"/{value}"


# -----------------------------
# Public API
# -----------------------------


def canonicalize_slug(raw: str) -> str:
    """Trim surrounding whitespace and lowercase. Idempotent."""
    return raw.strip().lower()


def build_tenant_path(slug: str, path: str | None = None) -> str:
    """
    Build the global path for ``path`` inside tenant ``slug``.

    Examples:
        build_tenant_path("Acme")                    -> "/org/acme"
        build_tenant_path("acme", "hr-admin")        -> "/org/acme/hr-admin"
        build_tenant_path("acme", "/leave?tab=open") -> "/org/acme/leave?tab=open"
    """
    tenant_base = f"/{TENANT_ROUTE_SEGMENT}/{canonicalize_slug(slug)}"
    pathname, suffix = normalize_path(path)
    return f"{tenant_base}{pathname}{suffix}"


def build_tenant_auth_path(slug: str, path: str | None = None) -> str:
    """
    Build a tenant path that lives under the ``/auth`` namespace.

    No path means the login page. Paths already under ``/auth`` are kept,
    anything else is prefixed with ``/auth``.
    """
    pathname, suffix = normalize_path(path)

    if not pathname:
        auth_path = DEFAULT_AUTH_PATH
    elif pathname.startswith(AUTH_NAMESPACE):
        auth_path = pathname
    else:
        auth_path = f"{AUTH_NAMESPACE}{pathname}"

    return build_tenant_path(slug, f"{auth_path}{suffix}")


def build_tenant_absolute_url(
    base_url: str,
    slug: str,
    path: str | None = None,
) -> str:
    """Prefix a tenant path with ``base_url`` (one trailing slash dropped)."""
    normalized_base = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{normalized_base}{build_tenant_path(slug, path)}"


def match_tenant_path(pathname: str | None) -> TenantPathMatch | None:
    """
    Parse a global path.

    Returns:
        The canonical slug and the tenant-relative path (``"/"`` when
        nothing follows the slug, suffix re-appended), or None when the
        path is not tenant-scoped.
    """
    sanitized = _ensure_leading_slash(pathname or "/")
    normalized, suffix = normalize_path(sanitized)
    segments = [segment for segment in (normalized or "/").split("/") if segment]

    if len(segments) < 2 or segments[0] != TENANT_ROUTE_SEGMENT:
        return None

    slug = canonicalize_slug(segments[1])
    remainder = "/".join(segments[2:])
    tenant_relative_path = f"/{remainder}" if remainder else "/"

    return TenantPathMatch(slug=slug, path=f"{tenant_relative_path}{suffix}")


def strip_tenant_prefix(pathname: str | None) -> str:
    """Return the tenant-relative path, or ``pathname`` with a leading slash."""
    match = match_tenant_path(pathname)
    if match is None:
        return _ensure_leading_slash(pathname or "")
    return match.path


def is_tenant_path(pathname: str | None) -> bool:
    """Check whether ``pathname`` is tenant-scoped."""
    return match_tenant_path(pathname) is not None
