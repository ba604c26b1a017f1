"""HTTP middleware for tenant-scoped routing."""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from packages.core.tenancy import match_tenant_path

logger = logging.getLogger(__name__)


class TenantPathMiddleware(BaseHTTPMiddleware):
    """
    Resolve ``/org/{slug}/...`` request paths.

    For tenant-scoped requests:
    - the canonical slug is stored in ``request.state.tenant_slug``
    - the path is rewritten to the tenant-relative path, so the same
      routes serve ``/api/...`` and ``/org/{slug}/api/...``

    Other requests pass through with ``request.state.tenant_slug`` and
    ``request.state.tenant_original_path`` both set to None.
    Malformed paths are treated as non-tenant paths, never as errors.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        original_path = request.scope.get("path", "/")
        match = match_tenant_path(original_path)

        if match is None:
            request.state.tenant_slug = None
            request.state.tenant_original_path = None
            return await call_next(request)

        request.state.tenant_slug = match.slug
        request.state.tenant_original_path = original_path
        request.scope["path"] = match.path
        request.scope["raw_path"] = match.path.encode("utf-8")

        logger.debug(
            "Tenant path %s -> %s (tenant=%s)",
            original_path,
            match.path,
            match.slug,
        )

        response = await call_next(request)
        response.headers["X-Tenant-Slug"] = match.slug
        return response
