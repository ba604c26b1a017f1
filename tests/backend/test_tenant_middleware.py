"""Tests for TenantPathMiddleware and the tenant guard dependency."""

import asyncio
from uuid import uuid4

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from app.core.dependencies import get_tenant_user
from app.core.middleware import TenantPathMiddleware
from app.models import Organization, User, UserRole


@pytest.fixture
def client() -> TestClient:
    """Tiny app that echoes what the middleware resolved."""
    app = FastAPI()
    app.add_middleware(TenantPathMiddleware)

    @app.get("/")
    async def root(request: Request) -> dict:
        return {"slug": request.state.tenant_slug, "path": request.url.path}

    @app.get("/hr-admin/announcements")
    async def announcements(request: Request) -> dict:
        return {
            "slug": request.state.tenant_slug,
            "path": request.url.path,
            "original": request.state.tenant_original_path,
            "tab": request.query_params.get("tab"),
        }

    return TestClient(app)


# -----------------------------
# Middleware
# -----------------------------


class TestTenantPathMiddleware:
    """Tests for tenant path resolution on incoming requests."""

    def test_tenant_path_is_rewritten(self, client: TestClient) -> None:
        response = client.get("/org/ACME/hr-admin/announcements?tab=sent")

        assert response.status_code == 200
        assert response.json() == {
            "slug": "acme",
            "path": "/hr-admin/announcements",
            "original": "/org/ACME/hr-admin/announcements",
            "tab": "sent",
        }
        assert response.headers["X-Tenant-Slug"] == "acme"

    def test_tenant_root(self, client: TestClient) -> None:
        response = client.get("/org/acme")

        assert response.json() == {"slug": "acme", "path": "/"}

    def test_plain_path_passes_through(self, client: TestClient) -> None:
        response = client.get("/hr-admin/announcements", params={"tab": "x"})

        assert response.status_code == 200
        assert response.json() == {
            "slug": None,
            "path": "/hr-admin/announcements",
            "original": None,
            "tab": "x",
        }
        assert "X-Tenant-Slug" not in response.headers

    def test_incomplete_tenant_path_is_not_tenant(self, client: TestClient) -> None:
        """/org without a slug is routed as-is."""
        assert client.get("/org").status_code == 404


# -----------------------------
# Guard
# -----------------------------


def make_member(slug: str | None) -> User:
    organization = Organization(id=uuid4(), name=slug or "none", slug=slug) if slug else None
    return User(
        id=uuid4(),
        email="member@acme.test",
        hashed_password="x",
        role=UserRole.EMPLOYEE,
        organization=organization,
    )


class TestTenantGuard:
    """Tests for get_tenant_user."""

    def test_non_tenant_request_allows_any_user(self) -> None:
        user = make_member("acme")
        assert asyncio.run(get_tenant_user(user, None)) is user

    def test_matching_tenant_allowed(self) -> None:
        user = make_member("acme")
        assert asyncio.run(get_tenant_user(user, "ACME")) is user

    def test_other_tenant_redirects_to_login(self) -> None:
        user = make_member("beta")

        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_tenant_user(user, "acme"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers["Location"] == "/org/acme/auth/login"

    def test_user_without_organization_redirects(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_tenant_user(make_member(None), "acme"))

        assert exc_info.value.headers["Location"] == "/org/acme/auth/login"
