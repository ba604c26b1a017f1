"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.announcements.routes import router as announcements_router
from app.api.auth.routes import router as auth_router
from app.api.tenant.routes import router as tenant_router
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.middleware import TenantPathMiddleware

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    yield
    logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Multi-tenant HR and People-Ops API",
    lifespan=lifespan,
)

# Added last runs first: CORS wraps tenant path rewriting
app.add_middleware(TenantPathMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "environment": settings.environment}


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(tenant_router, prefix="/api/tenants", tags=["Tenants"])
app.include_router(announcements_router, prefix="/api/hr/announcements", tags=["Announcements"])
