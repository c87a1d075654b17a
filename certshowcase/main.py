from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from . import __version__
from .config import settings
from .infrastructure.logging import configure_logging
from .presentation.api.dependencies import close_backend_client
from .presentation.api.v1 import admin, auth, certifications, health, listing_views
from .presentation.middleware import (
    FORM_OVERHEAD,
    CorrelationIdMiddleware,
    CSRFMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)

configure_logging(settings.service_name, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "Starting application",
        service=settings.service_name,
        backend_url=settings.backend_url,
    )

    yield

    await close_backend_client()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Certification Showcase API",
    description="Public certification listing with an authenticated admin panel",
    version=__version__,
    lifespan=lifespan,
)

# Security: Add middleware (order matters - first added = last executed)
if settings.csrf_enabled:
    app.add_middleware(
        CSRFMiddleware,
        secret_key=settings.secret_key,
        secure_cookies=not settings.debug,
    )
# Uploads are capped separately; leave room for the other form fields
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.max_upload_size + FORM_OVERHEAD)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)  # Request tracing (runs first)

app.include_router(health.router)
app.include_router(auth.router, prefix="/api/v1")
app.include_router(certifications.router, prefix="/api/v1")
app.include_router(listing_views.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")


@app.get("/")
def root() -> dict:
    return {
        "service": settings.service_name,
        "version": __version__,
        "docs": "/docs",
    }
