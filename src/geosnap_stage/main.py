# src/geosnap_stage/main.py
"""Main entry point for the GeoSnap Stage application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from geosnap_stage.api.v1 import (
    admin_reports_router,
    comments_router,
    pictures_router,
    reports_router,
    users_router,
    votes_router,
)
from geosnap_stage.core.logging import configure_logging
from geosnap_stage.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="GeoSnap API",
    description="Location-tagged photo sharing with community voting and moderation",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(users_router, prefix="/api/v1")
app.include_router(pictures_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(admin_reports_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info(
        "%s %s starting (lock backend: %s, auto-flag threshold: %d)",
        settings.app_name,
        settings.app_version,
        settings.target_lock_backend,
        settings.auto_flag_report_threshold,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "GeoSnap API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("geosnap_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
