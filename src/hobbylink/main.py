# src/hobbylink/main.py
"""Main entry point for the HobbyLink application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from hobbylink.api.errors import register_exception_handlers
from hobbylink.api.v1 import (
    comments_router,
    communities_router,
    hobbies_router,
    posts_router,
)
from hobbylink.core.logging import setup_logging
from hobbylink.core.settings import settings
from hobbylink.services.identity import get_identity_client
from hobbylink.services.invalidation import INVALIDATION_HEADER

setup_logging(settings.log_level, sql_debug=settings.sql_debug)
logger = logging.getLogger(__name__)

DESCRIPTION = "Hobby communities with posts, comments and likes"

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description=DESCRIPTION,
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=[INVALIDATION_HEADER],
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(communities_router, prefix="/api/v1")
app.include_router(hobbies_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_identity_client().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": DESCRIPTION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hobbylink.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
