"""
FastAPI application factory for the reference backend.

Serves the donation backend's moderation endpoints from memory, for local
runs of the console and for integration tests.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from shared.config import get_settings

from .errors import register_error_handlers
from .routes import accept_request, blood_requests, health, users
from .state import ReferenceBackend

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _default_state() -> ReferenceBackend:
    settings = get_settings()
    if settings.reference_seed_path is not None:
        return ReferenceBackend.from_seed_file(
            settings.reference_seed_path,
            allow_rejected_reaccept=settings.allow_rejected_reaccept,
        )
    return ReferenceBackend(allow_rejected_reaccept=settings.allow_rejected_reaccept)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info(f"Starting reference backend on {settings.host}:{settings.port}")
    yield
    logger.info("Shutting down reference backend")


def create_app(state: Optional[ReferenceBackend] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        state: Backend state to serve; defaults to the configured seed file
            or an empty backend

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Blood Bank Reference Backend",
        description="In-memory blood request moderation API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.backend = state if state is not None else _default_state()

    register_error_handlers(app)

    # Register routes
    app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
    app.include_router(blood_requests.router, prefix=f"{API_PREFIX}/bloodrequest", tags=["requests"])
    app.include_router(accept_request.router, prefix=f"{API_PREFIX}/acceptRequest", tags=["moderation"])
    app.include_router(users.router, prefix=f"{API_PREFIX}/users", tags=["users"])

    return app
