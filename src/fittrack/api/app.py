"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fittrack.api.admin import router as admin_router
from fittrack.api.auth import router as auth_router
from fittrack.api.portal import router as portal_router
from fittrack.app_logging import configure_logging
from fittrack.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if not app.state.container.ledger.flush():
            logger.warning("Ledger was not fully persisted on shutdown")

    app = FastAPI(title="FitTrack", lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(portal_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
