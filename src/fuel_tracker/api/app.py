"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fuel_tracker.api.foods import router as foods_router
from fuel_tracker.api.recipes import router as recipes_router
from fuel_tracker.api.users import router as users_router
from fuel_tracker.app_logging import configure_logging
from fuel_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting fuel tracker: environment=%s", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Fuel Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(users_router)
    app.include_router(recipes_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
