"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_dashboard.config import get_settings
from admin_dashboard.infrastructure.dependencies import get_marketplace_api
from admin_dashboard.infrastructure.logging.log_config import setup_logging
from admin_dashboard.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, close the backend client on shutdown."""
    settings = get_settings()
    setup_logging()
    logger.info(
        "Marketplace backend: %s (timeout %.1fs)",
        settings.marketplace_api_base_url,
        settings.marketplace_api_timeout,
    )

    yield

    # Shutdown
    if get_marketplace_api.cache_info().currsize:
        await get_marketplace_api().aclose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "admin_dashboard.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
