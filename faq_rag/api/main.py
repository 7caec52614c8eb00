"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, faq_rag.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faq_rag.api.deps.dependencies import ServiceContainer
from faq_rag.boundary.db import create_all_tables
from faq_rag.configs import Settings, get_settings
from faq_rag.observability import configure_logging
from faq_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from . import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Explicit settings (environment is read when None)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Builds the service container on startup, creates tables, fails
        documents left PROCESSING by a previous process, and disposes of
        the engine on shutdown.
        """
        configure_logging(settings.log_level)
        container = ServiceContainer.from_settings(settings)
        if settings.database.create_tables_on_startup:
            await create_all_tables(container.engine)
        await container.document_service.recover_stale_documents()
        app.state.container = container
        logger.info(f"{__name__}:lifespan - Application started")

        yield

        await container.close()
        logger.info(f"{__name__}:lifespan - Application stopped")

    app = FastAPI(
        title="FAQ RAG API",
        description="Document chunking, embedding and similarity search for FAQ chatbots",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and logs carry the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


def run() -> None:
    """Serve the API with uvicorn (settings read from the environment)."""
    uvicorn.run(
        "faq_rag.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
