"""
Dependency injection container.

ServiceContainer builds every long-lived collaborator (engine, session
factory, chunk store, embedder, pipeline, services) once per application
from explicit Settings and is stored on app.state. FastAPI dependencies
read from it; nothing is held in module globals.

Dependencies: faq_rag.configs, faq_rag.application, faq_rag.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from faq_rag.application.services import DocumentService, RetrievalService
from faq_rag.boundary.db import get_async_engine, get_async_session_factory
from faq_rag.boundary.vdb import ChunkStore, get_sql_chunk_store
from faq_rag.configs import Settings
from faq_rag.core.document_processing.embeddings import Embedder, build_embedder
from faq_rag.core.document_processing.entrypoint import DocumentPipeline

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for application-scoped service instances."""

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: async_sessionmaker,
        store: ChunkStore,
        embedder: Embedder,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.session_factory = session_factory
        self.store = store
        self.embedder = embedder
        self.pipeline = DocumentPipeline(store=store, embedder=embedder, settings=settings.pipeline)
        self.document_service = DocumentService(
            store=store,
            pipeline=self.pipeline,
            settings=settings.pipeline,
        )
        self.retrieval_service = RetrievalService(
            store=store,
            embedder=embedder,
            settings=settings.vector_store,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """
        Build all collaborators from configuration.

        Args:
            settings: Application settings

        Returns:
            ServiceContainer: Ready-to-use container (tables not yet created)
        """
        engine = get_async_engine(settings.database)
        session_factory = get_async_session_factory(engine)
        store = get_sql_chunk_store()(session_factory)
        embedder = build_embedder(settings.vector_store)
        logger.info(
            f"{__name__}:from_settings - Service container built",
            extra={"environment": settings.environment, "embedder": embedder.model_id},
        )
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            store=store,
            embedder=embedder,
        )

    async def close(self) -> None:
        """Dispose of the database engine."""
        await self.engine.dispose()


def get_container(request: Request) -> ServiceContainer:
    """Container attached to the running application."""
    return request.app.state.container


def get_chunk_store(request: Request) -> ChunkStore:
    return get_container(request).store


def get_embedder(request: Request) -> Embedder:
    return get_container(request).embedder


def get_document_service(request: Request) -> DocumentService:
    """
    Get document service instance.

    Returns:
        DocumentService: Service bound to the application's store and pipeline
    """
    return get_container(request).document_service


def get_retrieval_service(request: Request) -> RetrievalService:
    """
    Get retrieval service instance.

    Returns:
        RetrievalService: Service bound to the application's store and embedder
    """
    return get_container(request).retrieval_service
