"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite store, deterministic embedders, pipeline and
service instances wired the way the API container wires them.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import pytest
from langchain_core.embeddings import Embeddings
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from faq_rag.application.services import DocumentService, RetrievalService
from faq_rag.boundary.db import create_all_tables, get_async_session_factory
from faq_rag.boundary.vdb.sql_chunk_store import SQLChunkStore
from faq_rag.configs.vector_store import VectorStoreSettings
from faq_rag.core.document_processing.configs import DocumentPipelineSettings
from faq_rag.core.document_processing.embeddings import HashEmbedder
from faq_rag.core.document_processing.entrypoint import DocumentPipeline

TEST_DIMENSION = 64


class KeywordEmbeddings(Embeddings):
    """
    Deterministic LangChain embeddings for tests.

    Each vocabulary word owns one axis; a text's vector counts its
    vocabulary words. Texts containing a word from fail_on raise, which
    lets tests drive the per-item fallback path.
    """

    def __init__(
        self,
        vocabulary: list[str],
        dimension: int | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.dimension = dimension or len(vocabulary)
        self.fail_on = fail_on or set()
        self.document_calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        words = text.lower().split()
        if any(word in self.fail_on for word in words):
            raise RuntimeError(f"model rejected text: {text[:20]}")
        vector = [0.0] * self.dimension
        for axis, term in enumerate(self.vocabulary):
            vector[axis] = float(words.count(term))
        if not any(vector):
            vector[-1] = 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


@pytest.fixture
async def engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection across sessions
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    """Provide session factory bound to the test engine."""
    return get_async_session_factory(engine)


@pytest.fixture
def store(session_factory: async_sessionmaker) -> SQLChunkStore:
    """Provide SQL chunk store over the test database."""
    return SQLChunkStore(session_factory)


@pytest.fixture
def hash_embedder() -> HashEmbedder:
    """Provide small-dimension hash embedder."""
    return HashEmbedder(dimension=TEST_DIMENSION)


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    """Provide pipeline settings with small chunks and no retry delay."""
    return DocumentPipelineSettings(
        chunk_size=200,
        chunk_overlap=40,
        embedding_batch_size=4,
        write_batch_size=3,
        retry_max_attempts=2,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        pipeline_timeout_seconds=30.0,
    )


@pytest.fixture
def vector_store_settings() -> VectorStoreSettings:
    """Provide search defaults for the hash embedder."""
    return VectorStoreSettings(
        embedding_provider="hash",
        embedding_dimension=TEST_DIMENSION,
        top_k=5,
    )


@pytest.fixture
def pipeline(
    store: SQLChunkStore,
    hash_embedder: HashEmbedder,
    pipeline_settings: DocumentPipelineSettings,
) -> DocumentPipeline:
    """Provide document pipeline using the hash embedder."""
    return DocumentPipeline(store=store, embedder=hash_embedder, settings=pipeline_settings)


@pytest.fixture
def document_service(
    store: SQLChunkStore,
    pipeline: DocumentPipeline,
    pipeline_settings: DocumentPipelineSettings,
) -> DocumentService:
    """Provide document service bound to the test store."""
    return DocumentService(store=store, pipeline=pipeline, settings=pipeline_settings)


@pytest.fixture
def retrieval_service(
    store: SQLChunkStore,
    hash_embedder: HashEmbedder,
    vector_store_settings: VectorStoreSettings,
) -> RetrievalService:
    """Provide retrieval service bound to the test store."""
    return RetrievalService(
        store=store,
        embedder=hash_embedder,
        settings=vector_store_settings,
    )


@pytest.fixture
def faq_text() -> str:
    """Provide a small FAQ document with a heading, prose and a table."""
    return (
        "# Shipping\n\n"
        "Orders ship within two business days. Express delivery is available "
        "for most destinations and arrives the next day.\n\n"
        "| Region | Days |\n| EU | 3 |\n| US | 5 |\n\n"
        "Refunds are issued to the original payment method within fourteen "
        "days after the returned item arrives at our warehouse."
    )
