"""
Test suite for RetrievalService.

System role: Verification of search orchestration
"""

from unittest.mock import AsyncMock

import pytest

from faq_rag.application.services import DocumentService, RetrievalService
from faq_rag.boundary.vdb.sql_chunk_store import SQLChunkStore
from faq_rag.configs.vector_store import VectorStoreSettings
from faq_rag.core.document_processing.embeddings import HashEmbedder, ModelEmbedder
from faq_rag.core.document_processing.models import IngestionRequest
from faq_rag.core.exceptions import SearchUnavailableError
from tests.conftest import KeywordEmbeddings


@pytest.fixture
async def indexed_corpus(document_service: DocumentService) -> None:
    """Index three short FAQ answers with the hash embedder."""
    answers = {
        "shipping": "Orders ship within two business days",
        "refunds": "Refunds are issued within fourteen days",
        "accounts": "Reset your password from the account page",
    }
    for document_id, text in answers.items():
        await document_service.ingest(
            IngestionRequest(document_id=document_id, title=document_id, raw_text=text)
        )


class TestRetrievalServiceSearch:
    """Test suite for RetrievalService.search() method."""

    @pytest.mark.asyncio
    async def test_search_should_rank_exact_match_first(
        self, retrieval_service: RetrievalService, indexed_corpus: None
    ) -> None:
        """Test a query identical to a chunk returns that chunk with score 1."""
        # Act
        hits = await retrieval_service.search("Refunds are issued within fourteen days")

        # Assert
        assert hits[0].document_id == "refunds"
        assert hits[0].score == pytest.approx(1.0)
        assert [h.score for h in hits] == sorted((h.score for h in hits), reverse=True)
        assert len(hits) == 3

    @pytest.mark.asyncio
    async def test_search_should_respect_limit_and_threshold(
        self, retrieval_service: RetrievalService, indexed_corpus: None
    ) -> None:
        # Act
        limited = await retrieval_service.search("Orders ship within two business days", limit=1)
        strict = await retrieval_service.search(
            "Orders ship within two business days", threshold=0.999
        )

        # Assert
        assert [h.document_id for h in limited] == ["shipping"]
        assert [h.document_id for h in strict] == ["shipping"]

    @pytest.mark.asyncio
    async def test_search_should_return_empty_list_for_empty_corpus(
        self, retrieval_service: RetrievalService
    ) -> None:
        """Test no matches is an empty list, not an error."""
        assert await retrieval_service.search("anything at all") == []

    @pytest.mark.asyncio
    async def test_search_should_reject_blank_query(
        self, retrieval_service: RetrievalService
    ) -> None:
        with pytest.raises(ValueError):
            await retrieval_service.search("   ")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -3])
    async def test_search_should_reject_non_positive_limit(
        self, retrieval_service: RetrievalService, indexed_corpus: None, limit: int
    ) -> None:
        """Test limit=0 is refused instead of falling back to top_k."""
        with pytest.raises(ValueError, match="limit must be positive"):
            await retrieval_service.search("Orders ship within two business days", limit=limit)

    @pytest.mark.asyncio
    async def test_search_should_report_store_failures_as_unavailable(
        self, vector_store_settings: VectorStoreSettings
    ) -> None:
        """Test a broken store surfaces as SearchUnavailableError."""
        # Arrange
        store = AsyncMock()
        store.embedding_profiles = AsyncMock(return_value=set())
        store.nearest_neighbors = AsyncMock(side_effect=ConnectionError("database down"))
        service = RetrievalService(store, HashEmbedder(dimension=8), vector_store_settings)

        # Act & Assert
        with pytest.raises(SearchUnavailableError) as exc_info:
            await service.search("where is my order")

        assert exc_info.value.message.startswith("search unavailable")
        assert exc_info.value.details["query"] == "where is my order"

    @pytest.mark.asyncio
    async def test_search_should_be_unavailable_when_embedder_differs_from_corpus(
        self,
        store: SQLChunkStore,
        vector_store_settings: VectorStoreSettings,
        indexed_corpus: None,
    ) -> None:
        """Test hash-indexed chunks are not compared with model query vectors."""
        # Arrange
        embedder = ModelEmbedder(
            KeywordEmbeddings(["order", "refund"]), model_id="keyword-test", dimension=2
        )
        service = RetrievalService(store, embedder, vector_store_settings)

        # Act & Assert
        with pytest.raises(SearchUnavailableError, match="EmbeddingConfigurationError"):
            await service.search("refund")
