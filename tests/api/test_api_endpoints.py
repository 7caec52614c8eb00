"""
API tests for health, document and search endpoints.

Runs the real application (lifespan included) on in-memory SQLite with
the hash embedder; failure paths use dependency overrides.

System role: Verification of the HTTP contract
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from faq_rag.api.deps import get_document_service, get_retrieval_service
from faq_rag.api.main import create_app
from faq_rag.configs import Settings
from faq_rag.configs.database import DatabaseSettings
from faq_rag.configs.vector_store import VectorStoreSettings
from faq_rag.core.exceptions import DocumentBusyError, SearchUnavailableError

API = "/api/v1"


@pytest.fixture
def settings() -> Settings:
    """Provide settings for an in-memory SQLite app with hash embeddings."""
    return Settings(
        database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
        vector_store=VectorStoreSettings(embedding_provider="hash", embedding_dimension=32),
    )


@pytest.fixture
def client(settings: Settings):
    """Provide TestClient with lifespan started."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def _ingest(client: TestClient, document_id: str, raw_text: str, title: str = "FAQ"):
    return client.post(
        f"{API}/documents",
        json={"document_id": document_id, "title": title, "raw_text": raw_text},
    )


class TestHealthEndpoints:
    """Test suite for /health routes."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_health_check_db(self, client: TestClient) -> None:
        response = client.get(f"{API}/health/db")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Database connection OK"}

    def test_health_check_vector_store(self, client: TestClient) -> None:
        response = client.get(f"{API}/health/vector-store")
        assert response.status_code == 200
        assert response.json()["message"].startswith("Vector store accessible (hash-fallback-v1")

    def test_responses_should_carry_correlation_id(self, client: TestClient) -> None:
        """Test a supplied correlation ID is echoed back."""
        response = client.get(f"{API}/health", headers={"X-Correlation-ID": "req-42"})
        assert response.headers["X-Correlation-ID"] == "req-42"


class TestDocumentEndpoints:
    """Test suite for /documents routes."""

    def test_ingest_should_index_document(self, client: TestClient) -> None:
        # Act
        response = _ingest(client, "faq-1", "Orders ship within two business days.")

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["document_id"] == "faq-1"
        assert body["status"] == "indexed"
        assert body["chunk_count"] == 1
        assert body["embedding_quality"] == "degraded"

    def test_ingest_should_report_failed_indexing_in_body(self, client: TestClient) -> None:
        """Test a document that cannot be indexed is stored FAILED with a reason."""
        # Act
        response = _ingest(client, "blank", "   ")

        # Assert
        assert response.status_code == 201
        assert response.json()["status"] == "failed"
        assert "EmptyDocumentError" in response.json()["error_message"]
        document = client.get(f"{API}/documents/blank").json()
        assert document["status"] == "failed"

    def test_ingest_should_validate_request(self, client: TestClient) -> None:
        response = client.post(f"{API}/documents", json={"title": "", "raw_text": "text"})
        assert response.status_code == 422

    def test_ingest_should_return_409_when_document_busy(self, settings: Settings) -> None:
        # Arrange
        app = create_app(settings)
        service = MagicMock()
        service.ingest = AsyncMock(side_effect=DocumentBusyError("doc-1"))
        app.dependency_overrides[get_document_service] = lambda: service

        # Act
        with TestClient(app) as client:
            response = _ingest(client, "doc-1", "text")

        # Assert
        assert response.status_code == 409

    def test_get_document_should_return_document(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "faq-1", "Refunds take fourteen days.", title="Refunds")

        # Act
        response = client.get(f"{API}/documents/faq-1")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "faq-1"
        assert body["title"] == "Refunds"
        assert body["status"] == "indexed"
        assert "content" not in body

    def test_get_document_should_return_404_for_unknown_id(self, client: TestClient) -> None:
        assert client.get(f"{API}/documents/missing").status_code == 404

    def test_list_documents_should_filter_by_status(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "good", "A real answer.")
        _ingest(client, "bad", "")

        # Act
        response = client.get(f"{API}/documents", params={"status": "indexed"})

        # Assert
        assert response.status_code == 200
        assert [d["id"] for d in response.json()["documents"]] == ["good"]
        assert response.json()["total"] == 1

    def test_get_chunks_should_list_chunks_without_vectors(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "faq-1", "# Returns\n\nItems can be returned within thirty days.")

        # Act
        response = client.get(f"{API}/documents/faq-1/chunks")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == len(body["chunks"]) >= 1
        assert body["chunks"][0]["chunk_index"] == 0
        assert "embedding" not in body["chunks"][0]

    def test_get_chunks_should_return_404_for_unknown_document(self, client: TestClient) -> None:
        assert client.get(f"{API}/documents/missing/chunks").status_code == 404

    def test_reindex_should_rebuild_with_new_text(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "faq-1", "Old answer.")

        # Act
        response = client.post(
            f"{API}/documents/faq-1/reindex", json={"raw_text": "New and improved answer."}
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "indexed"
        chunks = client.get(f"{API}/documents/faq-1/chunks").json()["chunks"]
        assert [c["content"] for c in chunks] == ["New and improved answer."]

    def test_reindex_should_reuse_stored_text_without_body(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "faq-1", "Stored answer.")

        # Act
        response = client.post(f"{API}/documents/faq-1/reindex")

        # Assert
        assert response.status_code == 200
        assert response.json()["chunk_count"] == 1

    def test_reindex_should_return_404_for_unknown_document(self, client: TestClient) -> None:
        assert client.post(f"{API}/documents/missing/reindex").status_code == 404

    def test_delete_should_remove_document(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "faq-1", "Short answer.")

        # Act
        response = client.delete(f"{API}/documents/faq-1")

        # Assert
        assert response.status_code == 204
        assert client.get(f"{API}/documents/faq-1").status_code == 404
        assert client.delete(f"{API}/documents/faq-1").status_code == 404


class TestSearchEndpoint:
    """Test suite for /search route."""

    def test_search_should_return_ranked_hits(self, client: TestClient) -> None:
        # Arrange
        _ingest(client, "shipping", "Orders ship within two business days")
        _ingest(client, "refunds", "Refunds are issued within fourteen days")

        # Act
        response = client.post(
            f"{API}/search", json={"query": "Orders ship within two business days", "limit": 2}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["results"][0]["document_id"] == "shipping"
        assert body["results"][0]["score"] == pytest.approx(1.0)
        assert body["embedding_source"] == "fallback"

    def test_search_should_return_empty_results_for_empty_corpus(self, client: TestClient) -> None:
        response = client.post(f"{API}/search", json={"query": "anything"})
        assert response.status_code == 200
        assert response.json()["results"] == []
        assert response.json()["count"] == 0

    @pytest.mark.parametrize("query", ["", "   "])
    def test_search_should_reject_blank_query(self, client: TestClient, query: str) -> None:
        response = client.post(f"{API}/search", json={"query": query})
        assert response.status_code == 422

    def test_search_should_return_503_when_unavailable(self, settings: Settings) -> None:
        """Test search failures are distinguishable from no matches."""
        # Arrange
        app = create_app(settings)
        service = MagicMock()
        service.search = AsyncMock(
            side_effect=SearchUnavailableError("search unavailable: ConnectionError: down")
        )
        app.dependency_overrides[get_retrieval_service] = lambda: service

        # Act
        with TestClient(app) as client:
            response = client.post(f"{API}/search", json={"query": "where is my order"})

        # Assert
        assert response.status_code == 503
        assert response.json()["detail"].startswith("search unavailable")
