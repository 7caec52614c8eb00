"""
Retrieval service.

Embeds query text with the deployment embedder and ranks stored chunks
by cosine similarity. Any failure surfaces as SearchUnavailableError so
callers can tell "search is down" from "no matches".

Dependencies: faq_rag.boundary.vdb, faq_rag.core.document_processing.embeddings
System role: Search orchestration for the API
"""

import asyncio
import logging

from faq_rag.boundary.vdb.vector_store_client import ChunkStore
from faq_rag.configs.vector_store import VectorStoreSettings
from faq_rag.core.document_processing.embeddings import Embedder
from faq_rag.core.exceptions import SearchUnavailableError
from faq_rag.models.search import SearchHit

logger = logging.getLogger(__name__)


class RetrievalService:
    """Similarity search over indexed chunks."""

    def __init__(
        self,
        store: ChunkStore,
        embedder: Embedder,
        settings: VectorStoreSettings,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            store: Persistent chunk store
            embedder: Same embedder the corpus was indexed with
            settings: Search defaults (top_k, similarity_threshold)
        """
        self.store = store
        self.embedder = embedder
        self.settings = settings

    async def search(
        self,
        query_text: str,
        limit: int | None = None,
        threshold: float | None = None,
    ) -> list[SearchHit]:
        """
        Return the chunks most similar to the query.

        Args:
            query_text: Natural-language query
            limit: Maximum results (defaults to settings.top_k)
            threshold: Minimum cosine score (defaults to settings.similarity_threshold)

        Returns:
            list[SearchHit]: Highest score first; empty when nothing matches

        Raises:
            ValueError: When the query is blank or limit is not positive
            SearchUnavailableError: When embedding or ranking fails
        """
        if not query_text.strip():
            raise ValueError("Query must not be empty")

        k = limit if limit is not None else self.settings.top_k
        if k <= 0:
            raise ValueError(f"limit must be positive, got {k}")
        if threshold is None:
            threshold = self.settings.similarity_threshold

        try:
            self.embedder.check_corpus(await self.store.embedding_profiles())
            query_embedding = await asyncio.to_thread(self.embedder.embed_query, query_text)
            results = await self.store.nearest_neighbors(
                query_embedding.vector, k=k, threshold=threshold
            )
        except Exception as e:
            logger.exception(
                f"{__name__}:search - Search failed",
                extra={"query_length": len(query_text), "limit": k},
            )
            raise SearchUnavailableError(
                f"search unavailable: {type(e).__name__}: {e}",
                query=query_text,
            ) from e

        logger.info(
            f"{__name__}:search - Returned {len(results)} results",
            extra={"limit": k, "threshold": threshold},
        )
        return [
            SearchHit(
                chunk_id=result.chunk_id,
                document_id=result.document_id,
                content=result.content,
                score=result.similarity_score,
                metadata=result.metadata,
            )
            for result in results
        ]
