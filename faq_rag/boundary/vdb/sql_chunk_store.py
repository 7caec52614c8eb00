"""
SQLAlchemy chunk store.

Implements ChunkStore over the documents / document_chunks tables.
Embeddings are stored as JSON arrays; the store has no native vector
operator, so nearest_neighbors loads the embedded chunks of INDEXED
documents and ranks them in process with NumPy.

Dependencies: sqlalchemy, faq_rag.boundary.db, faq_rag.core.retriever
System role: Persistent store for the pipeline, services and search
"""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from faq_rag.boundary.db.CRUD import chunk_crud, document_crud
from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.boundary.vdb.vector_schemas import StoredVector, VectorSearchResult
from faq_rag.core.document_processing.document_state import ensure_transition, sources_for
from faq_rag.core.document_processing.models import (
    Chunk,
    DocumentStatus,
    EmbeddingQuality,
    SourceType,
)
from faq_rag.core.exceptions import (
    DocumentBusyError,
    DocumentNotFoundError,
    VectorStoreError,
)
from faq_rag.core.retriever import rank_by_cosine

logger = logging.getLogger(__name__)


class SQLChunkStore:
    """ChunkStore backed by an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory (one session per call)
        """
        self._session_factory = session_factory

    # Documents

    async def upsert_document(
        self,
        document_id: str,
        title: str,
        source_type: SourceType,
        source_url: str | None = None,
    ) -> DocumentModel:
        """
        Register a document as PENDING, or return it unchanged if it exists.

        Content and title of an existing document are only replaced once a
        run has claimed it.
        """
        existing = await self.get_document(document_id)
        if existing is not None:
            return existing

        try:
            async with self._session_factory.begin() as session:
                document = await document_crud.create(
                    session,
                    id=document_id,
                    title=title,
                    content="",
                    source_type=source_type,
                    source_url=source_url,
                    status=DocumentStatus.PENDING,
                )
        except IntegrityError:
            # Registered concurrently by another request
            existing = await self.get_document(document_id)
            if existing is None:
                raise
            return existing

        logger.info(
            f"{__name__}:upsert_document - Document registered",
            extra={"document_id": document_id, "source_type": source_type.value},
        )
        return document

    async def get_document(self, document_id: str) -> DocumentModel | None:
        async with self._session_factory() as session:
            return await document_crud.get_by_id(session, document_id)

    async def find_document_by_source_url(self, source_url: str) -> DocumentModel | None:
        async with self._session_factory() as session:
            return await document_crud.get_by_source_url(session, source_url)

    async def list_documents(
        self,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        async with self._session_factory() as session:
            return await document_crud.list_documents(
                session, status=status, limit=limit, offset=offset
            )

    async def claim_document(self, document_id: str) -> DocumentModel:
        """
        Compare-and-set the document into PROCESSING.

        Returns:
            DocumentModel: The claimed document

        Raises:
            DocumentNotFoundError: No such document
            DocumentBusyError: Another run already holds the document
        """
        async with self._session_factory.begin() as session:
            claimed = await document_crud.transition(
                session,
                document_id,
                sources_for(DocumentStatus.PROCESSING),
                DocumentStatus.PROCESSING,
                error_message=None,
            )
            if claimed is not None:
                return claimed
            current = await document_crud.get_by_id(session, document_id)

        if current is None:
            raise DocumentNotFoundError(document_id)
        if current.status is DocumentStatus.PROCESSING:
            raise DocumentBusyError(document_id)
        ensure_transition(current.status, DocumentStatus.PROCESSING)
        # Legal move but the CAS missed: another run claimed and finished in between
        raise DocumentBusyError(document_id)

    async def update_document(self, document_id: str, **fields) -> DocumentModel | None:
        async with self._session_factory.begin() as session:
            return await document_crud.update_by_id(session, document_id, **fields)

    async def mark_indexed(
        self,
        document_id: str,
        chunk_count: int,
        embedding_quality: EmbeddingQuality,
    ) -> DocumentModel:
        """
        Move the document to INDEXED once its chunk rows are all present.

        Raises:
            VectorStoreError: When the document is no longer PROCESSING or the
                persisted row count differs from chunk_count
        """
        async with self._session_factory.begin() as session:
            document = await document_crud.mark_indexed(
                session, document_id, chunk_count, embedding_quality
            )
        if document is None:
            raise VectorStoreError(
                "Document could not be marked indexed: status changed or chunk rows missing",
                operation="finalize",
                details={"document_id": document_id, "chunk_count": chunk_count},
            )
        return document

    async def mark_failed(self, document_id: str, error_message: str) -> bool:
        async with self._session_factory.begin() as session:
            document = await document_crud.mark_failed(session, document_id, error_message)
        return document is not None

    async def delete_document(self, document_id: str) -> bool:
        """
        Delete a document and all of its chunks.

        Returns:
            bool: False when the document does not exist

        Raises:
            DocumentBusyError: When an indexing run holds the document
        """
        async with self._session_factory.begin() as session:
            document = await document_crud.get_by_id(session, document_id)
            if document is None:
                return False
            if document.status is DocumentStatus.PROCESSING:
                raise DocumentBusyError(document_id)
            deleted_chunks = await chunk_crud.delete_by_document(session, document_id)
            await document_crud.delete_by_id(session, document_id)

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": document_id, "chunk_count": deleted_chunks},
        )
        return True

    async def find_stale_documents(self, updated_before: datetime) -> Sequence[DocumentModel]:
        async with self._session_factory() as session:
            return await document_crud.get_stale_processing(session, updated_before)

    # Chunks

    async def bulk_insert_chunks(self, document_id: str, chunks: Sequence[Chunk]) -> int:
        """
        Insert one batch of chunks in a single transaction.

        Args:
            document_id: Owning document
            chunks: Chunks with embeddings, any contiguous slice of the document

        Returns:
            int: Number of rows inserted
        """
        rows = [
            {
                "document_id": document_id,
                "chunk_index": chunk.chunk_index,
                "content": chunk.content,
                "chunk_type": chunk.chunk_type,
                "start_offset": chunk.start_offset,
                "end_offset": chunk.end_offset,
                "embedding": chunk.embedding,
                "embedding_source": chunk.embedding_source,
                "embedding_model": chunk.embedding_model,
                "embedding_dimension": (
                    len(chunk.embedding) if chunk.embedding is not None else None
                ),
                "chunk_metadata": chunk.metadata.model_dump(mode="json"),
            }
            for chunk in chunks
        ]
        async with self._session_factory.begin() as session:
            return await chunk_crud.bulk_insert(session, rows)

    async def delete_chunks_by_document(self, document_id: str) -> int:
        async with self._session_factory.begin() as session:
            deleted = await chunk_crud.delete_by_document(session, document_id)
        logger.info(
            f"{__name__}:delete_chunks_by_document - Chunks deleted",
            extra={"document_id": document_id, "chunk_count": deleted},
        )
        return deleted

    async def get_chunks(self, document_id: str) -> Sequence[ChunkModel]:
        async with self._session_factory() as session:
            return await chunk_crud.get_by_document(session, document_id)

    async def count_chunks(self, document_id: str) -> int:
        async with self._session_factory() as session:
            return await chunk_crud.count_by_document(session, document_id)

    async def chunk_counts(self) -> dict[str, int]:
        async with self._session_factory() as session:
            return await chunk_crud.count_grouped(session)

    # Search

    async def nearest_neighbors(
        self,
        query_vector: list[float],
        k: int,
        threshold: float | None = None,
    ) -> list[VectorSearchResult]:
        """
        Rank embedded chunks of INDEXED documents by cosine similarity.

        Args:
            query_vector: Query embedding
            k: Maximum number of results
            threshold: Minimum score (inclusive)

        Returns:
            list[VectorSearchResult]: Best k chunks, highest score first

        Raises:
            VectorStoreError: When candidates cannot be loaded
            DimensionMismatchError: When stored and query dimensions differ
        """
        try:
            async with self._session_factory() as session:
                rows = await chunk_crud.get_search_candidates(session)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to load search candidates: {e}",
                operation="query",
            ) from e

        candidates = [
            StoredVector(
                chunk_id=str(row.id),
                document_id=row.document_id,
                chunk_index=row.chunk_index,
                content=row.content,
                embedding=row.embedding,
                metadata=row.chunk_metadata or {},
            )
            for row in rows
        ]
        return rank_by_cosine(query_vector, candidates, k=k, threshold=threshold)

    async def embedding_profiles(self) -> set[tuple[str, int]]:
        """(model, dimension) pairs present in the corpus."""
        async with self._session_factory() as session:
            return await chunk_crud.distinct_embedding_profiles(session)

    async def ping(self) -> bool:
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))
        return True
