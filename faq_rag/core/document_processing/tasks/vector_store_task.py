"""
Vector store write task.

Persists a document's embedded chunks in retried batches, then marks the
document INDEXED. Any failure (including cancellation) removes the chunks
written so far and leaves the document FAILED, so a document is either
fully searchable or has no chunks at all.

Dependencies: faq_rag.boundary.vdb
System role: Final stage of document ingestion pipeline
"""

import asyncio
import logging
from typing import Sequence

from faq_rag.boundary.vdb.vector_store_client import ChunkStore
from faq_rag.core.exceptions import VectorStoreError

from ..models import Chunk, EmbeddingQuality
from ..retry import RetryPolicy

logger = logging.getLogger(__name__)


def validate_chunk_sequence(chunks: Sequence[Chunk]) -> None:
    """
    Check chunk indices are exactly 0..n-1 in order.

    Raises:
        ValueError: On gaps, duplicates or reordering
    """
    for position, chunk in enumerate(chunks):
        if chunk.chunk_index != position:
            raise ValueError(
                f"Chunk indices must be contiguous from 0: position {position} "
                f"has chunk_index {chunk.chunk_index}"
            )


class VectorStoreTask:
    """Write embedded chunks to the chunk store."""

    def __init__(
        self,
        store: ChunkStore,
        retry_policy: RetryPolicy | None = None,
        batch_size: int = 100,
    ) -> None:
        """
        Initialize vector store task.

        Args:
            store: Persistent chunk store
            retry_policy: Policy applied to every batch write
            batch_size: Chunks per insert transaction

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.store = store
        self.retry_policy = retry_policy or RetryPolicy()
        self.batch_size = batch_size

    async def write(
        self,
        document_id: str,
        chunks: Sequence[Chunk],
        embedding_quality: EmbeddingQuality = EmbeddingQuality.FULL,
    ) -> int:
        """
        Persist chunks and mark the document INDEXED.

        The caller must have removed any previous chunks of the document;
        this task never merges with existing rows.

        Args:
            document_id: Owning document (must be PROCESSING)
            chunks: Embedded chunks in index order
            embedding_quality: Quality flag stored with the document

        Returns:
            int: Number of chunks persisted

        Raises:
            ValueError: When chunk indices are not contiguous
            VectorStoreError: When a batch keeps failing or finalization fails
        """
        validate_chunk_sequence(chunks)

        try:
            for offset in range(0, len(chunks), self.batch_size):
                batch = chunks[offset : offset + self.batch_size]
                await self.retry_policy.run(
                    lambda batch=batch: self.store.bulk_insert_chunks(document_id, batch),
                    description=f"insert chunks {offset}-{offset + len(batch) - 1}",
                )

            await self.retry_policy.run(
                lambda: self.store.mark_indexed(document_id, len(chunks), embedding_quality),
                description="mark indexed",
            )
        except (Exception, asyncio.CancelledError) as e:
            await self._discard(document_id, e)
            if isinstance(e, (VectorStoreError, ValueError, asyncio.CancelledError)):
                raise
            raise VectorStoreError(
                f"Failed to persist chunks: {type(e).__name__}: {e}",
                operation="insert",
                details={"document_id": document_id, "chunk_count": len(chunks)},
            ) from e

        logger.info(
            f"{__name__}:write - Chunks persisted",
            extra={
                "document_id": document_id,
                "chunk_count": len(chunks),
                "embedding_quality": embedding_quality.value,
            },
        )
        return len(chunks)

    async def _discard(self, document_id: str, error: BaseException) -> None:
        """Remove partial chunks and mark the document FAILED."""
        reason = (
            "Indexing cancelled"
            if isinstance(error, asyncio.CancelledError)
            else f"Failed to persist chunks: {type(error).__name__}: {error}"
        )
        logger.error(
            f"{__name__}:write - Write aborted, discarding partial chunks",
            extra={"document_id": document_id, "error": reason},
        )
        # Shielded so cleanup still finishes when the run itself was cancelled
        await asyncio.shield(self._cleanup(document_id, reason))

    async def _cleanup(self, document_id: str, reason: str) -> None:
        try:
            await self.retry_policy.run(
                lambda: self.store.delete_chunks_by_document(document_id),
                description="delete partial chunks",
            )
        except Exception:
            # Document is still marked FAILED below; search never sees its chunks
            logger.exception(
                f"{__name__}:_cleanup - Could not delete partial chunks",
                extra={"document_id": document_id},
            )
        await self.store.mark_failed(document_id, reason)
