"""
Embedding generation task.

Turns classified spans into Chunks with vectors. Embedding runs in a
worker thread so the event loop stays free; results keep span order.

Dependencies: faq_rag.core.document_processing.embeddings
System role: Fourth stage of document ingestion pipeline
"""

import asyncio
import logging

from ..embeddings import Embedder
from ..models import (
    BatchEmbeddingResult,
    Chunk,
    ChunkMetadata,
    ChunkType,
    SourceType,
    TextSpan,
)

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Embed chunk contents with the deployment embedder."""

    def __init__(self, embedder: Embedder, batch_size: int = 32) -> None:
        """
        Initialize embedding task.

        Args:
            embedder: Model-backed or hash embedder
            batch_size: Texts per embedding request
        """
        self.embedder = embedder
        self.batch_size = batch_size

    async def embed(
        self,
        spans: list[TextSpan],
        chunk_types: list[ChunkType],
        source_type: SourceType | None = None,
    ) -> tuple[list[Chunk], BatchEmbeddingResult]:
        """
        Embed spans and assemble chunks in index order.

        Args:
            spans: Spans from the splitter
            chunk_types: Classification per span (same length)
            source_type: Provenance recorded in chunk metadata

        Returns:
            tuple: Chunks with embeddings, and the batch result for quality stats

        Raises:
            ValueError: When spans and chunk_types lengths differ
        """
        if len(spans) != len(chunk_types):
            raise ValueError(
                f"Got {len(chunk_types)} classifications for {len(spans)} spans"
            )
        if not spans:
            return [], BatchEmbeddingResult()

        batch = await asyncio.to_thread(
            self.embedder.embed_batch,
            [span.content for span in spans],
            self.batch_size,
        )

        chunks = []
        for index, (span, chunk_type, result) in enumerate(
            zip(spans, chunk_types, batch.results)
        ):
            metadata = ChunkMetadata(
                chunk_type=chunk_type,
                start_offset=span.start_offset,
                end_offset=span.end_offset,
                source_type=source_type,
            )
            if result.error:
                metadata.extra["embedding_error"] = result.error[:500]
            chunks.append(
                Chunk(
                    chunk_index=index,
                    content=span.content,
                    chunk_type=chunk_type,
                    start_offset=span.start_offset,
                    end_offset=span.end_offset,
                    embedding=result.vector,
                    embedding_source=result.source,
                    embedding_model=result.model_id,
                    metadata=metadata,
                )
            )

        logger.info(
            f"{__name__}:embed - Embedded {len(chunks)} chunks",
            extra={
                "model_id": self.embedder.model_id,
                "fallback_count": batch.fallback_count,
                "total_time_ms": round(batch.total_time_ms, 2),
            },
        )
        return chunks, batch
