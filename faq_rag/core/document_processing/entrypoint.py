"""
Document pipeline orchestrator.

Coordinates normalizing, chunking, classification, embedding and vector
store tasks for one document at a time. Stage failures end up on the
document (FAILED + reason) and in the returned PipelineResult rather than
as exceptions; only "document busy / not found" reach the caller.

Dependencies: All task modules, configs, faq_rag.boundary.vdb
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid

from faq_rag.boundary.vdb.vector_store_client import ChunkStore
from faq_rag.core.exceptions import EmptyDocumentError

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .embeddings import Embedder
from .models import (
    DocumentStatus,
    EmbeddingQuality,
    IngestionRequest,
    PipelineResult,
    SourceType,
)
from .retry import RetryPolicy
from .tasks import (
    ChunkingTask,
    ClassificationTask,
    EmbeddingTask,
    NormalizingTask,
    VectorStoreTask,
)

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document indexing: normalize -> split -> classify -> embed -> persist."""

    def __init__(
        self,
        store: ChunkStore,
        embedder: Embedder,
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            store: Persistent chunk store
            embedder: Deployment-wide embedder
            settings: Pipeline settings (uses environment defaults if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._store = store
        self._embedder = embedder
        self._retry_policy = RetryPolicy(
            max_attempts=self._settings.retry_max_attempts,
            base_delay=self._settings.retry_base_delay,
            max_delay=self._settings.retry_max_delay,
        )

        self._normalizing_task = NormalizingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._classification_task = ClassificationTask()
        self._embedding_task = EmbeddingTask(
            embedder=embedder,
            batch_size=self._settings.embedding_batch_size,
        )
        self._vector_store_task = VectorStoreTask(
            store=store,
            retry_policy=self._retry_policy,
            batch_size=self._settings.write_batch_size,
        )

    async def index(self, request: IngestionRequest) -> PipelineResult:
        """
        Register (if needed) and index a document.

        Without a document_id, a request whose source_url is already known
        re-indexes that document instead of registering a duplicate.

        Args:
            request: Raw document text and descriptors

        Returns:
            PipelineResult: INDEXED or FAILED outcome

        Raises:
            DocumentBusyError: Another run holds the document
        """
        document_id = request.document_id
        if document_id is None and request.source_url:
            existing = await self._store.find_document_by_source_url(request.source_url)
            if existing is not None:
                document_id = existing.id
                logger.info(
                    f"{__name__}:index - Source URL already registered, re-indexing",
                    extra={"document_id": document_id, "source_url": request.source_url},
                )
        document_id = document_id or str(uuid.uuid4())

        await self._store.upsert_document(
            document_id,
            title=request.title,
            source_type=request.source_type,
            source_url=request.source_url,
        )
        await self._store.claim_document(document_id)

        return await self._run(
            document_id,
            request.raw_text,
            source_type=request.source_type,
            fields={
                "title": request.title,
                "source_type": request.source_type,
                "source_url": request.source_url,
            },
        )

    async def reindex(self, document_id: str, raw_text: str | bytes | None = None) -> PipelineResult:
        """
        Rebuild all chunks of an existing document.

        Args:
            document_id: Document to re-index
            raw_text: Replacement text; the stored content is reused when None

        Returns:
            PipelineResult: INDEXED or FAILED outcome

        Raises:
            DocumentNotFoundError: No such document
            DocumentBusyError: Another run holds the document
        """
        document = await self._store.claim_document(document_id)
        text = raw_text if raw_text is not None else document.content
        return await self._run(document_id, text, source_type=document.source_type, fields={})

    async def _run(
        self,
        document_id: str,
        raw_text: str | bytes,
        source_type: SourceType,
        fields: dict,
    ) -> PipelineResult:
        start_time = time.perf_counter()
        timeout = self._settings.pipeline_timeout_seconds

        try:
            return await asyncio.wait_for(
                self._stages(document_id, raw_text, source_type, fields, start_time),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            reason = f"Indexing timed out after {timeout:g}s"
        except asyncio.CancelledError:
            logger.warning(
                f"{__name__}:_run - Indexing cancelled",
                extra={"document_id": document_id},
            )
            await asyncio.shield(self._fail(document_id, "Indexing cancelled"))
            raise
        except Exception as e:
            logger.exception(
                f"{__name__}:_run - Indexing failed",
                extra={"document_id": document_id},
            )
            reason = f"{type(e).__name__}: {e}"

        await self._fail(document_id, reason)
        return PipelineResult(
            document_id=document_id,
            status=DocumentStatus.FAILED,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            error_message=reason,
        )

    async def _stages(
        self,
        document_id: str,
        raw_text: str | bytes,
        source_type: SourceType,
        fields: dict,
        start_time: float,
    ) -> PipelineResult:
        text = self._normalizing_task.normalize(raw_text, document_id=document_id)
        if not text:
            raise EmptyDocumentError(
                "Document has no content after normalization",
                document_id=document_id,
            )
        await self._store.update_document(document_id, content=text, **fields)

        # Re-indexing is explicit: old chunks go before new ones are written
        await self._retry_policy.run(
            lambda: self._store.delete_chunks_by_document(document_id),
            description="delete previous chunks",
        )
        self._embedder.check_corpus(await self._store.embedding_profiles())

        spans = self._chunking_task.split(text)
        chunk_types = self._classification_task.classify_spans(spans)
        chunks, batch = await self._embedding_task.embed(spans, chunk_types, source_type)

        quality = (
            EmbeddingQuality.DEGRADED
            if batch.fallback_ratio > self._settings.degraded_fallback_ratio
            else EmbeddingQuality.FULL
        )
        await self._vector_store_task.write(document_id, chunks, embedding_quality=quality)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:_stages - Document indexed",
            extra={
                "document_id": document_id,
                "chunk_count": len(chunks),
                "fallback_count": batch.fallback_count,
                "embedding_quality": quality.value,
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )
        return PipelineResult(
            document_id=document_id,
            status=DocumentStatus.INDEXED,
            chunk_count=len(chunks),
            fallback_count=batch.fallback_count,
            embedding_quality=quality,
            processing_time_ms=elapsed_ms,
        )

    async def _fail(self, document_id: str, reason: str) -> None:
        """Leave the document FAILED with no chunks."""
        try:
            await self._retry_policy.run(
                lambda: self._store.delete_chunks_by_document(document_id),
                description="delete chunks of failed document",
            )
        except Exception:
            logger.exception(
                f"{__name__}:_fail - Could not delete chunks",
                extra={"document_id": document_id},
            )
        await self._store.mark_failed(document_id, reason)
        logger.warning(
            f"{__name__}:_fail - Document marked failed",
            extra={"document_id": document_id, "error": reason},
        )
