"""
Document service orchestrator.

Coordinates ingestion, re-indexing, lookups, deletion and the maintenance
operations that repair documents left inconsistent by crashed runs.

Dependencies: faq_rag.boundary.vdb, faq_rag.core.document_processing
System role: Document management orchestration
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Sequence

from pydantic import BaseModel, Field

from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.boundary.vdb.vector_store_client import ChunkStore
from faq_rag.core.document_processing.configs import DocumentPipelineSettings
from faq_rag.core.document_processing.entrypoint import DocumentPipeline
from faq_rag.core.document_processing.models import (
    DocumentStatus,
    IngestionRequest,
    PipelineResult,
)
from faq_rag.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class ReconciliationReport(BaseModel):
    """Changes made by DocumentService.reconcile_chunk_counts()."""

    corrected_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Indexed document ID -> actual chunk count written back",
    )
    orphaned_chunks_removed: dict[str, int] = Field(
        default_factory=dict,
        description="Non-indexed document ID -> leftover chunk rows deleted",
    )


class DocumentService:
    """
    Document service orchestrator.

    Uses DocumentPipeline for indexing and the ChunkStore for everything
    else. Handles document lifecycle: ingestion, re-index, lookup, deletion.
    """

    def __init__(
        self,
        store: ChunkStore,
        pipeline: DocumentPipeline,
        settings: DocumentPipelineSettings,
    ) -> None:
        """
        Initialize document service.

        Args:
            store: Persistent chunk store
            pipeline: Indexing pipeline bound to the same store
            settings: Pipeline settings (stale-run cut-off)
        """
        self.store = store
        self.pipeline = pipeline
        self.settings = settings

    async def ingest(self, request: IngestionRequest) -> PipelineResult:
        """
        Register and index a document.

        Returns:
            PipelineResult: INDEXED, or FAILED with a reason

        Raises:
            DocumentBusyError: The document is already being indexed
        """
        logger.info(
            f"{__name__}:ingest - Ingesting document",
            extra={"document_id": request.document_id, "source_type": request.source_type.value},
        )
        return await self.pipeline.index(request)

    async def reindex(self, document_id: str, raw_text: str | None = None) -> PipelineResult:
        """
        Rebuild a document's chunks from new or stored text.

        Raises:
            DocumentNotFoundError: No such document
            DocumentBusyError: The document is already being indexed
        """
        logger.info(
            f"{__name__}:reindex - Re-indexing document",
            extra={"document_id": document_id, "new_text": raw_text is not None},
        )
        return await self.pipeline.reindex(document_id, raw_text)

    async def get_document(self, document_id: str) -> DocumentModel:
        """
        Retrieve a document by ID.

        Raises:
            DocumentNotFoundError: No such document
        """
        document = await self.store.get_document(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def list_documents(
        self,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        return await self.store.list_documents(status=status, limit=limit, offset=offset)

    async def get_chunks(self, document_id: str) -> Sequence[ChunkModel]:
        """
        Retrieve a document's chunks in index order.

        Raises:
            DocumentNotFoundError: No such document
        """
        await self.get_document(document_id)
        return await self.store.get_chunks(document_id)

    async def delete_document(self, document_id: str) -> None:
        """
        Delete a document and its chunks.

        Raises:
            DocumentNotFoundError: No such document
            DocumentBusyError: The document is being indexed
        """
        deleted = await self.store.delete_document(document_id)
        if not deleted:
            raise DocumentNotFoundError(document_id)

    async def recover_stale_documents(self, older_than: timedelta | None = None) -> list[str]:
        """
        Fail documents whose indexing run died without finishing.

        A document still PROCESSING after the pipeline time bound has no live
        run (the run would have failed it), so it is marked FAILED and its
        partial chunks are removed. It can then be re-indexed from scratch.

        Args:
            older_than: Age cut-off; defaults to the pipeline timeout

        Returns:
            list[str]: IDs of recovered documents
        """
        if older_than is None:
            older_than = timedelta(seconds=self.settings.pipeline_timeout_seconds)
        cutoff = datetime.now(timezone.utc) - older_than
        stale = await self.store.find_stale_documents(cutoff)

        recovered = []
        for document in stale:
            await self.store.delete_chunks_by_document(document.id)
            if await self.store.mark_failed(
                document.id, f"Indexing did not finish within {older_than}"
            ):
                recovered.append(document.id)

        if recovered:
            logger.warning(
                f"{__name__}:recover_stale_documents - Recovered {len(recovered)} documents",
                extra={"document_ids": recovered},
            )
        return recovered

    async def reconcile_chunk_counts(self) -> ReconciliationReport:
        """
        Repair chunk_count drift and remove chunks of non-indexed documents.

        Indexed documents get chunk_count set to their persisted row count.
        FAILED and PENDING documents must have no chunks, so any leftovers
        are deleted. PROCESSING documents are left to their running run.

        Returns:
            ReconciliationReport: What was changed
        """
        report = ReconciliationReport()
        counts = await self.store.chunk_counts()

        for document in await self.store.list_documents():
            actual = counts.get(document.id, 0)
            if document.status is DocumentStatus.INDEXED and document.chunk_count != actual:
                await self.store.update_document(document.id, chunk_count=actual)
                report.corrected_counts[document.id] = actual
            elif document.status in (DocumentStatus.FAILED, DocumentStatus.PENDING) and actual:
                removed = await self.store.delete_chunks_by_document(document.id)
                report.orphaned_chunks_removed[document.id] = removed

        logger.info(
            f"{__name__}:reconcile_chunk_counts - Reconciliation finished",
            extra={
                "corrected": len(report.corrected_counts),
                "orphans_removed": len(report.orphaned_chunks_removed),
            },
        )
        return report
