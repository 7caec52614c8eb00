"""
Document CRUD operations.

Extends BaseCRUD with status-guarded updates: every lifecycle change is a
single UPDATE whose WHERE clause carries the allowed source states, so two
concurrent runs can never both claim the same document.

Dependencies: sqlalchemy, faq_rag.boundary.db.models
System role: Document persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from faq_rag.boundary.db.base import utcnow
from faq_rag.boundary.db.CRUD.base_crud import BaseCRUD
from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.core.document_processing.models import DocumentStatus, EmbeddingQuality

ERROR_MESSAGE_LIMIT = 2000


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def list_documents(
        self,
        session: AsyncSession,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents, newest first, optionally filtered by status.

        Args:
            session: Async database session
            status: Only return documents in this state
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels
        """
        stmt = select(DocumentModel).order_by(
            DocumentModel.created_at.desc(), DocumentModel.id
        )
        if status is not None:
            stmt = stmt.where(DocumentModel.status == status)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def transition(
        self,
        session: AsyncSession,
        id: str,
        from_statuses: Sequence[DocumentStatus],
        to_status: DocumentStatus,
        **fields,
    ) -> DocumentModel | None:
        """
        Compare-and-set the status of a document.

        Args:
            session: Async database session
            id: Document ID
            from_statuses: States the document must currently be in
            to_status: New state
            **fields: Extra columns to set in the same statement

        Returns:
            Updated DocumentModel, or None when the document is missing or
            not in one of from_statuses
        """
        stmt = (
            update(DocumentModel)
            .where(
                DocumentModel.id == id,
                DocumentModel.status.in_(list(from_statuses)),
            )
            .values(status=to_status, updated_at=utcnow(), **fields)
            .returning(DocumentModel)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_indexed(
        self,
        session: AsyncSession,
        id: str,
        chunk_count: int,
        embedding_quality: EmbeddingQuality,
    ) -> DocumentModel | None:
        """
        Move a PROCESSING document to INDEXED.

        The update only applies when exactly chunk_count chunk rows exist
        for the document, so chunk_count and the stored rows cannot diverge.

        Returns:
            Updated DocumentModel, or None when the guard did not match
        """
        persisted = (
            select(func.count(ChunkModel.id))
            .where(ChunkModel.document_id == id)
            .scalar_subquery()
        )
        stmt = (
            update(DocumentModel)
            .where(
                DocumentModel.id == id,
                DocumentModel.status == DocumentStatus.PROCESSING,
                persisted == chunk_count,
            )
            .values(
                status=DocumentStatus.INDEXED,
                chunk_count=chunk_count,
                embedding_quality=embedding_quality,
                error_message=None,
                updated_at=utcnow(),
            )
            .returning(DocumentModel)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_failed(
        self,
        session: AsyncSession,
        id: str,
        error_message: str,
    ) -> DocumentModel | None:
        """
        Move a PROCESSING document to FAILED with a reason.

        Args:
            session: Async database session
            id: Document ID
            error_message: Human-readable reason (truncated to fit the column)

        Returns:
            Updated DocumentModel, or None when it was not PROCESSING
        """
        return await self.transition(
            session,
            id,
            [DocumentStatus.PROCESSING],
            DocumentStatus.FAILED,
            error_message=error_message[:ERROR_MESSAGE_LIMIT],
            chunk_count=0,
            embedding_quality=None,
        )

    async def get_by_source_url(
        self,
        session: AsyncSession,
        source_url: str,
    ) -> DocumentModel | None:
        """Most recently registered document crawled from source_url."""
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.source_url == source_url)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_stale_processing(
        self,
        session: AsyncSession,
        updated_before: datetime,
    ) -> Sequence[DocumentModel]:
        """Documents stuck in PROCESSING since before the cut-off."""
        stmt = select(DocumentModel).where(
            DocumentModel.status == DocumentStatus.PROCESSING,
            DocumentModel.updated_at < updated_before,
        )
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()
