"""
Chunk CRUD operations.

Bulk insert and delete by document, ordered reads, and the candidate scan
used by similarity search.

Dependencies: sqlalchemy, faq_rag.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Any, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from faq_rag.boundary.db.CRUD.base_crud import BaseCRUD
from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.core.document_processing.models import DocumentStatus


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        super().__init__(ChunkModel)

    async def bulk_insert(self, session: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """
        Insert chunk rows in one statement.

        Args:
            session: Async database session
            rows: Column dicts (document_id, chunk_index, content, ...)

        Returns:
            int: Number of rows inserted
        """
        if not rows:
            return 0
        await session.execute(insert(ChunkModel), rows)
        return len(rows)

    async def delete_by_document(self, session: AsyncSession, document_id: str) -> int:
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: str,
    ) -> Sequence[ChunkModel]:
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document(self, session: AsyncSession, document_id: str) -> int:
        stmt = select(func.count(ChunkModel.id)).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def count_grouped(self, session: AsyncSession) -> dict[str, int]:
        """Chunk row count per document ID."""
        stmt = select(ChunkModel.document_id, func.count(ChunkModel.id)).group_by(
            ChunkModel.document_id
        )
        result = await session.execute(stmt)
        return {document_id: int(count) for document_id, count in result.all()}

    async def get_search_candidates(self, session: AsyncSession) -> Sequence[ChunkModel]:
        """
        Embedded chunks of INDEXED documents in insertion order.

        Chunks of documents in any other state are never candidates, so a
        document being written is not visible to search.
        """
        stmt = (
            select(ChunkModel)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(
                DocumentModel.status == DocumentStatus.INDEXED,
                ChunkModel.embedding.is_not(None),
            )
            .order_by(ChunkModel.created_at, ChunkModel.document_id, ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def distinct_embedding_profiles(self, session: AsyncSession) -> set[tuple[str, int]]:
        """Distinct (embedding_model, embedding_dimension) pairs of stored vectors."""
        stmt = (
            select(ChunkModel.embedding_model, ChunkModel.embedding_dimension)
            .where(
                ChunkModel.embedding_model.is_not(None),
                ChunkModel.embedding_dimension.is_not(None),
            )
            .distinct()
        )
        result = await session.execute(stmt)
        return {(model, int(dimension)) for model, dimension in result.all()}


chunk_crud = ChunkCRUD()
