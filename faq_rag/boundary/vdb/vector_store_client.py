"""
Chunk store contract.

Everything the pipeline, the services and search need from persistent
storage: document registration and guarded status changes, chunk writes
and deletes, and nearest-neighbour search over stored vectors.

Dependencies: faq_rag.boundary.db.models, faq_rag.boundary.vdb.vector_schemas
System role: Storage port implemented by SQLChunkStore (and test doubles)
"""

from datetime import datetime
from typing import Protocol, Sequence

from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.boundary.vdb.vector_schemas import VectorSearchResult
from faq_rag.core.document_processing.models import (
    Chunk,
    DocumentStatus,
    EmbeddingQuality,
    SourceType,
)


class ChunkStore(Protocol):
    """Persistent store for documents, chunks and their embeddings."""

    async def upsert_document(
        self,
        document_id: str,
        title: str,
        source_type: SourceType,
        source_url: str | None = None,
    ) -> DocumentModel: ...

    async def get_document(self, document_id: str) -> DocumentModel | None: ...

    async def find_document_by_source_url(self, source_url: str) -> DocumentModel | None: ...

    async def list_documents(
        self,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]: ...

    async def claim_document(self, document_id: str) -> DocumentModel: ...

    async def update_document(self, document_id: str, **fields) -> DocumentModel | None: ...

    async def mark_indexed(
        self,
        document_id: str,
        chunk_count: int,
        embedding_quality: EmbeddingQuality,
    ) -> DocumentModel: ...

    async def mark_failed(self, document_id: str, error_message: str) -> bool: ...

    async def delete_document(self, document_id: str) -> bool: ...

    async def bulk_insert_chunks(self, document_id: str, chunks: Sequence[Chunk]) -> int: ...

    async def delete_chunks_by_document(self, document_id: str) -> int: ...

    async def get_chunks(self, document_id: str) -> Sequence[ChunkModel]: ...

    async def count_chunks(self, document_id: str) -> int: ...

    async def chunk_counts(self) -> dict[str, int]: ...

    async def find_stale_documents(self, updated_before: datetime) -> Sequence[DocumentModel]: ...

    async def nearest_neighbors(
        self,
        query_vector: list[float],
        k: int,
        threshold: float | None = None,
    ) -> list[VectorSearchResult]: ...

    async def embedding_profiles(self) -> set[tuple[str, int]]: ...

    async def ping(self) -> bool: ...
