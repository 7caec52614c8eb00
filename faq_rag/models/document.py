"""
Document domain models and schemas.

Request/response schemas for document ingestion and lifecycle operations.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from faq_rag.core.document_processing.models import (
    ChunkType,
    DocumentStatus,
    EmbeddingQuality,
    EmbeddingSource,
    SourceType,
)


class IngestDocumentRequest(BaseModel):
    """Request schema for the ingestion trigger."""

    document_id: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Optional caller-chosen ID (generated when omitted)",
    )
    title: str = Field(min_length=1, max_length=500)
    raw_text: str = Field(description="Extracted document text")
    source_type: SourceType = Field(default=SourceType.PLAIN_TEXT)
    source_url: str | None = Field(default=None, max_length=2048)


class ReindexRequest(BaseModel):
    """Optional replacement text for a re-index."""

    raw_text: str | None = Field(
        default=None,
        description="New document text; the stored content is reused when omitted",
    )


class DocumentResponse(BaseModel):
    """Response schema for document operations."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    source_type: SourceType
    source_url: str | None = None
    status: DocumentStatus
    chunk_count: int
    embedding_quality: EmbeddingQuality | None = None
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int


class ChunkResponse(BaseModel):
    """Stored chunk without its embedding vector."""

    model_config = ConfigDict(from_attributes=True)

    id: Any
    document_id: str
    chunk_index: int
    content: str
    chunk_type: ChunkType
    start_offset: int
    end_offset: int
    embedding_source: EmbeddingSource | None = None
    embedding_model: str | None = None
    chunk_metadata: dict[str, Any] = Field(default_factory=dict)


class ChunkListResponse(BaseModel):
    """All chunks of one document in index order."""

    document_id: str
    chunks: list[ChunkResponse]
    total: int


class IndexingResponse(BaseModel):
    """Outcome of an ingestion or re-index run."""

    document_id: str
    status: DocumentStatus
    chunk_count: int
    fallback_count: int
    embedding_quality: EmbeddingQuality | None = None
    processing_time_ms: float
    error_message: str | None = None
