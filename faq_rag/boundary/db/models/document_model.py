"""
Document ORM model.

Represents an ingested FAQ/knowledge document with its indexing status.
Tracks the lifecycle from registration to searchable chunks.

Dependencies: sqlalchemy, faq_rag.boundary.db.base
System role: Document persistence for ingestion tracking
"""

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faq_rag.boundary.db.base import Base, TimestampMixin
from faq_rag.core.document_processing.models import (
    DocumentStatus,
    EmbeddingQuality,
    SourceType,
)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class DocumentModel(Base, TimestampMixin):
    """
    Document ORM model tracking indexing state.

    Lifecycle: PENDING → PROCESSING → INDEXED or FAILED; INDEXED and FAILED
    documents may re-enter PROCESSING on re-index.

    Attributes:
        id: Caller-supplied or generated string key (64 char limit)
        title: Display title
        content: Normalized text kept for re-indexing
        source_type: Provenance of the raw text
        source_url: Original URL for web pages
        status: Current indexing state
        chunk_count: Number of persisted chunks once INDEXED
        embedding_quality: FULL or DEGRADED once INDEXED
        error_message: Failure reason if FAILED (2048 char limit)
        created_at: Registration timestamp (UTC)
        updated_at: Last change timestamp (UTC)

    Relationships:
        chunks: Child ChunkModels (deleted with the document)
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        doc="Normalized document text",
    )

    source_type: Mapped[SourceType] = mapped_column(
        Enum(SourceType, native_enum=False, length=32, values_callable=_enum_values),
        nullable=False,
        default=SourceType.PLAIN_TEXT,
    )

    source_url: Mapped[str | None] = mapped_column(String(2048), nullable=True, index=True)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, length=32, values_callable=_enum_values),
        nullable=False,
        default=DocumentStatus.PENDING,
        index=True,
    )

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    embedding_quality: Mapped[EmbeddingQuality | None] = mapped_column(
        Enum(EmbeddingQuality, native_enum=False, length=32, values_callable=_enum_values),
        nullable=True,
    )

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if indexing failed",
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChunkModel.chunk_index",
    )
