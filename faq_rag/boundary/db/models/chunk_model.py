"""
Chunk ORM model.

One row per chunk of a document, keyed by (document_id, chunk_index), with
its classification, offsets and embedding vector.

Dependencies: sqlalchemy, faq_rag.boundary.db.base
System role: Chunk and embedding persistence
"""

from typing import Any

from sqlalchemy import Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from faq_rag.boundary.db.base import Base, JSONType, TimestampMixin, UUIDMixin
from faq_rag.core.document_processing.models import ChunkType, EmbeddingSource


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class ChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Chunk ORM model.

    Attributes:
        id: UUID primary key
        document_id: Parent document (cascade delete)
        chunk_index: Zero-based position, unique per document
        content: Chunk text
        chunk_type: TEXT / TABLE / TITLE / IMAGE
        start_offset, end_offset: Character offsets in the normalized text
        embedding: Vector as a JSON array of floats
        embedding_source: MODEL or FALLBACK
        embedding_model: Identifier of the embedder that produced the vector
        embedding_dimension: Length of the stored vector
        chunk_metadata: ChunkMetadata dump
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_document_index"),
    )

    document_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    chunk_type: Mapped[ChunkType] = mapped_column(
        Enum(ChunkType, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False,
        default=ChunkType.TEXT,
    )

    start_offset: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end_offset: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    embedding: Mapped[list[float] | None] = mapped_column(JSONType, nullable=True)

    embedding_source: Mapped[EmbeddingSource | None] = mapped_column(
        Enum(EmbeddingSource, native_enum=False, length=16, values_callable=_enum_values),
        nullable=True,
    )

    embedding_model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    embedding_dimension: Mapped[int | None] = mapped_column(Integer, nullable=True)

    chunk_metadata: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )

    document = relationship("DocumentModel", back_populates="chunks")
