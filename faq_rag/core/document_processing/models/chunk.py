"""
Chunk domain models for document processing pipeline.

Represents a split span of normalized text, its structural classification,
and the fully prepared chunk (content, offsets, embedding) handed to the
vector store writer.

Dependencies: pydantic
System role: Data structures for document chunks in ingestion pipeline
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .embedding_result import EmbeddingSource
from .document import SourceType


class ChunkType(str, enum.Enum):
    """
    Structural category of a chunk.

    TEXT: Regular prose (default)
    TABLE: Pipe-delimited rows spanning several lines
    TITLE: Short heading-like line
    IMAGE: Text extracted from an image by the upstream extractor
    """

    TEXT = "text"
    TABLE = "table"
    TITLE = "title"
    IMAGE = "image"


class TextSpan(BaseModel):
    """Contiguous piece of normalized text produced by the splitter."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Span text (never empty)")
    start_offset: int = Field(ge=0, description="Start offset in the normalized text")
    end_offset: int = Field(ge=0, description="End offset (exclusive) in the normalized text")
    from_table: bool = Field(
        default=False,
        description="Span is a group of whole table rows",
    )


class ChunkMetadata(BaseModel):
    """
    Metadata stored alongside every chunk row.

    Known keys are typed fields; anything else a caller wants to carry goes
    into ``extra`` so the stored JSON never grows untyped top-level keys.
    """

    chunk_type: ChunkType = ChunkType.TEXT
    start_offset: int = 0
    end_offset: int = 0
    source_type: SourceType | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class Chunk(BaseModel):
    """Document chunk with optional embedding vector."""

    chunk_index: int = Field(ge=0, description="Zero-based position within the document")
    content: str = Field(min_length=1, description="Chunk text content")
    chunk_type: ChunkType = Field(default=ChunkType.TEXT)
    start_offset: int = Field(default=0, ge=0)
    end_offset: int = Field(default=0, ge=0)
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
    embedding_source: EmbeddingSource | None = Field(
        default=None,
        description="Whether the vector came from the model or the fallback path",
    )
    embedding_model: str | None = Field(default=None, description="Embedder identifier")
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
