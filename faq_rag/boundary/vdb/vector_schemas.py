"""
Vector database schemas.

Pydantic models for similarity search: stored candidates and
scored results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class StoredVector(BaseModel):
    """Embedded chunk considered during similarity ranking."""

    chunk_id: str = Field(description="Chunk identifier")
    document_id: str = Field(description="Owning document")
    chunk_index: int = Field(ge=0, description="Position within the document")
    content: str = Field(description="Chunk text content")
    embedding: list[float] = Field(description="Stored embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    chunk_id: str = Field(description="Chunk identifier")
    document_id: str = Field(description="Owning document")
    chunk_index: int = Field(description="Position within the document")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    similarity_score: float = Field(description="Cosine similarity (-1.0 to 1.0)")
