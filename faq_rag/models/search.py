"""
Search schemas.

Request/response contracts for similarity search over indexed chunks.

Dependencies: pydantic
System role: Search API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from faq_rag.core.document_processing.models import EmbeddingSource


class SearchRequest(BaseModel):
    """Request schema for similarity search."""

    query: str = Field(min_length=1, max_length=2000, description="Query text")
    limit: int = Field(default=5, ge=1, le=100, description="Maximum number of results")
    threshold: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity (inclusive)",
    )


class SearchHit(BaseModel):
    """Single ranked chunk."""

    chunk_id: str
    document_id: str
    content: str
    score: float = Field(description="Cosine similarity")
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    """Ranked search results, highest score first."""

    query: str
    results: list[SearchHit]
    count: int
    embedding_source: EmbeddingSource = Field(
        description="Whether the query vector came from a model or the fallback embedder"
    )
