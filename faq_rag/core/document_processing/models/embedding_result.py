"""
Embedding result models.

Every vector carries its provenance so callers can tell a model vector
from a fallback one.

Dependencies: pydantic
System role: Return types of the embedding generator
"""

import enum

from pydantic import BaseModel, Field, computed_field


class EmbeddingSource(str, enum.Enum):
    """Provenance of an embedding vector."""

    MODEL = "model"
    FALLBACK = "fallback"


class EmbeddingResult(BaseModel):
    """Single embedding with provenance and timing."""

    vector: list[float] = Field(description="Embedding vector")
    source: EmbeddingSource = Field(description="Model or fallback")
    model_id: str = Field(description="Identifier of the embedder that produced the vector")
    processing_time_ms: float = Field(default=0.0, ge=0)
    error: str | None = Field(default=None, description="Why a fallback vector was used")

    @property
    def is_fallback(self) -> bool:
        return self.source is EmbeddingSource.FALLBACK


class BatchEmbeddingResult(BaseModel):
    """Ordered embeddings for a batch of texts."""

    results: list[EmbeddingResult] = Field(default_factory=list)
    total_time_ms: float = Field(default=0.0, ge=0)

    @computed_field
    @property
    def fallback_count(self) -> int:
        return sum(1 for result in self.results if result.is_fallback)

    @computed_field
    @property
    def fallback_ratio(self) -> float:
        if not self.results:
            return 0.0
        return self.fallback_count / len(self.results)
