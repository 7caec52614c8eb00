"""
Vector store configuration settings.

Manages embedding model selection and similarity search defaults.
One embedder is configured per deployment; the corpus must not mix
vectors from different embedders.

Dependencies: pydantic, pydantic_settings
System role: Vector storage and retrieval configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from faq_rag.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Embedding and similarity search configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    embedding_provider: Literal["hash", "google", "bedrock"] = Field(
        default="hash",
        description="Embedding backend: 'hash' (deterministic fallback), 'google' or 'bedrock'",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Model ID passed to the embedding provider (ignored for 'hash')",
    )
    embedding_dimension: int = Field(
        default=768,
        gt=0,
        description="Embedding vector dimension, constant across the corpus",
    )
    embedding_region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock embeddings",
    )
    normalize_embeddings: bool = Field(
        default=True,
        description="L2-normalize model vectors before storage",
    )

    top_k: int = Field(default=5, ge=1, le=100, description="Default number of results")
    similarity_threshold: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Default minimum cosine similarity (None disables the cut-off)",
    )
