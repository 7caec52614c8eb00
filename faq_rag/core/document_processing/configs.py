"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for chunking, embedding batches,
persistence batches, retries and the per-run time bound.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
    )

    # Embedding settings
    embedding_batch_size: int = Field(
        default=32,
        gt=0,
        description="Texts sent to the embedding model per request",
    )
    degraded_fallback_ratio: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Fallback share above which a document is flagged degraded",
    )

    # Persistence settings
    write_batch_size: int = Field(
        default=100,
        gt=0,
        description="Chunk rows inserted per transaction",
    )
    retry_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per storage write before giving up",
    )
    retry_base_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Initial backoff delay in seconds",
    )
    retry_max_delay: float = Field(
        default=8.0,
        ge=0.0,
        description="Backoff delay cap in seconds",
    )

    pipeline_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Upper bound for one indexing run; also the stale-processing cut-off",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
