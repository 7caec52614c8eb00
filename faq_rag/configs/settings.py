"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides the factory used when the application container is built.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from faq_rag.configs.base import BaseSettings
from faq_rag.configs.database import DatabaseSettings
from faq_rag.configs.vector_store import VectorStoreSettings
from faq_rag.core.document_processing.configs import DocumentPipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    pipeline: DocumentPipelineSettings = Field(default_factory=DocumentPipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings.

    Environment variables are loaded once; pass an explicit Settings
    instance to create_app() to bypass the cache (tests do this).

    Returns:
        Settings: Application settings instance

    Usage:
        from faq_rag.configs import get_settings
        settings = get_settings()
    """
    return Settings()
