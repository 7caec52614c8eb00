"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceContainer,
    get_chunk_store,
    get_container,
    get_document_service,
    get_embedder,
    get_retrieval_service,
)

__all__ = [
    "ServiceContainer",
    "get_chunk_store",
    "get_container",
    "get_document_service",
    "get_embedder",
    "get_retrieval_service",
]
