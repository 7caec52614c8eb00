"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/vector-store

Dependencies: faq_rag.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from faq_rag.api.deps import get_chunk_store, get_embedder
from faq_rag.boundary.vdb import ChunkStore
from faq_rag.core.document_processing.embeddings import Embedder
from faq_rag.core.exceptions import EmbeddingConfigurationError
from faq_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(store: ChunkStore = Depends(get_chunk_store)) -> HealthResponse:
    """
    Database health check.

    Raises:
        HTTPException(503): Database unreachable
    """
    try:
        await store.ping()
    except Exception as e:
        log_exception_with_context(
            logger, f"{__name__}:health_check_db - Database check failed", e
        )
        raise HTTPException(status_code=503, detail=f"Database unavailable: {type(e).__name__}")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    store: ChunkStore = Depends(get_chunk_store),
    embedder: Embedder = Depends(get_embedder),
) -> HealthResponse:
    """
    Vector store health check.

    Reports unhealthy when the stored vectors come from a different
    embedder than the configured one.

    Raises:
        HTTPException(503): Store unreachable or corpus/embedder mismatch
    """
    try:
        stored_profiles = await store.embedding_profiles()
    except Exception as e:
        log_exception_with_context(
            logger, f"{__name__}:health_check_vector_store - Store check failed", e
        )
        raise HTTPException(status_code=503, detail=f"Vector store unavailable: {type(e).__name__}")

    try:
        embedder.check_corpus(stored_profiles)
    except EmbeddingConfigurationError as e:
        raise HTTPException(status_code=503, detail=e.message)

    mode = "fallback" if embedder.is_fallback else "model"
    return HealthResponse(
        status="healthy",
        message=f"Vector store accessible ({embedder.model_id}, {mode} embeddings)",
    )
