"""
Embedder factory.

Builds the single deployment-wide embedder from VectorStoreSettings.
Provider clients are imported lazily so a hash-only deployment does not
need cloud credentials.

Dependencies: langchain_google_genai, langchain_aws
System role: Embedder construction for the service container
"""

import logging

from faq_rag.configs.vector_store import VectorStoreSettings

from .base import Embedder
from .hash_embedder import HashEmbedder
from .model_embedder import ModelEmbedder

logger = logging.getLogger(__name__)


def build_embedder(settings: VectorStoreSettings) -> Embedder:
    """
    Create the embedder configured for this deployment.

    Args:
        settings: Vector store settings (provider, model, dimension)

    Returns:
        Embedder: HashEmbedder or ModelEmbedder

    Raises:
        ValueError: When the provider is unknown
    """
    provider = settings.embedding_provider

    if provider == "hash":
        embedder: Embedder = HashEmbedder(dimension=settings.embedding_dimension)
    elif provider == "google":
        from .google_embeddings import FixedDimensionEmbeddings

        embedder = ModelEmbedder(
            FixedDimensionEmbeddings(
                model=settings.embedding_model,
                output_dimensionality=settings.embedding_dimension,
            ),
            model_id=settings.embedding_model,
            dimension=settings.embedding_dimension,
            normalize=settings.normalize_embeddings,
        )
    elif provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        embedder = ModelEmbedder(
            BedrockEmbeddings(
                model_id=settings.embedding_model,
                region_name=settings.embedding_region,
                model_kwargs={"dimensions": settings.embedding_dimension},
            ),
            model_id=settings.embedding_model,
            dimension=settings.embedding_dimension,
            normalize=settings.normalize_embeddings,
        )
    else:
        raise ValueError(f"Unknown embedding provider: {provider}")

    logger.info(
        f"{__name__}:build_embedder - Embedder configured",
        extra={
            "provider": provider,
            "model_id": embedder.model_id,
            "dimension": embedder.dimension,
        },
    )
    return embedder
