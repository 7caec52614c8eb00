"""
Embedder interface shared by model-backed and deterministic strategies.

Batch embedding isolates failures: a failing sub-batch is retried item by
item, and an item that still fails gets a zero vector flagged FALLBACK
instead of aborting the batch.

Dependencies: numpy
System role: Contract for the embedding stage and the query path
"""

import logging
import time
from abc import ABC, abstractmethod

import numpy as np

from faq_rag.core.exceptions import DimensionMismatchError, EmbeddingConfigurationError

from ..models import BatchEmbeddingResult, EmbeddingResult, EmbeddingSource

logger = logging.getLogger(__name__)


def l2_normalize(vector: list[float]) -> list[float]:
    """
    Scale a vector to unit length.

    Zero vectors are returned unchanged.
    """
    array = np.asarray(vector, dtype=np.float64)
    norm = float(np.linalg.norm(array))
    if norm == 0.0:
        return array.tolist()
    return (array / norm).tolist()


class Embedder(ABC):
    """Fixed-dimension text embedder."""

    def __init__(self, model_id: str, dimension: int) -> None:
        if dimension <= 0:
            raise ValueError(f"dimension must be positive, got {dimension}")
        self.model_id = model_id
        self.dimension = dimension

    @property
    @abstractmethod
    def is_fallback(self) -> bool:
        """Whether every vector from this embedder is fallback-derived."""

    @property
    def source(self) -> EmbeddingSource:
        return EmbeddingSource.FALLBACK if self.is_fallback else EmbeddingSource.MODEL

    def check_corpus(self, stored_profiles: set[tuple[str, int]]) -> None:
        """
        Refuse a corpus whose vectors came from another model or dimension.

        Args:
            stored_profiles: (embedding_model, embedding_dimension) pairs in the store

        Raises:
            EmbeddingConfigurationError: When any stored pair differs from this embedder's
        """
        foreign = sorted(stored_profiles - {(self.model_id, self.dimension)})
        if not foreign:
            return
        described = ", ".join(f"{model} ({dimension}d)" for model, dimension in foreign)
        raise EmbeddingConfigurationError(
            f"Corpus was embedded with {described}, "
            f"but the configured embedder is {self.model_id} ({self.dimension}d)",
            details={
                "stored_profiles": [list(profile) for profile in foreign],
                "model_id": self.model_id,
                "dimension": self.dimension,
            },
        )

    @abstractmethod
    def _embed_one(self, text: str) -> list[float]:
        """Embed a single document text or raise."""

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts in one request; defaults to a loop."""
        return [self._embed_one(text) for text in texts]

    def _embed_query(self, text: str) -> list[float]:
        return self._embed_one(text)

    def embed(self, text: str) -> EmbeddingResult:
        """
        Embed one document text.

        Args:
            text: Chunk content

        Returns:
            EmbeddingResult: Vector tagged with this embedder's source

        Raises:
            EmbeddingError: When the text cannot be embedded
            DimensionMismatchError: When the backend returns a wrong-sized vector
        """
        start = time.perf_counter()
        vector = self._embed_one(text)
        return self._result(vector, start)

    def embed_query(self, text: str) -> EmbeddingResult:
        """Embed search query text (some models use a separate query task)."""
        start = time.perf_counter()
        vector = self._embed_query(text)
        return self._result(vector, start)

    def embed_batch(self, texts: list[str], batch_size: int = 32) -> BatchEmbeddingResult:
        """
        Embed texts in order, isolating per-item failures.

        Args:
            texts: Chunk contents in document order
            batch_size: Texts per backend request

        Returns:
            BatchEmbeddingResult: One result per input text, same order
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        batch_start = time.perf_counter()
        results: list[EmbeddingResult] = []

        for offset in range(0, len(texts), batch_size):
            sub_batch = texts[offset : offset + batch_size]
            sub_start = time.perf_counter()
            try:
                vectors = self._embed_many(sub_batch)
                if len(vectors) != len(sub_batch):
                    raise ValueError(
                        f"Backend returned {len(vectors)} vectors for {len(sub_batch)} texts"
                    )
            except DimensionMismatchError:
                raise
            except Exception as e:
                logger.warning(
                    f"{__name__}:embed_batch - Sub-batch failed, retrying per item",
                    extra={"offset": offset, "size": len(sub_batch), "error": str(e)},
                )
                results.extend(self._embed_items(sub_batch, offset))
                continue

            per_item_ms = (time.perf_counter() - sub_start) * 1000 / len(sub_batch)
            results.extend(
                EmbeddingResult(
                    vector=vector,
                    source=self.source,
                    model_id=self.model_id,
                    processing_time_ms=per_item_ms,
                )
                for vector in vectors
            )

        batch = BatchEmbeddingResult(
            results=results,
            total_time_ms=(time.perf_counter() - batch_start) * 1000,
        )
        logger.info(
            f"{__name__}:embed_batch - Embedded {len(texts)} texts",
            extra={
                "model_id": self.model_id,
                "fallback_count": batch.fallback_count,
                "total_time_ms": round(batch.total_time_ms, 2),
            },
        )
        return batch

    def _embed_items(self, texts: list[str], offset: int) -> list[EmbeddingResult]:
        results = []
        for position, text in enumerate(texts, start=offset):
            start = time.perf_counter()
            try:
                results.append(self._result(self._embed_one(text), start))
            except DimensionMismatchError:
                raise
            except Exception as e:
                logger.warning(
                    f"{__name__}:_embed_items - Item failed, using zero vector",
                    extra={"position": position, "error": str(e)},
                )
                results.append(
                    EmbeddingResult(
                        vector=[0.0] * self.dimension,
                        source=EmbeddingSource.FALLBACK,
                        model_id=self.model_id,
                        processing_time_ms=(time.perf_counter() - start) * 1000,
                        error=str(e),
                    )
                )
        return results

    def _result(self, vector: list[float], start: float) -> EmbeddingResult:
        return EmbeddingResult(
            vector=vector,
            source=self.source,
            model_id=self.model_id,
            processing_time_ms=(time.perf_counter() - start) * 1000,
        )
