"""
Model-backed embedder over any LangChain Embeddings implementation.

Dependencies: langchain_core
System role: Semantic embeddings for chunks and queries
"""

import logging

from langchain_core.embeddings import Embeddings

from faq_rag.core.exceptions import DimensionMismatchError, EmbeddingError

from .base import Embedder, l2_normalize

logger = logging.getLogger(__name__)


class ModelEmbedder(Embedder):
    """Delegate to a LangChain embeddings client and validate its output."""

    def __init__(
        self,
        embeddings: Embeddings,
        model_id: str,
        dimension: int,
        normalize: bool = True,
    ) -> None:
        """
        Initialize model embedder.

        Args:
            embeddings: LangChain embeddings client (Gemini, Bedrock, ...)
            model_id: Identifier stored with every vector
            dimension: Expected vector length
            normalize: L2-normalize vectors before returning them
        """
        super().__init__(model_id=model_id, dimension=dimension)
        self._embeddings = embeddings
        self.normalize = normalize

    @property
    def is_fallback(self) -> bool:
        return False

    def _embed_one(self, text: str) -> list[float]:
        return self._embed_many([text])[0]

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        if any(not text.strip() for text in texts):
            raise EmbeddingError("Cannot embed empty text")
        vectors = self._embeddings.embed_documents(texts)
        return [self._finish(vector) for vector in vectors]

    def _embed_query(self, text: str) -> list[float]:
        if not text.strip():
            raise EmbeddingError("Cannot embed empty query")
        return self._finish(self._embeddings.embed_query(text))

    def _finish(self, vector: list[float]) -> list[float]:
        if len(vector) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=len(vector))
        vector = [float(value) for value in vector]
        return l2_normalize(vector) if self.normalize else vector
