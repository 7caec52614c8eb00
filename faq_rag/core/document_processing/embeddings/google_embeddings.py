"""
Gemini embeddings client pinned to the corpus dimension.

GoogleGenerativeAIEmbeddings only honours output_dimensionality when it is
passed per call, so this subclass injects the configured dimension into
every document and query request.

Dependencies: langchain_google_genai
System role: Google provider for ModelEmbedder
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always requests one output dimension."""

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings client.

        Args:
            model: Gemini embedding model ID
            output_dimensionality: Vector length requested on every call
            **kwargs: Forwarded to GoogleGenerativeAIEmbeddings (e.g. google_api_key)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Gemini embeddings ready",
            extra={"model": model, "output_dimensionality": output_dimensionality},
        )

    def embed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        kwargs.setdefault("task_type", "RETRIEVAL_DOCUMENT")
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> list[float]:
        kwargs.setdefault("task_type", "RETRIEVAL_QUERY")
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)
