"""
Deterministic hash-based fallback embedder.

Produces a usable fixed-dimension vector without any model: the text is
cleaned, cut into fixed-size slices, and each slice is hashed into a value
in [-1, 1]. Vectors carry no semantics beyond shared slices, so every
result is flagged FALLBACK.

Dependencies: hashlib, numpy (via l2_normalize)
System role: Availability guarantee when no embedding model is configured
"""

import hashlib
import re

from faq_rag.core.exceptions import EmbeddingError

from .base import Embedder, l2_normalize

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

HASH_MODEL_ID = "hash-fallback-v1"


class HashEmbedder(Embedder):
    """Hash fixed-size slices of text into a unit vector."""

    def __init__(self, dimension: int = 768) -> None:
        # Vectors of different lengths never share an id
        super().__init__(model_id=f"{HASH_MODEL_ID}-{dimension}", dimension=dimension)

    @property
    def is_fallback(self) -> bool:
        return True

    @staticmethod
    def preprocess(text: str) -> str:
        text = _NON_WORD.sub(" ", text.lower())
        return _WHITESPACE.sub(" ", text).strip()

    def _embed_one(self, text: str) -> list[float]:
        cleaned = self.preprocess(text)
        if not cleaned:
            raise EmbeddingError("Cannot embed empty text")

        length = len(cleaned)
        width = max(1, length // self.dimension)
        doubled = cleaned + cleaned
        values = []
        for i in range(self.dimension):
            start = (i * width) % length
            piece = doubled[start : start + width]
            digest = hashlib.blake2b(f"{i}:{piece}".encode("utf-8"), digest_size=8).digest()
            values.append(int.from_bytes(digest, "big") / 2**63 - 1.0)
        return l2_normalize(values)
