"""
Embedding strategies for the document pipeline and the query path.

Exports: Embedder, HashEmbedder, ModelEmbedder, build_embedder, l2_normalize
"""

from .base import Embedder, l2_normalize
from .factory import build_embedder
from .hash_embedder import HashEmbedder
from .model_embedder import ModelEmbedder

__all__ = [
    "Embedder",
    "HashEmbedder",
    "ModelEmbedder",
    "build_embedder",
    "l2_normalize",
]
