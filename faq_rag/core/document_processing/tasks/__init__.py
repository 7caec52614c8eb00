"""
Task modules for document processing pipeline.

Exports: NormalizingTask, ChunkingTask, ClassificationTask, EmbeddingTask, VectorStoreTask
"""

from .chunking_task import ChunkingTask
from .classification_task import ClassificationTask
from .embedding_task import EmbeddingTask
from .normalizing_task import NormalizingTask
from .vector_store_task import VectorStoreTask, validate_chunk_sequence

__all__ = [
    "NormalizingTask",
    "ChunkingTask",
    "ClassificationTask",
    "EmbeddingTask",
    "VectorStoreTask",
    "validate_chunk_sequence",
]
