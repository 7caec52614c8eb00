"""
Models for document processing pipeline.

Exports: Chunk, ChunkMetadata, ChunkType, TextSpan, EmbeddingResult,
BatchEmbeddingResult, EmbeddingSource, DocumentStatus, SourceType,
EmbeddingQuality, IngestionRequest, PipelineResult
"""

from .chunk import Chunk, ChunkMetadata, ChunkType, TextSpan
from .document import DocumentStatus, EmbeddingQuality, SourceType
from .embedding_result import BatchEmbeddingResult, EmbeddingResult, EmbeddingSource
from .ingestion_request import IngestionRequest
from .pipeline_result import PipelineResult

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkType",
    "TextSpan",
    "DocumentStatus",
    "EmbeddingQuality",
    "SourceType",
    "BatchEmbeddingResult",
    "EmbeddingResult",
    "EmbeddingSource",
    "IngestionRequest",
    "PipelineResult",
]
