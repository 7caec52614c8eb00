"""
Document processing pipeline for ingestion.

Normalizes, splits, classifies, embeds and persists documents.
The orchestrator lives in faq_rag.core.document_processing.entrypoint.

Dependencies: langchain_text_splitters, langchain_core, pydantic, numpy
System role: Document ingestion pipeline
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .models import Chunk, IngestionRequest, PipelineResult

__all__ = [
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "Chunk",
    "IngestionRequest",
    "PipelineResult",
]
