"""
Pipeline result model for document processing.

Represents the outcome of processing a document through the pipeline.

Dependencies: pydantic
System role: Return type for DocumentPipeline.index() and reindex()
"""

from pydantic import BaseModel, Field

from .document import DocumentStatus, EmbeddingQuality


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    status: DocumentStatus = Field(description="Final document status")
    chunk_count: int = Field(default=0, description="Number of chunks persisted")
    fallback_count: int = Field(default=0, description="Chunks embedded by the fallback path")
    embedding_quality: EmbeddingQuality | None = Field(default=None)
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
    error_message: str | None = Field(default=None, description="Failure reason, if any")

    @property
    def succeeded(self) -> bool:
        return self.status is DocumentStatus.INDEXED
