"""
Document lifecycle enums shared by the pipeline, persistence and API layers.

Dependencies: None
System role: Vocabulary for document state and provenance
"""

import enum


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Document registered, awaiting indexing
    PROCESSING: An indexing run owns the document
    INDEXED: All chunks persisted, visible to search
    FAILED: Indexing aborted; error_message holds the reason
    """

    PENDING = "pending"
    PROCESSING = "processing"
    INDEXED = "indexed"
    FAILED = "failed"


class SourceType(str, enum.Enum):
    """Where the raw text of a document came from."""

    PLAIN_TEXT = "plain_text"
    BINARY_EXTRACT = "binary_extract"
    WEB_PAGE = "web_page"


class EmbeddingQuality(str, enum.Enum):
    """Whether an indexed document relied heavily on fallback vectors."""

    FULL = "full"
    DEGRADED = "degraded"
