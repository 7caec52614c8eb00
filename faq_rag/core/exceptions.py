"""
Exception hierarchy for the FAQ RAG core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class FaqRagException(Exception):
    """Base exception for all FAQ RAG application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentNotFoundError(FaqRagException):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}", details)


class DocumentBusyError(FaqRagException):
    """Raised when a document already has an indexing run in flight."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(f"Document is already being processed: {document_id}", details)


class InvalidStatusTransition(FaqRagException):
    """Raised when code attempts a document status change the lifecycle forbids."""

    def __init__(self, current: str, target: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details.update({"current": current, "target": target})
        super().__init__(f"Invalid status transition: {current} -> {target}", details)


class DocumentProcessingError(FaqRagException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class TextDecodingError(DocumentProcessingError):
    """Raised when raw input cannot be decoded as text."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        encoding: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize decoding error.

        Args:
            message: Error message
            document_id: ID of the document
            encoding: Encoding that was attempted
            details: Additional context
        """
        details = details or {}
        if encoding:
            details["encoding"] = encoding
        super().__init__(message, document_id, details)


class EmptyDocumentError(DocumentProcessingError):
    """Raised when a document has no content left after normalization."""

    pass


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""

    pass


class DimensionMismatchError(FaqRagException):
    """Raised when two vectors that must be compared have different lengths."""

    def __init__(
        self,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update({"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            details,
        )


class EmbeddingConfigurationError(FaqRagException):
    """Raised when the corpus was embedded by a different embedder than the configured one."""

    pass


class VectorStoreError(FaqRagException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (insert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class SearchUnavailableError(FaqRagException):
    """Raised when similarity search cannot produce an answer."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize search error.

        Args:
            message: Error message
            query: Query text for the failed search
            details: Additional context
        """
        details = details or {}
        if query:
            details["query"] = query[:200]
        super().__init__(message, details)
