"""Service orchestrators."""

from .document_service import DocumentService, ReconciliationReport
from .retrieval_service import RetrievalService

__all__ = [
    "DocumentService",
    "ReconciliationReport",
    "RetrievalService",
]
