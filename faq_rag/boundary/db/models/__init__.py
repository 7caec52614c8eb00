"""
Database models package.

Exports:
  - DocumentModel: Document ORM model
  - ChunkModel: Chunk ORM model

Dependencies: sqlalchemy, faq_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from faq_rag.boundary.db.models.document_model import DocumentModel
from faq_rag.boundary.db.models.chunk_model import ChunkModel

__all__ = [
    "DocumentModel",
    "ChunkModel",
]
