"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_all_tables()
  - DocumentModel, ChunkModel: Persistent entities
  - document_crud, chunk_crud: CRUD operation singletons

Dependencies: sqlalchemy, faq_rag.configs
System role: Database adapter providing persistent storage for documents
and their embedded chunks.
"""

from faq_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin
from faq_rag.boundary.db.connection import (
    create_all_tables,
    get_async_engine,
    get_async_session_factory,
)
from faq_rag.boundary.db.models import ChunkModel, DocumentModel
from faq_rag.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_all_tables",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "ChunkModel",
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "chunk_crud",
    "document_crud",
]
