"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from faq_rag.boundary.db.CRUD import document_crud, chunk_crud

    async with session_factory() as session:
        document = await document_crud.get_by_id(session, document_id)
"""

from faq_rag.boundary.db.CRUD.base_crud import BaseCRUD
from faq_rag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from faq_rag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChunkCRUD",
    "chunk_crud",
]
