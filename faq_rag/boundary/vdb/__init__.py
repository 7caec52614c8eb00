"""
Vector database boundary layer.

Provides the ChunkStore contract and its SQL implementation.
- SQLChunkStore: SQLAlchemy store ranking vectors in process

Dependencies: sqlalchemy, numpy
System role: Vector store adapter for RAG retrieval
"""

from faq_rag.boundary.vdb.vector_schemas import StoredVector, VectorSearchResult
from faq_rag.boundary.vdb.vector_store_client import ChunkStore


def get_sql_chunk_store():
    """Lazy import for SQLChunkStore to avoid circular imports."""
    from faq_rag.boundary.vdb.sql_chunk_store import SQLChunkStore
    return SQLChunkStore


__all__ = [
    "ChunkStore",
    "StoredVector",
    "VectorSearchResult",
    "get_sql_chunk_store",
]
