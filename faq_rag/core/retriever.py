"""
Cosine similarity ranking.

Scores candidates against a query vector, drops those under the threshold
and returns the best k in descending score order. Equal scores keep the
lower chunk index first, then candidate order.

Dependencies: numpy, faq_rag.boundary.vdb.vector_schemas
System role: RAG retrieval business logic
"""

from typing import Sequence

import numpy as np

from faq_rag.boundary.vdb.vector_schemas import StoredVector, VectorSearchResult
from faq_rag.core.exceptions import DimensionMismatchError


def cosine_scores(query_vector: Sequence[float], vectors: Sequence[Sequence[float]]) -> list[float]:
    """
    Cosine similarity of the query against each vector.

    Zero-norm vectors (on either side) score 0.0.

    Raises:
        DimensionMismatchError: When any vector length differs from the query's
    """
    query = np.asarray(query_vector, dtype=np.float64)
    for vector in vectors:
        if len(vector) != query.shape[0]:
            raise DimensionMismatchError(expected=query.shape[0], actual=len(vector))
    if not vectors:
        return []

    matrix = np.asarray(vectors, dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)
    return np.clip(scores, -1.0, 1.0).tolist()


def rank_by_cosine(
    query_vector: Sequence[float],
    candidates: Sequence[StoredVector],
    k: int,
    threshold: float | None = None,
) -> list[VectorSearchResult]:
    """
    Return the k most similar candidates.

    Args:
        query_vector: Query embedding
        candidates: Stored vectors in insertion order
        k: Maximum number of results
        threshold: Minimum score to keep (inclusive); None keeps all

    Returns:
        list[VectorSearchResult]: Non-increasing by score

    Raises:
        DimensionMismatchError: When a candidate's dimension differs from the query
        ValueError: When k is not positive
    """
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    scores = cosine_scores(query_vector, [candidate.embedding for candidate in candidates])
    scored = [
        (score, candidate)
        for score, candidate in zip(scores, candidates)
        if threshold is None or score >= threshold
    ]
    # sorted() is stable, so equal (score, chunk_index) keeps candidate order
    scored = sorted(scored, key=lambda item: (-item[0], item[1].chunk_index))

    return [
        VectorSearchResult(
            chunk_id=candidate.chunk_id,
            document_id=candidate.document_id,
            chunk_index=candidate.chunk_index,
            content=candidate.content,
            metadata=candidate.metadata,
            similarity_score=score,
        )
        for score, candidate in scored[:k]
    ]
