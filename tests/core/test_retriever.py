"""
Test suite for cosine ranking.

System role: Verification of retrieval business logic
"""

import pytest

from faq_rag.boundary.vdb.vector_schemas import StoredVector
from faq_rag.core.exceptions import DimensionMismatchError
from faq_rag.core.retriever import cosine_scores, rank_by_cosine


def _candidate(chunk_id: str, embedding: list[float], chunk_index: int = 0) -> StoredVector:
    return StoredVector(
        chunk_id=chunk_id,
        document_id="doc-1",
        chunk_index=chunk_index,
        content=f"content {chunk_id}",
        embedding=embedding,
    )


class TestCosineScores:
    """Test suite for cosine_scores()."""

    def test_cosine_scores_should_match_known_angles(self) -> None:
        """Test identical, orthogonal and opposite vectors."""
        # Act
        scores = cosine_scores([1.0, 0.0], [[2.0, 0.0], [0.0, 3.0], [-1.0, 0.0]])

        # Assert
        assert scores == pytest.approx([1.0, 0.0, -1.0])

    def test_cosine_scores_should_score_zero_vectors_as_zero(self) -> None:
        """Test zero-norm candidates and queries score 0.0."""
        assert cosine_scores([1.0, 1.0], [[0.0, 0.0]]) == [0.0]
        assert cosine_scores([0.0, 0.0], [[1.0, 1.0]]) == [0.0]

    def test_cosine_scores_should_raise_on_dimension_mismatch(self) -> None:
        """Test differing lengths raise DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError):
            cosine_scores([1.0, 0.0, 0.0], [[1.0, 0.0]])

    def test_cosine_scores_should_return_empty_for_no_vectors(self) -> None:
        """Test empty candidate list gives no scores."""
        assert cosine_scores([1.0], []) == []


class TestRankByCosine:
    """Test suite for rank_by_cosine()."""

    def test_rank_should_order_by_descending_score(self) -> None:
        """Test results come back best first and limited to k."""
        # Arrange
        candidates = [
            _candidate("far", [0.0, 1.0]),
            _candidate("exact", [1.0, 0.0]),
            _candidate("close", [1.0, 0.5]),
        ]

        # Act
        results = rank_by_cosine([1.0, 0.0], candidates, k=2)

        # Assert
        assert [r.chunk_id for r in results] == ["exact", "close"]
        assert results[0].similarity_score == pytest.approx(1.0)
        assert results[0].similarity_score >= results[1].similarity_score

    def test_rank_should_apply_inclusive_threshold(self) -> None:
        """Test candidates at the threshold are kept, below it dropped."""
        # Arrange
        candidates = [_candidate("exact", [1.0, 0.0]), _candidate("orthogonal", [0.0, 1.0])]

        # Act
        results = rank_by_cosine([1.0, 0.0], candidates, k=5, threshold=0.0)
        strict = rank_by_cosine([1.0, 0.0], candidates, k=5, threshold=0.5)

        # Assert
        assert [r.chunk_id for r in results] == ["exact", "orthogonal"]
        assert [r.chunk_id for r in strict] == ["exact"]

    def test_rank_should_break_ties_by_chunk_index_then_input_order(self) -> None:
        """Test equal scores keep lower chunk index first, then candidate order."""
        # Arrange
        candidates = [
            _candidate("b", [1.0, 0.0], chunk_index=2),
            _candidate("a", [1.0, 0.0], chunk_index=1),
            _candidate("c", [1.0, 0.0], chunk_index=2),
        ]

        # Act
        results = rank_by_cosine([1.0, 0.0], candidates, k=3)

        # Assert
        assert [r.chunk_id for r in results] == ["a", "b", "c"]

    def test_rank_should_return_empty_when_nothing_qualifies(self) -> None:
        """Test empty corpus and all-below-threshold both give []."""
        assert rank_by_cosine([1.0, 0.0], [], k=3) == []
        assert rank_by_cosine([1.0, 0.0], [_candidate("x", [-1.0, 0.0])], k=3, threshold=0.1) == []

    def test_rank_should_reject_non_positive_k(self) -> None:
        """Test k must be positive."""
        with pytest.raises(ValueError):
            rank_by_cosine([1.0], [_candidate("x", [1.0])], k=0)
