"""
Test suite for ClassificationTask.

System role: Verification of chunk type heuristics
"""

import pytest

from faq_rag.core.document_processing.models import ChunkType, TextSpan
from faq_rag.core.document_processing.tasks import ChunkingTask, ClassificationTask


@pytest.fixture
def classifier() -> ClassificationTask:
    """Provide ClassificationTask instance."""
    return ClassificationTask()


class TestClassificationTask:
    """Test suite for ClassificationTask.classify() method."""

    @pytest.mark.parametrize(
        "content",
        [
            "| Region | Days |\n| EU | 3 |\n| US | 5 |",
            "Plan | Price\nBasic | 5\nPro | 10",
        ],
    )
    def test_classify_should_detect_tables(
        self, classifier: ClassificationTask, content: str
    ) -> None:
        """Test pipe-delimited content over more than two lines is a table."""
        assert classifier.classify(content) is ChunkType.TABLE

    def test_classify_should_not_treat_two_line_pipes_as_table(
        self, classifier: ClassificationTask
    ) -> None:
        """Test a pipe in short content is not enough for a table."""
        assert classifier.classify("Choose A | B\nthen continue.") is ChunkType.TEXT

    @pytest.mark.parametrize(
        "content",
        [
            "[IMAGE TEXT] Store opening hours 9-18",
            "[이미지 텍스트] 영업시간 안내",
        ],
    )
    def test_classify_should_detect_image_markers(
        self, classifier: ClassificationTask, content: str
    ) -> None:
        """Test upstream image markers mark the chunk as image text."""
        assert classifier.classify(content) is ChunkType.IMAGE

    def test_classify_should_prefer_table_over_image(self, classifier: ClassificationTask) -> None:
        """Test rule order: table wins over image marker."""
        content = "[IMAGE TEXT]\n| a | b |\n| 1 | 2 |"
        assert classifier.classify(content) is ChunkType.TABLE

    @pytest.mark.parametrize(
        "content",
        [
            "1. Getting started",
            "2.3 Payment methods",
            "# Shipping",
            "### Returns and refunds",
            "Chapter 4 Warranty",
            "제 3 장 환불 정책",
            "Frequently Asked Questions",
            "배송 안내",
        ],
    )
    def test_classify_should_detect_titles(
        self, classifier: ClassificationTask, content: str
    ) -> None:
        """Test heading patterns and short letter-only lines are titles."""
        assert classifier.classify(content) is ChunkType.TITLE

    @pytest.mark.parametrize(
        "content",
        [
            "Orders ship within two business days.",
            "2024 sales grew strongly",
            "Refunds are issued within 14 days",
            "# " + "x" * 120,
        ],
    )
    def test_classify_should_default_to_text(
        self, classifier: ClassificationTask, content: str
    ) -> None:
        """Test prose, long headings and digit-bearing lines are text."""
        assert classifier.classify(content) is ChunkType.TEXT

    def test_classify_spans_should_keep_order(self, classifier: ClassificationTask) -> None:
        """Test classify_spans returns one type per span in order."""
        # Arrange
        spans = [
            TextSpan(content="# Shipping", start_offset=0, end_offset=10),
            TextSpan(content="Orders ship fast.", start_offset=12, end_offset=29),
        ]

        # Act
        types = classifier.classify_spans(spans)

        # Assert
        assert types == [ChunkType.TITLE, ChunkType.TEXT]

    def test_classify_spans_should_label_split_heading_and_body(
        self, classifier: ClassificationTask
    ) -> None:
        """Test a short heading paragraph is a title and the body is text."""
        # Arrange
        spans = ChunkingTask(chunk_size=40, chunk_overlap=0).split(
            "Title\n\nThis is the body text of the document."
        )

        # Act
        types = classifier.classify_spans(spans)

        # Assert
        assert [span.content for span in spans] == [
            "Title",
            "This is the body text of the document.",
        ]
        assert types == [ChunkType.TITLE, ChunkType.TEXT]

    def test_classify_spans_should_keep_table_rows_as_tables(
        self, classifier: ClassificationTask
    ) -> None:
        """Test a lone row left over from a split table is still a table."""
        # Arrange
        spans = [TextSpan(content="| US | 5 |", start_offset=0, end_offset=10, from_table=True)]

        # Act
        types = classifier.classify_spans(spans)

        # Assert
        assert classifier.classify("| US | 5 |") is ChunkType.TEXT
        assert types == [ChunkType.TABLE]
