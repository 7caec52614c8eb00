"""
Chunk classification task.

Assigns a structural ChunkType to each chunk with ordered heuristics;
the first matching rule wins.

Dependencies: None (standard library only)
System role: Third stage of document ingestion pipeline
"""

import re

from ..models import ChunkType, TextSpan

IMAGE_MARKERS: tuple[str, ...] = ("[이미지 텍스트]", "[IMAGE TEXT]")

_NUMBERED_HEADING = re.compile(r"^\d+\.(\d+\.?)*\s")
_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s|##")
_CHAPTER_HEADING = re.compile(r"^(chapter\s+\d+|제\s*\d+\s*장)", re.IGNORECASE)
_LETTERS_AND_SPACES = re.compile(r"^[^\W\d_]+( [^\W\d_]+)*$")

TITLE_MAX_LENGTH = 100
SHORT_TITLE_MAX_LENGTH = 50


class ClassificationTask:
    """Classify chunk content as text, table, title or image."""

    def classify(self, content: str) -> ChunkType:
        if self._is_table(content):
            return ChunkType.TABLE
        if any(marker in content for marker in IMAGE_MARKERS):
            return ChunkType.IMAGE
        if self._is_title(content):
            return ChunkType.TITLE
        return ChunkType.TEXT

    def classify_spans(self, spans: list[TextSpan]) -> list[ChunkType]:
        # Row groups of a split table stay tables even when only one row is left
        return [
            ChunkType.TABLE if span.from_table else self.classify(span.content)
            for span in spans
        ]

    @staticmethod
    def _is_table(content: str) -> bool:
        return "|" in content and len(content.split("\n")) > 2

    @staticmethod
    def _is_title(content: str) -> bool:
        stripped = content.strip()
        if not stripped or len(stripped) >= TITLE_MAX_LENGTH:
            return False
        if (
            _NUMBERED_HEADING.match(stripped)
            or _MARKDOWN_HEADING.search(stripped)
            or _CHAPTER_HEADING.match(stripped)
        ):
            return True
        return (
            "\n" not in stripped
            and len(stripped) < SHORT_TITLE_MAX_LENGTH
            and _LETTERS_AND_SPACES.match(stripped) is not None
        )
