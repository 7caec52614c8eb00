"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits normalized text into overlapping spans while preferring paragraph,
line and sentence boundaries (Latin and CJK terminators) over word and
character cuts. Runs of pipe-delimited table rows are split separately,
by whole rows and without overlap, so a row is never cut in half.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

import logging

from langchain_text_splitters import RecursiveCharacterTextSplitter

from ..models import TextSpan

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS: list[str] = [
    "\n\n",
    "\n",
    ". ",
    "! ",
    "? ",
    "。",
    "！",
    "？",
    " ",
    "",
]

# Consecutive lines containing "|" needed to treat a block as a table
TABLE_MIN_ROWS = 3

Row = tuple[int, int]


class ChunkingTask:
    """Split text into spans using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: list[str] | None = None,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            separators: Separator priority list (coarsest first)

        Raises:
            ValueError: When chunk_size is not positive or overlap is negative
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            clamped = chunk_size // 5
            logger.warning(
                f"{__name__}:__init__ - chunk_overlap >= chunk_size, clamping",
                extra={
                    "chunk_size": chunk_size,
                    "requested_overlap": chunk_overlap,
                    "chunk_overlap": clamped,
                },
            )
            chunk_overlap = clamped

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=separators or DEFAULT_SEPARATORS,
            keep_separator="end",
            add_start_index=True,
            strip_whitespace=True,
            length_function=len,
        )

    def split(self, text: str) -> list[TextSpan]:
        """
        Split text into ordered spans.

        Args:
            text: Normalized document text

        Returns:
            list[TextSpan]: Spans in document order; empty for blank text
        """
        if not text.strip():
            return []

        spans: list[TextSpan] = []
        for start, end, rows in self._regions(text):
            if rows:
                spans.extend(self._split_table(text, rows))
            else:
                spans.extend(self._split_prose(text[start:end], start))
        return spans

    def _split_prose(self, region: str, base_offset: int) -> list[TextSpan]:
        if not region.strip():
            return []

        spans: list[TextSpan] = []
        for document in self._splitter.create_documents([region]):
            content = document.page_content
            if not content.strip():
                continue
            start = base_offset + max(document.metadata.get("start_index", 0), 0)
            spans.append(
                TextSpan(
                    content=content,
                    start_offset=start,
                    end_offset=start + len(content),
                )
            )
        return spans

    def _split_table(self, text: str, rows: list[Row]) -> list[TextSpan]:
        """Group whole rows into spans of at most chunk_size characters."""
        spans: list[TextSpan] = []
        group_start, group_end = rows[0]
        for row_start, row_end in rows[1:]:
            if row_end - group_start > self.chunk_size:
                spans.append(self._table_span(text, group_start, group_end))
                group_start = row_start
            group_end = row_end
        spans.append(self._table_span(text, group_start, group_end))

        logger.debug(
            f"{__name__}:_split_table - Table split by rows",
            extra={"row_count": len(rows), "span_count": len(spans)},
        )
        return spans

    @staticmethod
    def _table_span(text: str, start: int, end: int) -> TextSpan:
        return TextSpan(
            content=text[start:end],
            start_offset=start,
            end_offset=end,
            from_table=True,
        )

    @staticmethod
    def _regions(text: str) -> list[tuple[int, int, list[Row]]]:
        """
        Cut text into prose regions and table runs.

        Returns:
            list[tuple[int, int, list[Row]]]: (start, end, rows) in order;
                rows is empty for prose and holds (start, end) per table row
        """
        regions: list[tuple[int, int, list[Row]]] = []
        prose_start = 0
        run: list[Row] = []

        def close_run() -> None:
            nonlocal prose_start
            if len(run) >= TABLE_MIN_ROWS:
                table_start, table_end = run[0][0], run[-1][1]
                if table_start > prose_start:
                    regions.append((prose_start, table_start, []))
                regions.append((table_start, table_end, list(run)))
                prose_start = table_end
            run.clear()

        offset = 0
        for line in text.split("\n"):
            line_end = offset + len(line)
            if "|" in line:
                run.append((offset, line_end))
            else:
                close_run()
            offset = line_end + 1
        close_run()

        if prose_start < len(text):
            regions.append((prose_start, len(text), []))
        return regions
