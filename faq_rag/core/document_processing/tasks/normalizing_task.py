"""
Text normalization task.

Brings raw extracted text into a canonical form before splitting:
UTF-8 decoding, Unicode NFC, control character removal, line ending and
whitespace cleanup. Normalizing already normalized text is a no-op.

Dependencies: None (standard library only)
System role: First stage of document ingestion pipeline
"""

import logging
import re
import unicodedata

from faq_rag.core.exceptions import TextDecodingError

logger = logging.getLogger(__name__)

_BOM = "\ufeff"
# C0 controls and DEL, keeping \t (0x09) and \n (0x0A)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class NormalizingTask:
    """Normalize raw document text."""

    def normalize(self, raw: str | bytes, document_id: str | None = None) -> str:
        """
        Produce the canonical text form used by every later stage.

        Args:
            raw: Extracted document text, as str or UTF-8 bytes
            document_id: Optional ID used for error context

        Returns:
            str: Normalized text (may be empty)

        Raises:
            TextDecodingError: When bytes are not valid UTF-8
        """
        text = self._decode(raw, document_id)
        if text.startswith(_BOM):
            text = text[1:]

        text = unicodedata.normalize("NFC", text)
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = _CONTROL_CHARS.sub("", text)
        text = _HORIZONTAL_WS.sub(" ", text)
        text = _SPACE_AROUND_NEWLINE.sub("\n", text)
        text = _EXCESS_NEWLINES.sub("\n\n", text)
        return text.strip()

    @staticmethod
    def _decode(raw: str | bytes, document_id: str | None) -> str:
        if isinstance(raw, str):
            return raw
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(
                f"{__name__}:_decode - Input is not valid UTF-8",
                extra={"document_id": document_id, "position": e.start},
            )
            raise TextDecodingError(
                f"Document text is not valid UTF-8 (byte {e.start})",
                document_id=document_id,
                encoding="utf-8",
            ) from e
