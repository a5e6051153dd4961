"""Plain-text extraction from uploaded files."""

from pathlib import Path

import PyPDF2

from cto_coach.core.exceptions import ExtractionError, UnsupportedFileTypeError
from cto_coach.core.logging import get_logger
from cto_coach.core.validators import is_supported_mime_type

logger = get_logger(__name__)


class FileContentExtractor:
    """Extracts text from plain text, Markdown and PDF files."""

    async def extract(self, path: str, mime_type: str) -> str:
        """Read the text of a stored upload.

        Args:
            path: Path to the stored file
            mime_type: Declared MIME type

        Returns:
            Extracted text, verbatim for text formats

        Raises:
            UnsupportedFileTypeError: MIME type outside the whitelist
            ExtractionError: File missing, unreadable or not parseable
        """
        if not is_supported_mime_type(mime_type):
            raise UnsupportedFileTypeError(mime_type)

        try:
            if mime_type == "application/pdf":
                return self._extract_pdf(path)
            return self._extract_text(path)
        except Exception as e:
            logger.error("content_extraction_failed", path=path, mime_type=mime_type, error=str(e))
            raise ExtractionError() from e

    def _extract_text(self, path: str) -> str:
        """Plain text and Markdown are read as-is."""
        return self._decode_bytes(Path(path).read_bytes())

    def _extract_pdf(self, path: str) -> str:
        text_parts = []
        with open(path, "rb") as f:
            reader = PyPDF2.PdfReader(f)
            for page in reader.pages:
                text_parts.append(page.extract_text() or "")
        return "\n\n".join(text_parts)

    def _decode_bytes(self, content: bytes) -> str:
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            return content.decode("utf-8", errors="replace")
