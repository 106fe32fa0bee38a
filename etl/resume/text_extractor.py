"""
Resume Text Extractor - turn uploaded file bytes into plain text.

Supports:
- PDF (.pdf): text of every page via pypdf
- Word Documents (.docx, .doc): paragraphs and table rows via python-docx
- Anything else: decoded directly as UTF-8 text

Decoding is deterministic, so failures are never retried.
"""
import io
import logging
from pathlib import PurePath
from typing import Callable, Dict

from docx import Document
from pypdf import PdfReader

from core.errors import DecodeError, UnsupportedFormatError

logger = logging.getLogger(__name__)

CONTENT_TYPES: Dict[str, str] = {
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.txt': 'text/plain',
}

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def file_extension(filename: str) -> str:
    return PurePath(filename or '').suffix.lower()


def content_type_for(filename: str) -> str:
    """Map a filename to the MIME type stored alongside the blob."""
    return CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)


class TextExtractor:
    """Extract plain text from resume file bytes.

    Dispatches on the filename extension. Any decoder exception is raised
    as UnsupportedFormatError; an empty buffer, or one that yields no text,
    is a DecodeError.
    """

    SUPPORTED_EXTENSIONS = frozenset(CONTENT_TYPES)

    def __init__(self):
        self._decoders: Dict[str, Callable[[bytes], str]] = {
            '.pdf': self._extract_pdf,
            '.docx': self._extract_docx,
            '.doc': self._extract_docx,
        }

    def extract(self, content: bytes, filename: str) -> str:
        """Extract text from a file buffer.

        Args:
            content: Raw file bytes
            filename: Original filename, used only for its extension

        Returns:
            Decoded text, never blank

        Raises:
            DecodeError: If the buffer is empty or no text could be extracted
            UnsupportedFormatError: If the underlying decoder fails
        """
        if not content:
            raise DecodeError("Empty file")

        ext = file_extension(filename)
        decoder = self._decoders.get(ext, self._extract_plain_text)

        try:
            text = decoder(content)
        except DecodeError:
            raise
        except Exception as e:
            raise UnsupportedFormatError(
                f"Failed to parse resume file {filename!r}: {e}"
            ) from e

        if not text.strip():
            raise DecodeError("No text could be extracted from the file")

        logger.debug(f"Extracted {len(text)} chars from {filename} (format: {ext or 'text'})")
        return text

    def is_supported(self, filename: str) -> bool:
        return file_extension(filename) in self.SUPPORTED_EXTENSIONS

    def _extract_plain_text(self, content: bytes) -> str:
        return content.decode('utf-8-sig', errors='replace')

    def _extract_docx(self, content: bytes) -> str:
        doc = Document(io.BytesIO(content))

        paragraphs = [para.text.strip() for para in doc.paragraphs if para.text.strip()]

        # Tables are common in resume templates
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    paragraphs.append(' | '.join(cells))

        text = '\n'.join(paragraphs)
        if not text:
            logger.warning("Empty or minimal content in DOCX upload")
        return text

    def _extract_pdf(self, content: bytes) -> str:
        reader = PdfReader(io.BytesIO(content))

        if len(reader.pages) == 0:
            raise UnsupportedFormatError("PDF file has no pages")

        pages_text = []
        for i, page in enumerate(reader.pages):
            page_text = page.extract_text()
            if page_text and page_text.strip():
                pages_text.append(page_text.strip())
            else:
                logger.debug(f"No text on PDF page {i + 1}")

        text = '\n'.join(pages_text)
        if not text:
            logger.warning(
                "No text extracted from PDF upload. "
                "The PDF may be scanned images or have text extraction disabled."
            )
        return text
