"""PDF parsing module using pypdf.

Extracts per-page text lines and metadata from proxied PDFs so the preview
pane can locate the lines an answer refers to.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from docchat.documents.drive import PDF_MAGIC_BYTES

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        page_lines: Non-blank text lines of each page, in page order.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    page_lines: list[list[str]]
    pages: int = Field(ge=0)
    metadata: dict[str, str | None]

    @property
    def line_count(self) -> int:
        return sum(len(lines) for lines in self.page_lines)


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (25MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
    except PdfReadError as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def _split_lines(page_text: str) -> list[str]:
    return [line.strip() for line in page_text.splitlines() if line.strip()]


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text lines page by page.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with per-page lines, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_lines: list[list[str]] = []
    for i, page in enumerate(reader.pages):
        try:
            page_lines.append(_split_lines(page.extract_text() or ""))
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            page_lines.append([])

    if not any(page_lines):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        page_lines=page_lines,
        pages=pages,
        metadata=_extract_metadata(reader),
    )
