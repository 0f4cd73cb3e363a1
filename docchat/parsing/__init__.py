"""PDF parsing utilities for the document preview.

Responsibilities:
    - PDF text extraction with pypdf, kept page by page
    - Metadata extraction (title, author, subject)
    - Mapping cited line ranges to approximate page highlights
"""

from docchat.parsing.highlight import excerpt, locate_line_range, number_lines
from docchat.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = [
    "PDFContent",
    "PDFParseError",
    "excerpt",
    "locate_line_range",
    "number_lines",
    "parse_pdf",
]
