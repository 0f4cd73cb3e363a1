"""Access to the documents answers refer to (Google Drive)."""

from docchat.documents.drive import (
    DriveFetcher,
    PDFNotFoundError,
    candidate_urls,
    download_url,
    embed_url,
    extract_file_id,
    get_drive_fetcher,
    is_drive_link,
)

__all__ = [
    "DriveFetcher",
    "PDFNotFoundError",
    "candidate_urls",
    "download_url",
    "embed_url",
    "extract_file_id",
    "get_drive_fetcher",
    "is_drive_link",
]
