"""Google Drive link helpers and PDF download.

Documents referenced by answers live in Google Drive. Browsers cannot load
Drive downloads directly (CORS and interstitial pages), so the backend
fetches the bytes itself and serves them from its own origin.
"""

import logging
import re

import httpx

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_PATH_ID = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_QUERY_ID = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")


class PDFNotFoundError(Exception):
    """Raised when no download URL produced a PDF."""

    pass


def extract_file_id(link: str) -> str | None:
    """Return the Drive file id from a share, preview or download link."""
    match = _PATH_ID.search(link) or _QUERY_ID.search(link)
    return match.group(1) if match else None


def is_drive_link(link: str) -> bool:
    return "drive.google.com" in link or "docs.google.com" in link


def embed_url(link: str) -> str:
    """Convert a Drive view link to its embeddable preview URL."""
    if "drive.google.com/file/d/" in link:
        file_id = extract_file_id(link)
        if file_id:
            return f"https://drive.google.com/file/d/{file_id}/preview"
    return link


def download_url(link: str) -> str:
    """Convert a Drive view link to a PDF export link."""
    return link.replace("/view", "/export?format=pdf")


def candidate_urls(file_id: str) -> list[str]:
    """Drive download URLs to try, in order of preference."""
    return [
        f"https://drive.google.com/uc?export=download&id={file_id}",
        f"https://drive.usercontent.google.com/download?id={file_id}&export=download",
        f"https://docs.google.com/document/d/{file_id}/export?format=pdf",
    ]


class DriveFetcher:
    """Downloads PDFs from Google Drive.

    Args:
        timeout: Per-URL timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch_pdf(self, file_id: str) -> bytes:
        """Download a file and make sure it is a PDF.

        Tries each candidate URL until one returns a body starting with the
        PDF header. Drive answers HTML (virus scan or login pages) for files
        it will not serve, so a 200 alone is not enough.

        Raises:
            PDFNotFoundError: If no URL produced a PDF.
        """
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            for url in candidate_urls(file_id):
                try:
                    response = await client.get(url)
                except httpx.HTTPError as e:
                    logger.info(f"Failed to fetch from {url}: {e!r}")
                    continue
                if response.is_success and response.content.startswith(PDF_MAGIC_BYTES):
                    logger.debug(f"Fetched PDF {file_id} from {url}")
                    return response.content

        raise PDFNotFoundError(
            "PDF not found or not publicly accessible. The document may require "
            "Google account access or may not be a PDF file."
        )


_fetcher: DriveFetcher | None = None


def get_drive_fetcher() -> DriveFetcher:
    global _fetcher
    if _fetcher is None:
        _fetcher = DriveFetcher()
    return _fetcher
