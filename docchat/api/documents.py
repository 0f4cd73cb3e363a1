"""Document list, PDF proxy and preview endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, HTTPException, Query, Response, status
from fastapi.concurrency import run_in_threadpool

from docchat.api.deps import FetcherDep, WebhookDep
from docchat.documents.drive import PDFNotFoundError
from docchat.models.schemas import Document, PreviewResponse
from docchat.parsing.highlight import excerpt, locate_line_range
from docchat.parsing.pdf_parser import PDFParseError, parse_pdf
from docchat.webhook.fallback import FALLBACK_DOCUMENTS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"])

PDF_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
    "Cache-Control": "public, max-age=86400",
}


@router.post("/documents", response_model=list[Document])
async def list_documents(
    webhook: WebhookDep,
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> list[Document]:
    """Documents known to the workflow, or a sample list when it is offline."""
    documents = await webhook.list_documents(payload)
    if documents is None:
        logger.warning("Document service unavailable, serving sample list")
        return FALLBACK_DOCUMENTS
    return documents


async def _fetch(fetcher: FetcherDep, file_id: str) -> bytes:
    try:
        return await fetcher.fetch_pdf(file_id)
    except PDFNotFoundError as e:
        logger.info(f"PDF {file_id} not available: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/proxy/pdf/{file_id}")
async def proxy_pdf(file_id: str, fetcher: FetcherDep) -> Response:
    """Serve a Drive PDF from this origin so the browser can render it.

    Raises:
        404: No download URL produced a PDF.
    """
    content = await _fetch(fetcher, file_id)
    return Response(content=content, media_type="application/pdf", headers=PDF_HEADERS)


@router.get("/preview/{file_id}", response_model=PreviewResponse)
async def preview(
    file_id: str,
    fetcher: FetcherDep,
    from_line: Annotated[int | None, Query(alias="from")] = None,
    to_line: Annotated[int | None, Query(alias="to")] = None,
    context: Annotated[int, Query(ge=0, le=50)] = 3,
) -> PreviewResponse:
    """Locate a cited line range inside a PDF.

    Raises:
        404: The PDF could not be downloaded.
        422: The download is not a readable PDF.
    """
    content = await _fetch(fetcher, file_id)

    try:
        pdf = await run_in_threadpool(parse_pdf, content)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {file_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(e),
        ) from e

    logger.debug(f"Preview {file_id}: {pdf.pages} pages, {pdf.line_count} text lines")

    return PreviewResponse(
        file_id=file_id,
        pages=pdf.pages,
        highlights=locate_line_range(pdf.page_lines, from_line, to_line),
        excerpt=excerpt(pdf.page_lines, from_line, to_line, context=context),
    )
