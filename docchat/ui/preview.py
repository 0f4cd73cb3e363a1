"""Document preview pane.

Drive PDFs are loaded through the backend proxy and shown in the browser's
PDF viewer at the first highlighted page. The cited line range is drawn as
a translucent box over the viewer and listed as a text excerpt below it.
Non-PDF Drive files fall back to Drive's own embed, and other links only
get an "open" button.
"""

import logging
from collections.abc import Callable

from nicegui import ui

from docchat.documents.drive import download_url, embed_url, is_drive_link
from docchat.models.schemas import DocumentReference, PreviewResponse
from docchat.ui.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def _is_pdf(ref: DocumentReference) -> bool:
    return ref.file_name.lower().endswith(".pdf")


def _range_badge(ref: DocumentReference) -> None:
    ui.label(f"Highlighted content: Lines {ref.from_line}-{ref.to_line}").classes(
        "absolute top-2 right-2 bg-yellow-200 border border-yellow-400 rounded "
        "px-2 py-1 text-xs text-yellow-800 shadow-sm"
    )


def _render_pdf(api: ApiClient, ref: DocumentReference, preview: PreviewResponse) -> None:
    region = preview.highlights[0] if preview.highlights else None
    page = region.page if region else 1

    with ui.element("div").classes("relative w-full h-[60vh] border rounded-lg overflow-hidden"):
        ui.element("iframe").props(f'src="{api.pdf_url(ref.file_id, page)}"').classes(
            "w-full h-full border-0"
        )
        if region:
            ui.element("div").classes("highlight-box").style(
                f"top: {region.top * 100:.2f}%; height: {max(region.height * 100, 1.5):.2f}%"
            )
            _range_badge(ref)

    if preview.highlights:
        pages = ", ".join(str(r.page) for r in preview.highlights)
        ui.label(f"Page {pages} of {preview.pages}").classes("text-xs text-gray-500")

    if preview.excerpt:
        with ui.scroll_area().classes("w-full h-48 border rounded-lg"):
            for line in preview.excerpt:
                css = "line-highlighted" if line.highlighted else ""
                with ui.row().classes(f"w-full px-3 py-1 gap-3 no-wrap {css}"):
                    ui.label(str(line.number)).classes("text-xs text-gray-400 w-8 shrink-0")
                    ui.label(line.text).classes("text-sm text-gray-800")


def _render_embed(ref: DocumentReference) -> None:
    with ui.element("div").classes("relative w-full h-[60vh] border rounded-lg overflow-hidden"):
        ui.element("iframe").props(f'src="{embed_url(ref.file_link)}" allow="autoplay"').classes(
            "w-full h-full border-0"
        )
        if ref.has_range:
            _range_badge(ref)


async def render_preview(
    api: ApiClient,
    ref: DocumentReference,
    on_close: Callable[[], None],
) -> None:
    """Render the preview pane for a document reference into the current container."""
    with ui.row().classes("w-full items-center justify-between"):
        ui.label("Document Preview").classes("text-lg font-semibold text-gray-900")
        ui.button(icon="close", on_click=on_close).props("flat round dense")

    with ui.element("div").classes("w-full bg-gray-100 rounded-lg p-3"):
        with ui.row().classes("items-center gap-2"):
            ui.icon("description").classes("text-red-500")
            ui.label(ref.file_name or ref.file_id).classes("text-sm font-medium")
        if ref.has_range:
            ui.label("Highlighted content shown below").classes("text-xs text-gray-600")

    if ref.file_link and is_drive_link(ref.file_link) and _is_pdf(ref):
        spinner = ui.spinner(size="lg").classes("self-center")
        try:
            preview = await api.preview(ref.file_id, ref.from_line, ref.to_line)
        except ApiError as e:
            logger.info(f"Proxy preview unavailable for {ref.file_id}: {e}")
            preview = None
        spinner.delete()
        if preview is not None:
            _render_pdf(api, ref, preview)
        else:
            _render_embed(ref)
    elif ref.file_link and is_drive_link(ref.file_link):
        _render_embed(ref)
    elif ref.file_link and _is_pdf(ref):
        ui.element("iframe").props(f'src="{ref.file_link}#view=FitH"').classes(
            "w-full h-[60vh] border rounded-lg"
        )
    else:
        ui.label("Preview is not available for this document.").classes(
            "text-sm text-gray-500"
        )

    if ref.file_link:
        with ui.column().classes("w-full gap-2"):
            ui.button(
                "Open Full Document",
                icon="open_in_new",
                on_click=lambda: ui.navigate.to(ref.file_link, new_tab=True),
            ).props("unelevated no-caps").classes("send-btn text-white w-full")
            ui.button(
                "Download Document",
                icon="download",
                on_click=lambda: ui.navigate.to(download_url(ref.file_link), new_tab=True),
            ).props("outline no-caps").classes("w-full")
