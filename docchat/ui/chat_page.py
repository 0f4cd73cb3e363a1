"""NiceGUI chat interface with history sidebar and document preview."""

import logging
from datetime import datetime

from fastapi.responses import RedirectResponse
from nicegui import app, ui

from docchat.documents.drive import extract_file_id
from docchat.models.schemas import ChatMessage, Document, DocumentReference, MessageType
from docchat.ui.api_client import ApiClient, ApiError
from docchat.ui.helpers import (
    SAMPLE_QUESTIONS,
    WELCOME_MESSAGE,
    display_name,
    filter_items,
    markdown_to_html,
    new_session_id,
    paginate,
    plain_to_html,
    session_label,
)
from docchat.ui.preview import render_preview

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #2563eb 0%, #1e40af 100%); }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: #d1d5db; }
    .avatar-assistant { background: #2563eb; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .sidebar-item { border: 1px solid #e5e7eb; border-radius: 8px; cursor: pointer; }
    .sidebar-item:hover { border-color: #2563eb; background: #eff6ff; }
    .sidebar-item.active { border-color: #2563eb; background: #eff6ff; }

    .highlight-box {
        position: absolute; left: 0; right: 0;
        background: rgba(250, 204, 21, 0.35);
        border-left: 4px solid #facc15;
        pointer-events: none;
    }
    .line-highlighted { background: #fef9c3; border-left: 4px solid #facc15; }

    .send-btn { background: #2563eb !important; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant ul, .message-assistant ol { margin: 0.5rem 0; }
    .message-assistant a { color: #1d4ed8; }
</style>
"""


def welcome_message() -> ChatMessage:
    return ChatMessage(
        type=MessageType.AI,
        content=WELCOME_MESSAGE,
        timestamp=int(datetime.now().timestamp() * 1000),
    )


class ChatState:
    """Per-tab UI state."""

    def __init__(self, login_session: str, username: str) -> None:
        self.login_session = login_session
        self.username = username
        self.session_id = new_session_id()
        self.messages: list[ChatMessage] = [welcome_message()]
        self.is_pending = False
        self.preview: DocumentReference | None = None
        self.sessions: list[str] = []
        self.documents: list[Document] = []
        self.history_query = ""
        self.history_page = 1
        self.documents_query = ""
        self.documents_page = 1

    @property
    def is_welcome(self) -> bool:
        return len(self.messages) == 1 and self.messages[0].content == WELCOME_MESSAGE

    def reset(self, session_id: str | None = None) -> None:
        self.session_id = session_id or new_session_id()
        self.messages = [welcome_message()]


def reference_from_document(document: Document) -> DocumentReference:
    return DocumentReference(
        file_id=extract_file_id(document.link) or document.name,
        file_name=document.name,
        file_link=document.link,
    )


@ui.page("/")
def chat_page() -> RedirectResponse | None:
    """Main chat page."""
    login_session = app.storage.user.get("login_session")
    if not login_session:
        return RedirectResponse("/login")

    ui.add_head_html(CUSTOM_CSS)
    state = ChatState(login_session, app.storage.user.get("username", ""))
    api = ApiClient(login_session=login_session)

    input_field: ui.input
    send_btn: ui.button

    # === Messages ===

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        text = "text-gray-600" if is_user else "text-white"
        with ui.element("div").classes(
            f"w-9 h-9 rounded-full flex items-center justify-center shrink-0 {css}"
        ):
            ui.icon(icon).classes(f"{text} text-lg")

    def render_reference(ref: DocumentReference) -> None:
        with ui.element("div").classes("bg-white border rounded-lg p-3 mt-3"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("description").classes("text-red-500")
                ui.label(ref.file_name or ref.file_id).classes("text-sm font-medium text-gray-900")
            if ref.has_range:
                ui.label(f"Reference: Lines {ref.from_line}-{ref.to_line}").classes(
                    "text-xs text-gray-600"
                )
            ui.button(
                "View Document Preview",
                icon="open_in_new",
                on_click=lambda r=ref: open_preview(r),
            ).props("flat dense no-caps size=sm color=primary")

    def render_search_info(info: str) -> None:
        with ui.expansion("Web search sources", icon="travel_explore").classes(
            "text-xs mt-2 w-full"
        ):
            ui.html(markdown_to_html(info), sanitize=False).classes("text-xs")

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.type == MessageType.HUMAN
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        time_label = datetime.fromtimestamp(msg.timestamp / 1000).strftime("%I:%M %p")

        with ui.row().classes(f"w-full {align} gap-3 items-end no-wrap"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        content = plain_to_html(msg.content)
                    else:
                        content = markdown_to_html(msg.content)
                    ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                    if msg.document_reference:
                        render_reference(msg.document_reference)
                    if msg.search_info:
                        render_search_info(msg.search_info)
                ui.label(time_label).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_typing() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")

    def pick_sample(question: str) -> None:
        input_field.value = question

    @ui.refreshable
    def messages_view() -> None:
        if state.is_welcome and state.preview is None:
            with ui.column().classes("w-full items-center gap-3 py-8"):
                ui.icon("smart_toy").classes("text-5xl text-blue-600")
                ui.label("Welcome to the Document Extraction Chatbot").classes("text-gray-600")
                ui.label("Ask me anything about your documents!").classes(
                    "text-sm text-gray-500"
                )
                ui.label("Try these sample questions:").classes(
                    "text-sm font-medium text-gray-700 mt-4"
                )
                for emoji, question in SAMPLE_QUESTIONS:
                    ui.button(
                        f'{emoji} "{question}"',
                        on_click=lambda q=question: pick_sample(q),
                    ).props("flat no-caps align=left").classes(
                        "w-full max-w-md border rounded-lg text-gray-700"
                    )
        else:
            for msg in state.messages:
                if msg.content == WELCOME_MESSAGE and len(state.messages) > 1:
                    continue
                render_message(msg)
        if state.is_pending:
            render_typing()

    # === Sidebar ===

    async def load_sessions() -> None:
        try:
            state.sessions = await api.sessions()
        except ApiError as e:
            ui.notify(f"Could not load history: {e}", type="negative")
        history_view.refresh()

    async def load_documents() -> None:
        try:
            state.documents = await api.documents()
        except ApiError as e:
            ui.notify(f"Could not load documents: {e}", type="negative")
        documents_view.refresh()
        all_documents_view.refresh()

    async def switch_session(session_id: str) -> None:
        if session_id == state.session_id:
            return
        try:
            history = await api.history(session_id)
        except ApiError as e:
            ui.notify(f"Could not load chat: {e}", type="negative")
            return
        state.reset(session_id)
        if history:
            state.messages = history
        messages_view.refresh()
        history_view.refresh()

    async def delete_session(session_id: str) -> None:
        try:
            await api.delete_session(session_id)
        except ApiError as e:
            ui.notify(f"Could not delete chat: {e}", type="negative")
            return
        if session_id == state.session_id:
            new_chat()
        await load_sessions()

    def set_history_query(value: str) -> None:
        state.history_query = value or ""
        state.history_page = 1
        history_view.refresh()

    def set_documents_query(value: str) -> None:
        state.documents_query = value or ""
        state.documents_page = 1
        documents_view.refresh()

    def pager(page, on_change) -> None:
        if page.total_pages <= 1:
            return
        with ui.row().classes("w-full items-center justify-between pt-2"):
            ui.label(page.summary).classes("text-xs text-gray-500")
            ui.pagination(1, page.total_pages, value=page.page, on_change=on_change).props(
                "dense size=sm max-pages=4"
            )

    @ui.refreshable
    def history_view() -> None:
        sessions = filter_items(list(reversed(state.sessions)), state.history_query)
        if not sessions:
            message = "No sessions match your search" if state.history_query else "No chat history"
            ui.label(message).classes("text-sm text-gray-400 py-6 self-center")
            return
        page = paginate(sessions, state.history_page)
        for session_id in page.items:
            active = "active" if session_id == state.session_id else ""
            with ui.row().classes(f"sidebar-item {active} w-full p-3 items-center no-wrap").on(
                "click", lambda s=session_id: switch_session(s)
            ):
                with ui.column().classes("gap-0 grow min-w-0"):
                    ui.label(f"Chat {session_id[-9:]}").classes("text-sm font-medium truncate")
                    ui.label(session_label(session_id)).classes("text-xs text-gray-500")
                # click.stop keeps the row from also switching to the session
                ui.button(icon="delete").props("flat round dense size=sm color=grey").on(
                    "click.stop", lambda s=session_id: delete_session(s)
                )

        def change(e) -> None:
            state.history_page = e.value
            history_view.refresh()

        pager(page, change)

    def render_document_item(document: Document) -> None:
        with ui.row().classes("sidebar-item w-full p-3 items-center no-wrap").on(
            "click", lambda d=document: open_preview(reference_from_document(d))
        ):
            ui.icon("description").classes("text-red-500")
            ui.label(document.name).classes("text-sm truncate grow")

    @ui.refreshable
    def documents_view() -> None:
        names = filter_items([d.name for d in state.documents], state.documents_query)
        if not names:
            message = (
                "No documents match your search"
                if state.documents_query
                else "No documents available"
            )
            ui.label(message).classes("text-sm text-gray-400 py-6 self-center")
            return
        by_name = {d.name: d for d in state.documents}
        page = paginate(names, state.documents_page)
        for name in page.items:
            render_document_item(by_name[name])

        def change(e) -> None:
            state.documents_page = e.value
            documents_view.refresh()

        pager(page, change)

    # === All documents dialog ===

    dialog_state = {"query": "", "page": 1}

    @ui.refreshable
    def all_documents_view() -> None:
        names = filter_items([d.name for d in state.documents], dialog_state["query"])
        if not names:
            ui.label("No documents available").classes("text-sm text-gray-400 py-6")
            return
        by_name = {d.name: d for d in state.documents}
        page = paginate(names, dialog_state["page"], per_page=10)
        for name in page.items:
            render_document_item(by_name[name])

        def change(e) -> None:
            dialog_state["page"] = e.value
            all_documents_view.refresh()

        if page.total_pages > 1:
            ui.pagination(1, page.total_pages, value=page.page, on_change=change).props("dense")

    def set_dialog_query(value: str) -> None:
        dialog_state.update(query=value or "", page=1)
        all_documents_view.refresh()

    with ui.dialog() as documents_dialog, ui.card().classes("w-[36rem] max-w-full"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("All Documents").classes("text-lg font-semibold")
            ui.button(icon="close", on_click=documents_dialog.close).props("flat round dense")
        ui.input(
            placeholder="Search documents...",
            on_change=lambda e: set_dialog_query(e.value),
        ).props("outlined dense clearable").classes("w-full")
        with ui.column().classes("w-full gap-2"):
            all_documents_view()

    async def show_all_documents() -> None:
        documents_dialog.open()
        if not state.documents:
            await load_documents()

    # === Preview ===

    preview_column: ui.column

    async def open_preview(ref: DocumentReference) -> None:
        documents_dialog.close()
        state.preview = ref
        preview_column.set_visibility(True)
        messages_view.refresh()
        preview_column.clear()
        with preview_column:
            await render_preview(api, ref, on_close=close_preview)

    def close_preview() -> None:
        state.preview = None
        preview_column.clear()
        preview_column.set_visibility(False)
        messages_view.refresh()

    # === Actions ===

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or state.is_pending:
            return

        input_field.value = ""
        state.is_pending = True
        send_btn.disable()
        state.messages.append(
            ChatMessage(
                type=MessageType.HUMAN,
                content=text,
                timestamp=int(datetime.now().timestamp() * 1000),
            )
        )
        messages_view.refresh()

        try:
            reply = await api.send_message(text, state.session_id)
            state.messages.append(reply)
        except ApiError as e:
            logger.warning(f"Chat request failed: {e}")
            ui.notify(str(e) or "Failed to send message", type="negative")
        finally:
            state.is_pending = False
            send_btn.enable()
            messages_view.refresh()
        await load_sessions()

    def new_chat() -> None:
        state.reset()
        input_field.value = ""
        messages_view.refresh()
        history_view.refresh()

    async def logout() -> None:
        try:
            await api.logout()
        except ApiError as e:
            logger.info(f"Logout request failed: {e}")
        app.storage.user.clear()
        ui.notify("Logged out")
        ui.navigate.to("/login")

    # === UI Layout ===
    with ui.column().classes("w-full h-screen gap-0 bg-gray-50"):
        # Header
        with ui.row().classes("w-full header px-6 py-3 items-center justify-between no-wrap"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("description").classes("text-white text-3xl")
                ui.label("Client Engagement Overview").classes(
                    "text-lg font-semibold text-white"
                )
            with ui.row().classes("items-center gap-3"):
                ui.label(f"Welcome, {display_name(state.username)}").classes(
                    "text-sm text-white/80"
                )
                ui.button("View All Documents", on_click=show_all_documents).props(
                    "flat no-caps color=white"
                )
                ui.button("Logout", on_click=logout).props("flat no-caps color=white")

        with ui.row().classes("w-full grow gap-0 no-wrap overflow-hidden"):
            # Sidebar
            with ui.column().classes("w-72 h-full bg-white border-r p-3 gap-2 shrink-0"):
                with ui.tabs().classes("w-full") as tabs:
                    history_tab = ui.tab("History", icon="history")
                    documents_tab = ui.tab("Documents", icon="folder")
                with ui.tab_panels(tabs, value=history_tab).classes("w-full grow"):
                    with ui.tab_panel(history_tab).classes("p-0 gap-2"):
                        ui.input(
                            placeholder="Search history...",
                            on_change=lambda e: set_history_query(e.value),
                        ).props("outlined dense clearable").classes("w-full")
                        with ui.column().classes("w-full gap-2"):
                            history_view()
                    with ui.tab_panel(documents_tab).classes("p-0 gap-2"):
                        ui.input(
                            placeholder="Search documents...",
                            on_change=lambda e: set_documents_query(e.value),
                        ).props("outlined dense clearable").classes("w-full")
                        with ui.column().classes("w-full gap-2"):
                            documents_view()

            # Document preview (hidden until a reference is opened)
            preview_column = ui.column().classes("w-1/2 h-full bg-white border-r p-4 gap-3")
            preview_column.set_visibility(False)

            # Messages
            with (
                ui.scroll_area().classes("grow h-full"),
                ui.column().classes("w-full max-w-4xl mx-auto p-6"),
            ):
                with ui.column().classes("w-full gap-4"):
                    messages_view()

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-center bg-white border-t no-wrap"):
            ui.button("New Chat", icon="add", on_click=new_chat).props("unelevated no-caps").classes(
                "send-btn text-white"
            )
            input_field = (
                ui.input(placeholder="Type your message here...")
                .props("outlined dense")
                .classes("grow")
                .on("keydown.enter", send_message)
            )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("unelevated")
                .classes("send-btn text-white")
            )

    ui.timer(0.1, load_sessions, once=True)
    ui.timer(0.1, load_documents, once=True)
    return None
