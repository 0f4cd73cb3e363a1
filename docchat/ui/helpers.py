"""Pure helpers for the NiceGUI pages: markdown, session ids, list paging."""

import html
import math
import random
import re
import string
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")

WELCOME_MESSAGE = (
    "Welcome to the Document Extraction Chatbot\n\nAsk me anything about your documents!"
)
SAMPLE_QUESTIONS = [
    ("💰", "What is the rate of interest for the Company XYZ?"),
    ("📊", "Show me the ROI of Company XYZ"),
    ("📋", "Can you summarize the key financial metrics?"),
]
ITEMS_PER_PAGE = 5

_BASE36 = string.digits + string.ascii_lowercase

# Link targets are matched after escaping, so an escaped quote ends a URL.
_URL_CHARS = r"(?:(?!&quot;|&#x27;)[^\s<>\"'()])+"
_MD_LINK = re.compile(r"\[([^\]]+)\]\(((?:https?://|mailto:)" + _URL_CHARS + r")\)")
_BARE_URL = re.compile(r"(?<![\"'>])(https?://" + _URL_CHARS + r")")


def new_session_id(now_ms: int | None = None) -> str:
    """Chat session id of the form ``session_<epoch ms>_<9 base36 chars>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"session_{now_ms}_{suffix}"


def session_label(session_id: str) -> str:
    """Creation date of a session id, or "Recent" when it carries none."""
    parts = session_id.split("_")
    if len(parts) > 1 and parts[1].isdigit():
        try:
            return datetime.fromtimestamp(int(parts[1]) / 1000).strftime("%d %b %Y")
        except (OverflowError, OSError, ValueError):
            return "Recent"
    return "Recent"


def display_name(username: str) -> str:
    """Turn a "first.last" login name into "first last"."""
    return username.replace(".", " ", 1)


def filter_items(items: list[str], query: str) -> list[str]:
    """Case-insensitive substring filter."""
    needle = query.strip().lower()
    if not needle:
        return list(items)
    return [item for item in items if needle in item.lower()]


@dataclass
class Page(Generic[T]):
    """One page of a filtered list."""

    items: list[T]
    page: int
    total_pages: int
    total: int
    per_page: int = ITEMS_PER_PAGE

    @property
    def first(self) -> int:
        return (self.page - 1) * self.per_page + 1 if self.total else 0

    @property
    def last(self) -> int:
        return min(self.first + len(self.items) - 1, self.total) if self.total else 0

    @property
    def summary(self) -> str:
        return f"Showing {self.first}-{self.last} of {self.total}"


def paginate(items: list[T], page: int, per_page: int = ITEMS_PER_PAGE) -> Page[T]:
    """Slice out a 1-based page; out-of-range pages are clamped."""
    total_pages = max(math.ceil(len(items) / per_page), 1)
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(
        items=items[start : start + per_page],
        page=page,
        total_pages=total_pages,
        total=len(items),
        per_page=per_page,
    )


def plain_to_html(text: str) -> str:
    """Escape user text for an HTML bubble, keeping its line breaks."""
    return html.escape(text).replace("\n", "<br>")


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists
    (including the "•" bullets produced by answer formatting).
    """
    # Escape HTML entities first, quotes included
    text = html.escape(text)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)

    text = _MD_LINK.sub(
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )
    text = _BARE_URL.sub(
        r'<a href="\1" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list(text, r"^[-*•]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>")
    text = _wrap_list(text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>")

    return text.replace("\n", "<br>")


def _wrap_list(text: str, marker: str, open_tag: str, close_tag: str) -> str:
    in_list = False
    result = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)
