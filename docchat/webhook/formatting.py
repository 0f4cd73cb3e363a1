"""Presentation cleanup for webhook answers.

The workflow returns free-form answer text. Before it reaches the chat
thread, code markers and italics are stripped and long prose is broken into
bullet points so answers read consistently. Three topic-specific layouts
(financial, leadership, project) add a header and bold the key figures.
"""

import re

_FENCED_CODE = re.compile(r"```(.*?)```")
_INLINE_CODE = re.compile(r"`(.*?)`")
# Single-asterisk emphasis only; **bold** survives.
_ITALIC = re.compile(r"(?<!\*)\*(?!\*)([^*\n]+?)(?<!\*)\*(?!\*)")
_NUMBERED = re.compile(r"^\d+\.")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")

FINANCIAL_HEADER = "**📊 Financial Summary**"
LEADERSHIP_HEADER = "**👥 Company Leadership**"
PROJECT_HEADER = "**📅 Project Timeline**"

_FINANCIAL_MARKS = [
    (re.compile(r"(₹[\d,]+\.?\d*)"), r"**\1**"),
    (re.compile(r"(\$[\d,]+\.?\d*)"), r"**\1**"),
    (re.compile(r"(\d+%)"), r"**\1**"),
]
_LEADERSHIP_MARKS = [
    (re.compile(r"(Mr\.|Ms\.|Mrs\.)\s+([A-Z][a-z]+)"), r"**\1 \2**"),
    (re.compile(r"(CEO|CFO|Chairman|Director)"), r"**\1**"),
]
_PROJECT_MARKS = [
    (re.compile(r"(\d+)\s*(month|week|day)"), r"**\1 \2**"),
    (re.compile(r"(Phase|Planning|Development|Testing|Deployment)"), r"**\1**"),
]


def strip_markup(answer: str) -> str:
    """Remove code fences, inline code and italics, keeping bold."""
    text = _FENCED_CODE.sub(r"\1", answer)
    text = _INLINE_CODE.sub(r"\1", text)
    return _ITALIC.sub(r"\1", text)


def _fragments(text: str, min_length: int) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > min_length]


def _topic_layout(
    text: str,
    header: str,
    marks: list[tuple[re.Pattern[str], str]],
) -> str | None:
    """Bullet the fragments of ``text`` under ``header``, or None if too short."""
    fragments = _fragments(text, 5)
    if len(fragments) <= 1:
        return None

    bullets = [header]
    for fragment in fragments:
        for pattern, replacement in marks:
            fragment = pattern.sub(replacement, fragment)
        bullets.append(f"• {fragment}")
    return "\n".join(bullets)


def format_answer(answer: str) -> str:
    """Transform an answer into a cleaner, more structured layout.

    Args:
        answer: Raw answer text from the webhook.

    Returns:
        Markdown text ready for the chat thread.
    """
    text = strip_markup(answer)
    lines = [line for line in text.split("\n") if line.strip()]

    if len(lines) <= 2:
        return text.strip()

    stripped = [line.strip() for line in lines]
    has_bullets = any(line.startswith(("-", "•")) for line in stripped)
    has_numbered = any(_NUMBERED.match(line) for line in stripped)
    if has_bullets or has_numbered:
        return text.strip()

    if any(":" in line and "**" in line for line in lines):
        return "\n".join(
            f"• {line.strip()}" if ":" in line and "**" in line else line.strip()
            for line in lines
        )

    sentences = _fragments(text, 10)
    if len(sentences) > 2:
        return "\n".join(f"• {sentence}" for sentence in sentences)

    lowered = text.lower()
    layouts = [
        (any(c in text for c in ("₹", "$", "%")), FINANCIAL_HEADER, _FINANCIAL_MARKS),
        (
            any(w in lowered for w in ("director", "board", "ceo")),
            LEADERSHIP_HEADER,
            _LEADERSHIP_MARKS,
        ),
        (
            any(w in lowered for w in ("project", "timeline", "phase")),
            PROJECT_HEADER,
            _PROJECT_MARKS,
        ),
    ]
    for applies, header, marks in layouts:
        if applies:
            formatted = _topic_layout(text, header, marks)
            if formatted is not None:
                return formatted

    return text.strip()
