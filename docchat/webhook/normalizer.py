"""Normalization of webhook responses into chat messages.

The workflow webhook is loosely typed. Depending on how the workflow is
wired, the HTTP body can be any of:

    {"output": "plain answer text"}
    {"output": "{\\"answer\\": ...}"}                 (JSON inside a string)
    {"output": "```json\\n{\\"answer\\": ...}\\n```"}   (markdown-fenced JSON)
    {"output": {"answer": ...}}                      (nested object)
    {"answer": ..., "FileID": ...}                   (answer at top level)
    [{"output": ...}]                                (workflow item list)

Normalization runs in two steps. ``unwrap_envelope`` turns the raw body into
the "output" value and is part of the retry loop: a body that is not JSON
counts as a failed attempt. ``build_ai_message`` turns that output into a
``ChatMessage`` and never fails; anything it cannot interpret becomes a
readable fallback text.
"""

import json
import logging
import re
import time
from typing import Any

from docchat.models.schemas import ChatMessage, DocumentReference, MessageType
from docchat.webhook.formatting import format_answer

logger = logging.getLogger(__name__)

NO_CLEAR_ANSWER = (
    "I received a response, but it did not contain a clear answer. "
    "Please try rephrasing your question."
)
INTERPRETATION_ERROR = (
    "An unexpected error occurred while interpreting the chatbot's response format."
)
NOT_APPLICABLE = "Not Applicable"

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_WHITESPACE = re.compile(r"\s+")


class InvalidResponseError(Exception):
    """Raised when the webhook body is not valid JSON."""

    pass


def extract_fenced_block(text: str) -> str:
    """Return the content of the first markdown code fence, or ``text``."""
    match = _FENCED_BLOCK.search(text)
    if match:
        return match.group(1)
    return text


def parse_loose_json(text: str) -> Any:
    """Parse JSON that may be fenced or contain raw line breaks.

    Line breaks and tabs inside string values are invalid JSON, so every
    whitespace run is collapsed to a single space before parsing.

    Raises:
        ValueError: If the text is still not valid JSON.
    """
    candidate = _WHITESPACE.sub(" ", extract_fenced_block(text)).strip()
    return json.loads(candidate)


def unwrap_envelope(body_text: str) -> Any:
    """Extract the output value from a raw webhook body.

    Args:
        body_text: The HTTP response body.

    Returns:
        A dict, a plain string, or whatever JSON value the body carried.

    Raises:
        InvalidResponseError: If the body is not JSON.
    """
    try:
        parsed = json.loads(body_text)
    except ValueError as e:
        raise InvalidResponseError("Invalid JSON response from chatbot API") from e

    if isinstance(parsed, list) and parsed:
        parsed = parsed[0]

    if not isinstance(parsed, dict):
        logger.debug("Unknown response shape, using as is")
        return parsed

    output = parsed.get("output")
    if output and isinstance(output, str):
        try:
            value = parse_loose_json(output)
            logger.debug("Parsed output field from string")
            return value
        except ValueError:
            logger.debug("Output is a plain string")
            return output
    if output and isinstance(output, dict | list):
        return output
    if parsed.get("answer"):
        logger.debug("Response has answer field at top level")
    return parsed


def extract_reference(data: dict[str, Any]) -> DocumentReference | None:
    """Build the document reference of an answer, if it names a file."""
    file_id = data.get("FileID")
    if not file_id or file_id == NOT_APPLICABLE:
        return None
    return DocumentReference(
        file_id=file_id,
        file_name=data.get("FileName"),
        file_link=data.get("FileLink"),
        from_line=data.get("From"),
        to_line=data.get("To"),
    )


def _search_info(data: dict[str, Any]) -> str | None:
    info = data.get("searchInfo")
    if not info:
        return None
    if isinstance(info, str):
        return info
    return json.dumps(info)


def _message(content: str, timestamp: int, data: dict[str, Any] | None = None) -> ChatMessage:
    if data is None:
        return ChatMessage(type=MessageType.AI, content=content, timestamp=timestamp)
    return ChatMessage(
        type=MessageType.AI,
        content=content,
        timestamp=timestamp,
        document_reference=extract_reference(data),
        search_info=_search_info(data),
    )


def _has_answer(value: Any) -> bool:
    return isinstance(value, dict) and bool(value.get("answer"))


def _answer_text(answer: Any) -> str:
    if isinstance(answer, str):
        return answer
    return json.dumps(answer, ensure_ascii=False)


def build_ai_message(output: Any, timestamp: int | None = None) -> ChatMessage:
    """Convert a normalized output into the AI message for the thread.

    Args:
        output: Value returned by ``unwrap_envelope`` or the offline fallback.
        timestamp: Epoch milliseconds; defaults to now.

    Returns:
        The AI message. Uninterpretable output yields a fallback text.
    """
    if timestamp is None:
        timestamp = int(time.time() * 1000)

    try:
        if _has_answer(output):
            return _message(format_answer(_answer_text(output["answer"])), timestamp, output)

        if isinstance(output, str) and output:
            try:
                parsed = parse_loose_json(output)
            except ValueError:
                return _message(output, timestamp)
            if _has_answer(parsed):
                return _message(format_answer(_answer_text(parsed["answer"])), timestamp, parsed)
            return _message(NO_CLEAR_ANSWER, timestamp)

        logger.warning(f"No answer field found in response: {output!r}")
        return _message(NO_CLEAR_ANSWER, timestamp)
    except Exception as e:
        logger.error(f"Failed to interpret chatbot response: {e}")
        return _message(INTERPRETATION_ERROR, timestamp)
