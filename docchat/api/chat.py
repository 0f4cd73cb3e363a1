"""Chat and session history endpoints.

The chat endpoint forwards each question to the workflow webhook, turns
whatever comes back into a single message shape, and records both sides of
the exchange in the session history.
"""

import logging
import time

from fastapi import APIRouter, HTTPException, status

from docchat.api.deps import StoreDep, WebhookDep
from docchat.models.schemas import (
    ActionResult,
    ChatMessage,
    ChatRecord,
    ChatRequest,
    MessageType,
)
from docchat.webhook.client import WebhookUnavailableError
from docchat.webhook.fallback import fallback_output
from docchat.webhook.normalizer import build_ai_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def _now_ms() -> int:
    return int(time.time() * 1000)


@router.post("/chat", response_model=ChatMessage, response_model_exclude_none=True)
async def chat(body: ChatRequest, store: StoreDep, webhook: WebhookDep) -> ChatMessage:
    """Answer a question through the workflow webhook.

    Args:
        body: ``chatInput`` and ``sessionId``.

    Returns:
        The AI message, with a document reference when the answer cites one.

    Raises:
        400: Missing question or session id.
        502: Webhook unavailable and offline fallback disabled.
    """
    if not body.chat_input or not body.session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both chatInput and sessionId are required",
        )

    store.save_chat_message(
        body.session_id,
        ChatMessage(type=MessageType.HUMAN, content=body.chat_input, timestamp=_now_ms()),
    )

    try:
        output = await webhook.ask(body.chat_input, body.session_id)
    except WebhookUnavailableError as e:
        logger.error(f"Chat webhook unavailable: {e!r} (cause: {e.__cause__!r})")
        if not webhook.config.offline_fallback:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Chat request failed: external chatbot service unavailable",
            ) from e
        logger.warning("External chatbot service unavailable, using offline answer")
        output = fallback_output(body.chat_input)

    message = build_ai_message(output, timestamp=_now_ms())
    store.save_chat_message(body.session_id, message)

    logger.debug(
        f"AI message: {len(message.content)} chars, "
        f"reference={message.document_reference is not None}, "
        f"search_info={message.search_info is not None}"
    )
    return message


@router.get(
    "/chat/{session_id}",
    response_model=list[ChatRecord],
    response_model_exclude_none=True,
)
async def chat_history(session_id: str, store: StoreDep) -> list[ChatRecord]:
    """Messages of a session, oldest first."""
    return store.get_chat_history(session_id)


@router.get("/sessions", response_model=list[str])
async def list_sessions(store: StoreDep) -> list[str]:
    """Ids of every session with history."""
    return store.list_chat_sessions()


@router.delete("/sessions/{session_id}", response_model=ActionResult, response_model_exclude_none=True)
async def delete_session(session_id: str, store: StoreDep) -> ActionResult:
    store.delete_chat_session(session_id)
    return ActionResult(success=True)
