"""HTTP client for the external workflow webhook.

Every call opens a short-lived ``httpx.AsyncClient``. Chat calls are retried
with exponential backoff; the document list and the connectivity probe are
single attempts with short timeouts because the UI waits on them.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from docchat.config import WebhookConfig, get_webhook_config
from docchat.models.schemas import Document, ServiceProbe
from docchat.webhook.normalizer import InvalidResponseError, unwrap_envelope

logger = logging.getLogger(__name__)

_DOCUMENT_LIST = TypeAdapter(list[Document])


class WebhookError(Exception):
    """Raised when a single webhook attempt fails."""

    pass


class WebhookUnavailableError(WebhookError):
    """Raised when every chat attempt failed."""

    pass


class WebhookClient:
    """Client for the chat and document-list webhooks.

    Args:
        config: Webhook settings. Loads from environment if not provided.
        transport: Optional httpx transport, used by tests to stub the webhook.
        sleep: Coroutine used to wait between attempts.
    """

    def __init__(
        self,
        config: WebhookConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = config or get_webhook_config()
        self._transport = transport
        self._sleep = sleep

    @property
    def config(self) -> WebhookConfig:
        return self._config

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def _attempt_chat(self, chat_input: str, session_id: str) -> Any:
        async with self._client(self._config.timeout_seconds) as client:
            response = await client.post(
                self._config.chat_url,
                params={"chatInput": chat_input, "sessionId": session_id},
                headers={"Content-Type": "application/json"},
            )

        logger.debug(f"Webhook response status: {response.status_code}")
        if not response.is_success:
            logger.error(f"Chatbot API error: {response.status_code} body={response.text!r}")
            raise WebhookError(
                f"Chatbot API error: {response.status_code} {response.reason_phrase}"
            )

        logger.debug(f"Webhook response body: {response.text!r}")
        return unwrap_envelope(response.text)

    async def ask(self, chat_input: str, session_id: str) -> Any:
        """Send a question to the chat webhook.

        Args:
            chat_input: The user's question.
            session_id: Chat session the question belongs to.

        Returns:
            The normalized output value (see ``unwrap_envelope``).

        Raises:
            WebhookUnavailableError: If every attempt failed.
        """
        attempts = self._config.max_retries
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            logger.debug(f"Attempt {attempt}/{attempts} to call chat webhook")
            try:
                return await self._attempt_chat(chat_input, session_id)
            except (httpx.HTTPError, WebhookError, InvalidResponseError) as e:
                last_error = e
                logger.warning(f"Attempt {attempt} failed: {e!r}")

            if attempt < attempts:
                wait = self._config.backoff_seconds(attempt)
                logger.debug(f"Waiting {wait:.1f}s before retry...")
                await self._sleep(wait)

        raise WebhookUnavailableError(
            f"Chat webhook failed after {attempts} attempts"
        ) from last_error

    async def list_documents(self, payload: dict[str, Any] | None = None) -> list[Document] | None:
        """Fetch the indexed document list.

        Returns:
            The documents, or None if the webhook is unavailable or replied
            with something that is not a document list.
        """
        try:
            async with self._client(self._config.documents_timeout_seconds) as client:
                response = await client.post(self._config.documents_url, json=payload or {})
            if not response.is_success:
                logger.warning(f"Document webhook returned {response.status_code}")
                return None
            return _DOCUMENT_LIST.validate_json(response.content)
        except httpx.HTTPError as e:
            logger.warning(f"Document webhook unavailable: {e!r}")
            return None
        except ValidationError as e:
            logger.warning(f"Document webhook returned an unexpected payload: {e}")
            return None

    async def probe(self) -> ServiceProbe:
        """Check whether the chat webhook is reachable.

        Returns:
            Probe result; ``response_status`` is None when unreachable.
        """
        logger.debug("Testing connection to chat webhook...")
        try:
            async with self._client(self._config.probe_timeout_seconds) as client:
                response = await client.post(
                    self._config.chat_url,
                    json={"chatInput": "test", "sessionId": "test-session"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Webhook probe failed: {e!r}")
            return ServiceProbe(
                status="error",
                message="External chatbot service is not reachable",
                error=str(e) or type(e).__name__,
            )

        if not response.is_success:
            return ServiceProbe(
                status="error",
                message="External chatbot service returned error",
                response_status=response.status_code,
                error=response.reason_phrase,
                error_body=response.text,
            )
        return ServiceProbe(
            status="success",
            message="External chatbot service is reachable",
            response_status=response.status_code,
            response_body=response.text,
        )


# Module-level singleton instance
_webhook_client: WebhookClient | None = None


def get_webhook_client() -> WebhookClient:
    """Get or create the global webhook client."""
    global _webhook_client
    if _webhook_client is None:
        _webhook_client = WebhookClient()
    return _webhook_client
