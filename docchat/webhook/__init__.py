"""Bridge to the external workflow webhook.

The webhook does all retrieval, ranking and answer generation. This package
only talks to it and makes sense of what it returns.

Responsibilities:
    - Chat calls with per-attempt timeout and exponential backoff
    - Normalizing the webhook's loosely shaped answers into chat messages
    - Answer cleanup for the chat thread
    - Canned answers while the webhook is offline
"""

from docchat.webhook.client import (
    WebhookClient,
    WebhookError,
    WebhookUnavailableError,
    get_webhook_client,
)
from docchat.webhook.fallback import FALLBACK_DOCUMENTS, fallback_output
from docchat.webhook.formatting import format_answer
from docchat.webhook.normalizer import (
    InvalidResponseError,
    build_ai_message,
    parse_loose_json,
    unwrap_envelope,
)

__all__ = [
    "FALLBACK_DOCUMENTS",
    "InvalidResponseError",
    "WebhookClient",
    "WebhookError",
    "WebhookUnavailableError",
    "build_ai_message",
    "fallback_output",
    "format_answer",
    "get_webhook_client",
    "parse_loose_json",
    "unwrap_envelope",
]
