"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.
Wire names follow the browser client's camelCase convention through
field aliases.

Models:
    - ChatMessage: A message in the thread, with optional document reference
    - ChatRecord: A stored message and its session
    - ChatRequest: Incoming chat request payload
    - Document: An indexed document
    - LoginRequest / LoginResponse: Authentication payloads
    - ServiceProbe: Webhook connectivity report
    - PreviewResponse: Highlight regions and excerpt for a PDF
"""

from docchat.models.schemas import (
    ActionResult,
    ChatMessage,
    ChatRecord,
    ChatRequest,
    Document,
    DocumentReference,
    HighlightRegion,
    LoginRequest,
    LoginResponse,
    MessageType,
    PreviewLine,
    PreviewResponse,
    ServiceProbe,
    UserInfo,
)

__all__ = [
    "ActionResult",
    "ChatMessage",
    "ChatRecord",
    "ChatRequest",
    "Document",
    "DocumentReference",
    "HighlightRegion",
    "LoginRequest",
    "LoginResponse",
    "MessageType",
    "PreviewLine",
    "PreviewResponse",
    "ServiceProbe",
    "UserInfo",
]
