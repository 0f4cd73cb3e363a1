from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageType(str, Enum):
    """Author of a chat message."""

    HUMAN = "human"
    AI = "ai"


class CamelModel(BaseModel):
    """Base for models whose wire names are camelCase."""

    model_config = ConfigDict(populate_by_name=True)


class DocumentReference(CamelModel):
    """Pointer from an answer to the document it came from.

    Attributes:
        file_id: Identifier of the file in the document store.
        file_name: Display name.
        file_link: Link to open the file.
        from_line: First referenced line (1-based), if known.
        to_line: Last referenced line (1-based), if known.
    """

    file_id: str = Field(..., alias="fileId")
    file_name: str = Field(default="", alias="fileName")
    file_link: str = Field(default="", alias="fileLink")
    from_line: int | None = Field(default=None, alias="from")
    to_line: int | None = Field(default=None, alias="to")

    @field_validator("file_id", mode="before")
    @classmethod
    def coerce_file_id(cls, v: Any) -> Any:
        if isinstance(v, int | float):
            return str(v)
        return v

    @field_validator("file_name", "file_link", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("from_line", "to_line", mode="before")
    @classmethod
    def coerce_line(cls, v: Any) -> int | None:
        """Accept ints, whole floats and numeric strings, drop anything else."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, float):
            return int(v) if v.is_integer() else None
        try:
            number = float(str(v).strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None

    @property
    def has_range(self) -> bool:
        return bool(self.from_line) and bool(self.to_line)


class ChatMessage(CamelModel):
    """A single chat message as shown in the thread.

    Attributes:
        type: Who wrote the message.
        content: Message text (markdown for AI answers).
        timestamp: Creation time in epoch milliseconds.
        document_reference: Source document for AI answers, if any.
        search_info: Web search details, if the answer used web search.
    """

    type: MessageType
    content: str
    timestamp: int
    document_reference: DocumentReference | None = Field(
        default=None, alias="documentReference"
    )
    search_info: str | None = Field(default=None, alias="searchInfo")


class ChatRecord(BaseModel):
    """A stored message with its session."""

    id: str
    session_id: str
    message: ChatMessage
    created_at: str = Field(..., description="ISO format timestamp")


class ChatRequest(CamelModel):
    """Request payload for the chat endpoint.

    Empty values are allowed here so the route can answer 400 with a
    helpful message instead of a validation error.
    """

    chat_input: str = Field(default="", alias="chatInput")
    session_id: str = Field(default="", alias="sessionId")

    @field_validator("chat_input", "session_id", mode="before")
    @classmethod
    def strip_value(cls, v: Any) -> Any:
        """Strip whitespace before validation."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v


class Document(BaseModel):
    """An indexed document as listed by the webhook."""

    model_config = ConfigDict(extra="ignore")

    name: str
    link: str


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserInfo(BaseModel):
    username: str


class LoginResponse(CamelModel):
    """Result of a login attempt."""

    success: bool
    message: str
    session_id: str | None = Field(default=None, alias="sessionId")
    user: UserInfo | None = None


class ActionResult(BaseModel):
    success: bool
    message: str | None = None


class ServiceProbe(CamelModel):
    """Result of probing the chat webhook.

    Attributes:
        status: "success" or "error".
        message: Human readable summary.
        response_status: HTTP status returned by the webhook, if any.
        response_body: Body of a successful response.
        error_body: Body of an error response.
        error: Transport error description when unreachable.
    """

    status: str
    message: str
    response_status: int | None = Field(default=None, alias="responseStatus")
    response_body: str | None = Field(default=None, alias="responseBody")
    error_body: str | None = Field(default=None, alias="errorBody")
    error: str | None = None


class HighlightRegion(CamelModel):
    """Approximate highlight on one PDF page.

    ``top`` and ``height`` are fractions of the page height.
    """

    page: int = Field(..., ge=1)
    first_line: int = Field(..., ge=1, alias="firstLine")
    last_line: int = Field(..., ge=1, alias="lastLine")
    top: float = Field(..., ge=0.0, le=1.0)
    height: float = Field(..., ge=0.0, le=1.0)


class PreviewLine(BaseModel):
    """One line of extracted document text."""

    number: int = Field(..., ge=1)
    page: int = Field(..., ge=1)
    text: str
    highlighted: bool = False


class PreviewResponse(CamelModel):
    """Everything the preview pane needs to show a highlighted PDF."""

    file_id: str = Field(..., alias="fileId")
    pages: int = Field(..., ge=0)
    highlights: list[HighlightRegion] = Field(default_factory=list)
    excerpt: list[PreviewLine] = Field(default_factory=list)
