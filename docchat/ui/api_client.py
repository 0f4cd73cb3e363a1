"""HTTP client the NiceGUI pages use to talk to the DocChat API."""

import logging
from typing import Any

import httpx

from docchat.config import get_app_config
from docchat.models.schemas import ChatMessage, ChatRecord, Document, PreviewResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Thin async wrapper around the DocChat HTTP API.

    Args:
        base_url: API base URL. Defaults to ``API_BASE_URL``.
        login_session: Login session id sent as ``X-Session-Id``.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        login_session: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or get_app_config().api_base_url).rstrip("/")
        self._login_session = login_session
        self._transport = transport

    async def _request(self, method: str, path: str, timeout: float = 30.0, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {})
        if self._login_session:
            headers["X-Session-Id"] = self._login_session
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=timeout, transport=self._transport
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e

        if response.is_error:
            raise ApiError(_error_detail(response), status_code=response.status_code)
        return response.json()

    async def login(self, username: str, password: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")

    async def send_message(self, chat_input: str, session_id: str) -> ChatMessage:
        # Webhook retries can take several 90s attempts.
        data = await self._request(
            "POST",
            "/api/chat",
            timeout=300.0,
            json={"chatInput": chat_input, "sessionId": session_id},
        )
        return ChatMessage.model_validate(data)

    async def history(self, session_id: str) -> list[ChatMessage]:
        data = await self._request("GET", f"/api/chat/{session_id}")
        return [ChatRecord.model_validate(item).message for item in data]

    async def sessions(self) -> list[str]:
        return await self._request("GET", "/api/sessions")

    async def delete_session(self, session_id: str) -> None:
        await self._request("DELETE", f"/api/sessions/{session_id}")

    async def documents(self) -> list[Document]:
        data = await self._request("POST", "/api/documents", json={})
        return [Document.model_validate(item) for item in data]

    async def preview(self, file_id: str, start: int | None, end: int | None) -> PreviewResponse:
        params = {k: v for k, v in (("from", start), ("to", end)) if v is not None}
        data = await self._request("GET", f"/api/preview/{file_id}", timeout=60.0, params=params)
        return PreviewResponse.model_validate(data)

    def pdf_url(self, file_id: str, page: int = 1) -> str:
        return f"{self.base_url}/api/proxy/pdf/{file_id}#page={page}&view=FitH"


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str):
        return detail
    return f"HTTP {response.status_code}"
