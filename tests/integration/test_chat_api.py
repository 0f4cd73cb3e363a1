"""Integration tests for the chat and session history endpoints.

The workflow webhook is replaced per test with a ``MockTransport`` handler;
the default fixture behaves like a webhook that is down.
"""

import json
from collections.abc import Callable

import httpx
import pytest_check as check
from fastapi import FastAPI
from httpx import AsyncClient

from docchat.storage.memory import MemoryStore
from docchat.webhook.client import WebhookClient, get_webhook_client
from docchat.webhook.normalizer import NO_CLEAR_ANSWER

ANSWER = {
    "answer": "Late deliveries incur a 2% penalty per week.",
    "FileID": "1RKU",
    "FileName": "US_TERMS_COND-0056.pdf",
    "FileLink": "https://drive.google.com/file/d/1RKU/view",
    "From": 411,
    "To": 414,
}


def use_webhook(
    app: FastAPI,
    make_webhook: Callable[..., WebhookClient],
    handler: Callable[[httpx.Request], httpx.Response],
    **overrides: object,
) -> None:
    client = make_webhook(handler, **overrides)
    app.dependency_overrides[get_webhook_client] = lambda: client


def reply(body: object) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json=body)


async def ask(client: AsyncClient, question: str, session_id: str = "session_1_abc") -> httpx.Response:
    return await client.post("/api/chat", json={"chatInput": question, "sessionId": session_id})


class TestChat:
    """Tests for POST /api/chat."""

    async def test_answer_with_reference(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        """A fenced JSON answer becomes a message with a document reference."""
        fenced = "```json\n" + json.dumps(ANSWER, indent=2) + "\n```"
        use_webhook(app, make_webhook, reply({"output": fenced}))

        response = await ask(async_client, "What if delivery is late?")

        assert response.status_code == 200
        data = response.json()
        check.equal(data["type"], "ai")
        check.equal(data["content"], ANSWER["answer"])
        check.equal(
            data["documentReference"],
            {
                "fileId": "1RKU",
                "fileName": "US_TERMS_COND-0056.pdf",
                "fileLink": "https://drive.google.com/file/d/1RKU/view",
                "from": 411,
                "to": 414,
            },
        )
        check.is_not_in("searchInfo", data)

    async def test_plain_text_answer(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        use_webhook(app, make_webhook, reply({"output": "Office hours are 9 to 5."}))

        data = (await ask(async_client, "When is the office open?")).json()

        check.equal(data["content"], "Office hours are 9 to 5.")
        check.is_not_in("documentReference", data)

    async def test_answer_without_answer_field(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        use_webhook(app, make_webhook, reply({"output": {"FileID": "x"}}))

        data = (await ask(async_client, "Anything?")).json()

        assert data["content"] == NO_CLEAR_ANSWER

    async def test_question_forwarded_to_webhook(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"output": "ok"})

        use_webhook(app, make_webhook, handler)

        await ask(async_client, "  Who signed?  ", "session_9_xyz")

        assert len(seen) == 1
        check.equal(seen[0].url.params["chatInput"], "Who signed?")
        check.equal(seen[0].url.params["sessionId"], "session_9_xyz")

    async def test_missing_fields(self, async_client: AsyncClient) -> None:
        """Blank question or session id is rejected before calling the webhook."""
        for body in ({"chatInput": "hi"}, {"sessionId": "s"}, {"chatInput": "  ", "sessionId": "s"}):
            response = await async_client.post("/api/chat", json=body)

            check.equal(response.status_code, 400)
            check.equal(response.json()["detail"], "Both chatInput and sessionId are required")

    async def test_offline_fallback(self, async_client: AsyncClient, store: MemoryStore) -> None:
        """An unreachable webhook yields the canned answer for the question."""
        response = await ask(async_client, "What are the contract terms?")

        assert response.status_code == 200
        data = response.json()
        check.is_true(data["content"].startswith("According to the contract terms"))
        check.equal(data["documentReference"]["fileName"], "US_TERMS_COND-0056.pdf")
        check.equal(len(store.get_chat_history("session_1_abc")), 2)

    async def test_offline_fallback_disabled(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        use_webhook(app, make_webhook, lambda request: httpx.Response(500), offline_fallback=False)

        response = await ask(async_client, "What are the contract terms?")

        assert response.status_code == 502
        assert "unavailable" in response.json()["detail"]

    async def test_retry_recovers(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        responses = [httpx.Response(502), httpx.Response(200, json={"output": "Second try"})]
        use_webhook(app, make_webhook, lambda request: responses.pop(0))

        data = (await ask(async_client, "Retry?")).json()

        assert data["content"] == "Second try"

    async def test_search_info(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        body = {"output": {"answer": "Found online.", "searchInfo": "https://example.com - Example"}}
        use_webhook(app, make_webhook, reply(body))

        data = (await ask(async_client, "Search the web")).json()

        assert data["searchInfo"] == "https://example.com - Example"


class TestHistory:
    """Tests for the session history endpoints."""

    async def test_history_records_both_sides(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        use_webhook(app, make_webhook, reply({"output": ANSWER}))
        await ask(async_client, "Question one", "session_a")

        response = await async_client.get("/api/chat/session_a")

        assert response.status_code == 200
        records = response.json()
        check.equal([r["message"]["type"] for r in records], ["human", "ai"])
        check.equal(records[0]["message"]["content"], "Question one")
        check.equal(records[1]["message"]["documentReference"]["fileId"], "1RKU")
        check.equal({r["session_id"] for r in records}, {"session_a"})
        check.is_not_in("documentReference", records[0]["message"])

    async def test_unknown_session_history(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/chat/nope")

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_and_delete_sessions(
        self, app: FastAPI, make_webhook: Callable[..., WebhookClient], async_client: AsyncClient
    ) -> None:
        use_webhook(app, make_webhook, reply({"output": "ok"}))
        await ask(async_client, "one", "session_a")
        await ask(async_client, "two", "session_b")

        check.equal((await async_client.get("/api/sessions")).json(), ["session_a", "session_b"])

        response = await async_client.delete("/api/sessions/session_a")

        check.equal(response.status_code, 200)
        check.equal(response.json(), {"success": True})
        check.equal((await async_client.get("/api/sessions")).json(), ["session_b"])
        check.equal((await async_client.get("/api/chat/session_a")).json(), [])
