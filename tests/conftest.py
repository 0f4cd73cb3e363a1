"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - app_config: Application config with known credentials
    - webhook_config: Webhook config with no backoff delay
    - store: Fresh in-memory store seeded with the test user
    - make_webhook: Factory for a WebhookClient backed by a stub handler
    - app / async_client: FastAPI app with overridden dependencies and an
      HTTPX client bound to it

The webhook and Google Drive are never contacted: every outgoing request
goes through ``httpx.MockTransport``.
"""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from docchat.api.app import create_app
from docchat.config import AppConfig, WebhookConfig
from docchat.documents.drive import DriveFetcher, get_drive_fetcher
from docchat.storage.memory import MemoryStore, get_store
from docchat.webhook.client import WebhookClient, get_webhook_client

Handler = Callable[[httpx.Request], httpx.Response]

TEST_USERNAME = "test.user"
TEST_PASSWORD = "s3cret-pass"


def make_pdf(pages: list[list[str]]) -> bytes:
    """Build a small text PDF, one text line per entry, Helvetica 12pt."""
    objects: dict[int, bytes] = {}
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode()
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    for pid, lines in zip(page_ids, pages, strict=True):
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        for line in lines:
            escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
            ops.append(f"({escaped}) Tj T*")
        ops.append("ET")
        stream = "\n".join(ops).encode()
        objects[pid] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
        ).encode()
        objects[pid + 1] = (
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for number in sorted(objects):
        offsets[number] = len(out)
        out += f"{number} 0 obj\n".encode() + objects[number] + b"\nendobj\n"

    xref = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode() + b"0000000000 65535 f \n"
    for number in range(1, size):
        out += f"{offsets[number]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def pdf_factory() -> Callable[[list[list[str]]], bytes]:
    return make_pdf


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        default_username=TEST_USERNAME,
        default_password=TEST_PASSWORD,
        session_ttl_hours=24,
        api_base_url="http://test",
    )


@pytest.fixture
def webhook_config() -> WebhookConfig:
    return WebhookConfig(
        chat_url="http://webhook.test/webhook/chatbot-api",
        documents_url="http://webhook.test/webhook/file-load-history",
        timeout_seconds=5,
        max_retries=2,
        retry_delay_base_ms=0,
        offline_fallback=True,
    )


@pytest.fixture
def store(app_config: AppConfig) -> MemoryStore:
    return MemoryStore(config=app_config)


@pytest.fixture
def make_webhook(webhook_config: WebhookConfig) -> Callable[..., WebhookClient]:
    """Build a WebhookClient whose requests are answered by ``handler``."""

    def factory(handler: Handler, **overrides: object) -> WebhookClient:
        config = webhook_config.model_copy(update=overrides)
        return WebhookClient(config=config, transport=httpx.MockTransport(handler))

    return factory


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def webhook(make_webhook: Callable[..., WebhookClient]) -> WebhookClient:
    """Webhook client whose service is down; tests override when needed."""
    return make_webhook(unreachable)


@pytest.fixture
def fetcher() -> DriveFetcher:
    return DriveFetcher(transport=httpx.MockTransport(unreachable))


@pytest.fixture
def app(store: MemoryStore, webhook: WebhookClient, fetcher: DriveFetcher) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    application.dependency_overrides[get_webhook_client] = lambda: webhook
    application.dependency_overrides[get_drive_fetcher] = lambda: fetcher
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
