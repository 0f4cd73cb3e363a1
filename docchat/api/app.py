"""FastAPI application for DocChat.

``create_app`` builds the app; the module-level ``app`` is what uvicorn
loads in separate mode and what NiceGUI is mounted on in integrated mode.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat import __version__
from docchat.api.auth import router as auth_router
from docchat.api.chat import router as chat_router
from docchat.api.documents import router as documents_router
from docchat.api.service import router as service_router
from docchat.webhook.client import get_webhook_client

logger = logging.getLogger(__name__)

ROUTERS: tuple[APIRouter, ...] = (
    auth_router,
    chat_router,
    documents_router,
    service_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log which webhook the API talks to, then run until shutdown."""
    webhook = get_webhook_client().config
    logger.info(
        f"DocChat API up: chat webhook {webhook.chat_url}, "
        f"{webhook.max_retries} attempts, offline fallback "
        f"{'on' if webhook.offline_fallback else 'off'}"
    )
    yield
    logger.info("DocChat API stopped")


def create_app() -> FastAPI:
    """Build the API with CORS, every router and a health check."""
    application = FastAPI(
        title="DocChat API",
        description=(
            "Backend for a document chat assistant. Forwards questions to an "
            "external workflow webhook, normalizes its answers, keeps chat "
            "history, and proxies PDFs for the document preview."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # The browser PDF viewer and the separate-mode UI call from other origins.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        application.include_router(router)

    @application.get("/health", tags=["service"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "docchat"}

    return application


app = create_app()
