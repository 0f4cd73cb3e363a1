"""Connectivity check for the chat webhook."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from docchat.api.deps import WebhookDep

router = APIRouter(prefix="/api", tags=["service"])


@router.get("/test-chatbot-service")
async def test_chatbot_service(webhook: WebhookDep) -> JSONResponse:
    """Probe the chat webhook.

    Returns 200 when it answers, 502 when it answers with an error and 503
    when it cannot be reached.
    """
    probe = await webhook.probe()
    if probe.status == "success":
        code = status.HTTP_200_OK
    elif probe.response_status is not None:
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(
        status_code=code,
        content=probe.model_dump(by_alias=True, exclude_none=True),
    )
