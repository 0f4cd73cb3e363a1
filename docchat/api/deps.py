"""Shared FastAPI dependencies.

Routes receive their collaborators through ``Depends`` so tests can swap
them with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from docchat.config import AppConfig, get_app_config
from docchat.documents.drive import DriveFetcher, get_drive_fetcher
from docchat.storage.memory import MemoryStore, User, get_store
from docchat.webhook.client import WebhookClient, get_webhook_client

StoreDep = Annotated[MemoryStore, Depends(get_store)]
WebhookDep = Annotated[WebhookClient, Depends(get_webhook_client)]
FetcherDep = Annotated[DriveFetcher, Depends(get_drive_fetcher)]
AppConfigDep = Annotated[AppConfig, Depends(get_app_config)]


class LoginContext:
    """The authenticated user and the login session id of a request."""

    def __init__(self, user: User, session_id: str) -> None:
        self.user = user
        self.session_id = session_id


def require_login(
    store: StoreDep,
    x_session_id: Annotated[str | None, Header()] = None,
) -> LoginContext:
    """Resolve the ``X-Session-Id`` header to a logged-in user.

    Raises:
        HTTPException: 401 if the header is missing, unknown or expired.
    """
    if not x_session_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session required")

    session = store.get_user_session(x_session_id)
    user = store.get_user(session.user_id) if session else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
        )
    return LoginContext(user=user, session_id=x_session_id)


LoginDep = Annotated[LoginContext, Depends(require_login)]
