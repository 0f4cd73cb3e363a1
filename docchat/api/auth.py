"""Login and logout endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, HTTPException, status

from docchat.api.deps import AppConfigDep, LoginDep, StoreDep
from docchat.models.schemas import ActionResult, LoginRequest, LoginResponse, UserInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(body: LoginRequest, store: StoreDep, config: AppConfigDep) -> LoginResponse:
    """Check credentials and open a login session.

    Raises:
        401: Unknown user or wrong password.
    """
    user = store.verify_password(body.username, body.password)
    if user is None:
        logger.info(f"Failed login for {body.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    store.cleanup_expired_sessions()
    session = store.create_user_session(user.id, timedelta(hours=config.session_ttl_hours))
    logger.info(f"User {user.username} logged in")

    return LoginResponse(
        success=True,
        message="Login successful",
        session_id=session.session_id,
        user=UserInfo(username=user.username),
    )


@router.post("/logout", response_model=ActionResult)
async def logout(login: LoginDep, store: StoreDep) -> ActionResult:
    """End the caller's login session."""
    store.delete_user_session(login.session_id)
    logger.info(f"User {login.user.username} logged out")
    return ActionResult(success=True, message="Logged out successfully")
