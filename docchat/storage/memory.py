"""In-memory store for users, login sessions and chat history.

Nothing is persisted: a restart clears history and logs everyone out. The
store is shared by all request handlers, so every method takes the lock.
"""

import hashlib
import hmac
import logging
import secrets
import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from docchat.config import AppConfig, get_app_config
from docchat.models.schemas import ChatMessage, ChatRecord

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000


def _now() -> datetime:
    return datetime.now(UTC)


def hash_password(password: str, salt: bytes | None = None) -> tuple[bytes, bytes]:
    """Hash a password with PBKDF2-SHA256.

    Returns:
        (salt, digest) tuple.
    """
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, _HASH_ITERATIONS)
    return salt, digest


@dataclass
class User:
    id: str
    username: str
    salt: bytes = field(repr=False)
    password_hash: bytes = field(repr=False)
    created_at: datetime = field(default_factory=_now)


@dataclass
class UserSession:
    id: str
    user_id: str
    session_id: str
    expires_at: datetime
    created_at: datetime = field(default_factory=_now)

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at < (now or _now())


class MemoryStore:
    """Thread-safe in-memory storage.

    Args:
        config: Application config; the default user is seeded from it.
            Pass ``seed=False`` to start empty.
    """

    def __init__(self, config: AppConfig | None = None, seed: bool = True) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._user_sessions: dict[str, UserSession] = {}
        self._chat_history: dict[str, list[ChatRecord]] = {}

        if seed:
            config = config or get_app_config()
            self.create_user(config.default_username, config.default_password)

    # Users

    def create_user(self, username: str, password: str) -> User:
        salt, digest = hash_password(password)
        user = User(id=str(uuid.uuid4()), username=username, salt=salt, password_hash=digest)
        with self._lock:
            self._users[user.id] = user
        logger.info(f"Created user: {username}")
        return user

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def verify_password(self, username: str, password: str) -> User | None:
        """Return the user if the credentials match, else None."""
        user = self.get_user_by_username(username)
        if user is None:
            return None
        _, digest = hash_password(password, user.salt)
        if not hmac.compare_digest(digest, user.password_hash):
            return None
        return user

    # Login sessions

    def create_user_session(self, user_id: str, ttl: timedelta) -> UserSession:
        session = UserSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            session_id=str(uuid.uuid4()),
            expires_at=_now() + ttl,
        )
        with self._lock:
            self._user_sessions[session.session_id] = session
        return session

    def get_user_session(self, session_id: str) -> UserSession | None:
        """Look up a login session; expired sessions are removed."""
        with self._lock:
            session = self._user_sessions.get(session_id)
            if session is not None and session.is_expired():
                del self._user_sessions[session_id]
                return None
            return session

    def delete_user_session(self, session_id: str) -> None:
        with self._lock:
            self._user_sessions.pop(session_id, None)

    def cleanup_expired_sessions(self) -> int:
        """Drop every expired login session.

        Returns:
            Number of sessions removed.
        """
        now = _now()
        with self._lock:
            expired = [k for k, s in self._user_sessions.items() if s.is_expired(now)]
            for key in expired:
                del self._user_sessions[key]
        if expired:
            logger.info(f"Removed {len(expired)} expired login sessions")
        return len(expired)

    # Chat history

    def save_chat_message(self, session_id: str, message: ChatMessage) -> ChatRecord:
        record = ChatRecord(
            id=str(uuid.uuid4()),
            session_id=session_id,
            message=message,
            created_at=_now().isoformat(),
        )
        with self._lock:
            self._chat_history.setdefault(session_id, []).append(record)
        return record

    def get_chat_history(self, session_id: str) -> list[ChatRecord]:
        with self._lock:
            return list(self._chat_history.get(session_id, []))

    def list_chat_sessions(self) -> list[str]:
        """Session ids in the order their first message was saved."""
        with self._lock:
            return list(self._chat_history)

    def delete_chat_session(self, session_id: str) -> None:
        with self._lock:
            self._chat_history.pop(session_id, None)


# Module-level singleton instance
_store: MemoryStore | None = None


def get_store() -> MemoryStore:
    """Get or create the global store."""
    global _store
    if _store is None:
        _store = MemoryStore()
    return _store
