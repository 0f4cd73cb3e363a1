"""Process-local storage for users, login sessions and chat history."""

from docchat.storage.memory import MemoryStore, User, UserSession, get_store

__all__ = ["MemoryStore", "User", "UserSession", "get_store"]
