"""Unit tests for MemoryStore."""

from datetime import timedelta

import pytest_check as check

from docchat.models.schemas import ChatMessage, MessageType
from docchat.storage.memory import MemoryStore, hash_password
from tests.conftest import TEST_PASSWORD, TEST_USERNAME


def message(content: str, kind: MessageType = MessageType.HUMAN) -> ChatMessage:
    return ChatMessage(type=kind, content=content, timestamp=1_700_000_000_000)


class TestUsers:
    """Tests for user seeding and password checks."""

    def test_default_user_seeded(self, store: MemoryStore) -> None:
        user = store.get_user_by_username(TEST_USERNAME)

        assert user is not None
        assert store.get_user(user.id) is user

    def test_unseeded_store_is_empty(self) -> None:
        assert MemoryStore(seed=False).get_user_by_username("demo.user") is None

    def test_password_is_not_stored_in_plain_text(self, store: MemoryStore) -> None:
        user = store.get_user_by_username(TEST_USERNAME)

        assert user is not None
        assert TEST_PASSWORD.encode() not in user.password_hash
        assert TEST_PASSWORD not in repr(user)

    def test_verify_password(self, store: MemoryStore) -> None:
        check.is_not_none(store.verify_password(TEST_USERNAME, TEST_PASSWORD))
        check.is_none(store.verify_password(TEST_USERNAME, "wrong"))
        check.is_none(store.verify_password("nobody", TEST_PASSWORD))

    def test_hash_is_salted(self) -> None:
        """Same password hashes differently with different salts."""
        salt_a, digest_a = hash_password("pw")
        salt_b, digest_b = hash_password("pw")

        assert salt_a != salt_b
        assert digest_a != digest_b
        assert hash_password("pw", salt_a)[1] == digest_a


class TestUserSessions:
    """Tests for login session lifecycle."""

    def test_create_and_get(self, store: MemoryStore) -> None:
        session = store.create_user_session("user-1", timedelta(hours=1))

        found = store.get_user_session(session.session_id)

        assert found is not None
        assert found.user_id == "user-1"

    def test_expired_session_is_removed_on_lookup(self, store: MemoryStore) -> None:
        session = store.create_user_session("user-1", timedelta(seconds=-1))

        assert store.get_user_session(session.session_id) is None
        assert store.cleanup_expired_sessions() == 0

    def test_delete(self, store: MemoryStore) -> None:
        session = store.create_user_session("user-1", timedelta(hours=1))

        store.delete_user_session(session.session_id)
        store.delete_user_session(session.session_id)

        assert store.get_user_session(session.session_id) is None

    def test_cleanup_expired(self, store: MemoryStore) -> None:
        live = store.create_user_session("user-1", timedelta(hours=1))
        store.create_user_session("user-2", timedelta(seconds=-1))
        store.create_user_session("user-3", timedelta(seconds=-5))

        assert store.cleanup_expired_sessions() == 2
        assert store.get_user_session(live.session_id) is not None


class TestChatHistory:
    """Tests for chat history storage."""

    def test_history_in_insertion_order(self, store: MemoryStore) -> None:
        store.save_chat_message("s1", message("question"))
        store.save_chat_message("s1", message("answer", MessageType.AI))

        history = store.get_chat_history("s1")

        check.equal([r.message.content for r in history], ["question", "answer"])
        check.equal({r.session_id for r in history}, {"s1"})
        check.not_equal(history[0].id, history[1].id)

    def test_unknown_session_is_empty(self, store: MemoryStore) -> None:
        assert store.get_chat_history("missing") == []

    def test_history_is_a_copy(self, store: MemoryStore) -> None:
        store.save_chat_message("s1", message("question"))

        store.get_chat_history("s1").clear()

        assert len(store.get_chat_history("s1")) == 1

    def test_list_sessions(self, store: MemoryStore) -> None:
        """Sessions are listed in order of their first message."""
        store.save_chat_message("s2", message("a"))
        store.save_chat_message("s1", message("b"))
        store.save_chat_message("s2", message("c"))

        assert store.list_chat_sessions() == ["s2", "s1"]

    def test_delete_session(self, store: MemoryStore) -> None:
        store.save_chat_message("s1", message("a"))
        store.save_chat_message("s2", message("b"))

        store.delete_chat_session("s1")
        store.delete_chat_session("unknown")

        check.equal(store.list_chat_sessions(), ["s2"])
        check.equal(store.get_chat_history("s1"), [])
