"""Unit tests for WebhookConfig and AppConfig.

Tests validation rules and environment variable loading.
"""

import pytest
from pydantic import ValidationError

from docchat.config import AppConfig, WebhookConfig, get_app_config, get_webhook_config


class TestWebhookConfig:
    """Tests for WebhookConfig validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Config uses documented defaults when nothing is set."""
        for name in (
            "WEBHOOK_CHAT_URL",
            "WEBHOOK_DOCUMENTS_URL",
            "WEBHOOK_TIMEOUT_SECONDS",
            "WEBHOOK_MAX_RETRIES",
            "WEBHOOK_RETRY_DELAY_BASE_MS",
            "WEBHOOK_OFFLINE_FALLBACK",
        ):
            monkeypatch.delenv(name, raising=False)

        config = get_webhook_config()

        assert config.chat_url == "http://localhost:5678/webhook/chatbot-api"
        assert config.timeout_seconds == 90
        assert config.max_retries == 2
        assert config.retry_delay_base_ms == 1000
        assert config.offline_fallback is True

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Config picks up values from environment variables."""
        monkeypatch.setenv("WEBHOOK_CHAT_URL", "https://flows.example.com/webhook/chat")
        monkeypatch.setenv("WEBHOOK_MAX_RETRIES", "5")
        monkeypatch.setenv("WEBHOOK_OFFLINE_FALLBACK", "false")

        config = get_webhook_config()

        assert config.chat_url == "https://flows.example.com/webhook/chat"
        assert config.max_retries == 5
        assert config.offline_fallback is False

    def test_rejects_relative_url(self) -> None:
        """Webhook URLs must be absolute http(s) URLs."""
        with pytest.raises(ValidationError) as exc_info:
            WebhookConfig(chat_url="/webhook/chat")

        assert "http://" in str(exc_info.value)

    def test_strips_url_whitespace(self) -> None:
        config = WebhookConfig(chat_url="  https://flows.example.com/chat  ")

        assert config.chat_url == "https://flows.example.com/chat"

    def test_rejects_zero_retries(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValidationError) as exc_info:
            WebhookConfig(max_retries=0)

        assert "max_retries" in str(exc_info.value)

    def test_rejects_too_many_retries(self) -> None:
        with pytest.raises(ValidationError):
            WebhookConfig(max_retries=11)

    def test_rejects_negative_delay(self) -> None:
        with pytest.raises(ValidationError):
            WebhookConfig(retry_delay_base_ms=-1)

    @pytest.mark.parametrize(
        ("attempt", "expected"),
        [(1, 2.0), (2, 4.0), (3, 8.0)],
    )
    def test_backoff_doubles(self, attempt: int, expected: float) -> None:
        """Backoff after attempt n is 2**n times the base delay."""
        config = WebhookConfig(retry_delay_base_ms=1000)

        assert config.backoff_seconds(attempt) == expected


class TestAppConfig:
    """Tests for AppConfig validation."""

    def test_explicit_values(self) -> None:
        config = AppConfig(
            default_username="alice",
            default_password="pw",
            session_ttl_hours=2,
            api_base_url="http://api.test/",
        )

        assert config.default_username == "alice"
        assert config.session_ttl_hours == 2
        assert config.api_base_url == "http://api.test"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_USERNAME", "env.user")
        monkeypatch.setenv("AUTH_SESSION_TTL_HOURS", "8")

        config = get_app_config()

        assert config.default_username == "env.user"
        assert config.session_ttl_hours == 8

    def test_rejects_blank_password(self) -> None:
        """Seeded credentials must not be blank."""
        with pytest.raises(ValidationError) as exc_info:
            AppConfig(default_password="   ")

        assert "Default credentials required" in str(exc_info.value)

    def test_strips_username(self) -> None:
        config = AppConfig(default_username="  bob  ")

        assert config.default_username == "bob"

    def test_rejects_zero_ttl(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(session_ttl_hours=0)
