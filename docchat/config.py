"""Application configuration with environment variable loading.

Pydantic-based settings for the webhook client and the web application.
Values are read from the environment (and a .env file) when a config
object is created, so tests can build configs with explicit values.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class WebhookConfig(BaseModel):
    """Configuration for the external workflow webhook.

    Attributes:
        chat_url: Endpoint that answers chat questions.
        documents_url: Endpoint that lists the indexed documents.
        timeout_seconds: Per-attempt timeout for chat calls.
        max_retries: Total number of chat attempts before giving up.
        retry_delay_base_ms: Base delay for exponential backoff between attempts.
        documents_timeout_seconds: Timeout for the document list call.
        probe_timeout_seconds: Timeout for the connectivity probe.
        offline_fallback: Answer with canned responses when the webhook is down.
    """

    chat_url: str = Field(
        default_factory=lambda: os.getenv(
            "WEBHOOK_CHAT_URL", "http://localhost:5678/webhook/chatbot-api"
        ),
        description="Chat webhook URL",
    )
    documents_url: str = Field(
        default_factory=lambda: os.getenv(
            "WEBHOOK_DOCUMENTS_URL", "http://localhost:5678/webhook/file-load-history"
        ),
        description="Document list webhook URL",
    )
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "90")),
        gt=0,
        description="Timeout for a single chat attempt",
    )
    max_retries: int = Field(
        default_factory=lambda: int(os.getenv("WEBHOOK_MAX_RETRIES", "2")),
        ge=1,
        le=10,
        description="Maximum number of chat attempts",
    )
    retry_delay_base_ms: int = Field(
        default_factory=lambda: int(os.getenv("WEBHOOK_RETRY_DELAY_BASE_MS", "1000")),
        ge=0,
        description="Base delay for exponential backoff in milliseconds",
    )
    documents_timeout_seconds: float = Field(default=3.0, gt=0)
    probe_timeout_seconds: float = Field(default=5.0, gt=0)
    offline_fallback: bool = Field(
        default_factory=lambda: _env_bool("WEBHOOK_OFFLINE_FALLBACK", True),
        description="Serve canned answers when the webhook is unreachable",
    )

    @field_validator("chat_url", "documents_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("Webhook URLs must start with http:// or https://")
        return v

    def backoff_seconds(self, attempt: int) -> float:
        """Delay to wait after the given failed attempt (1-based)."""
        return (2**attempt) * self.retry_delay_base_ms / 1000


class AppConfig(BaseModel):
    """Configuration for the web application.

    Attributes:
        session_ttl_hours: Lifetime of a login session.
        default_username: Username of the seeded account.
        default_password: Password of the seeded account.
        api_base_url: Base URL the UI uses to reach the API.
    """

    session_ttl_hours: int = Field(
        default_factory=lambda: int(os.getenv("AUTH_SESSION_TTL_HOURS", "24")),
        ge=1,
        le=24 * 30,
    )
    default_username: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_USERNAME", "demo.user"),
    )
    default_password: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_PASSWORD", "demo-password"),
    )
    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
    )

    @field_validator("default_username", "default_password")
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        """Validate that the seeded credentials are non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "Default credentials required. Set DEFAULT_USERNAME and DEFAULT_PASSWORD in .env"
            )
        return v.strip()

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_webhook_config() -> WebhookConfig:
    """Create webhook configuration from environment.

    Returns:
        Configured WebhookConfig instance.

    Raises:
        ValidationError: If an environment value is out of range.
    """
    return WebhookConfig()


def get_app_config() -> AppConfig:
    """Create application configuration from environment."""
    return AppConfig()
