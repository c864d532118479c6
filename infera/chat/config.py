"""Chat configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed chat.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class ChatConfig(BaseModel):
    """Configuration for the chat controller and its transport.

    Attributes:
        api_key: API key for the Gemini endpoint.
        base_url: API base URL, without the ``/models/...`` suffix.
        model_name: Model identifier to call.
        request_timeout: Seconds before the HTTP call gives up (None waits forever).
        bot_name: Display name of the assistant.
        user_name: Name the seed message introduces the user with.
        user_role: Role the seed message gives the user.
        app_version: Version shown in the sidebar.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini endpoint",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("GEMINI_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Model to use",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: os.getenv("INFERA_REQUEST_TIMEOUT") or None,
        validate_default=True,
        description="HTTP timeout in seconds, None for no timeout",
    )
    bot_name: str = Field(
        default_factory=lambda: os.getenv("INFERA_BOT_NAME", "Infera"),
        min_length=1,
    )
    user_name: str = Field(default_factory=lambda: os.getenv("INFERA_USER_NAME", "User 1"))
    user_role: str = Field(default_factory=lambda: os.getenv("INFERA_USER_ROLE", "Boss"))
    app_version: str = "1.0"

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float | None) -> float | None:
        """Validate that a configured timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be greater than 0")
        return v

    @field_validator("bot_name")
    @classmethod
    def validate_bot_name(cls, v: str) -> str:
        """The bot can't share the user's sender tag."""
        if v == "user":
            raise ValueError("bot_name must differ from 'user'")
        return v

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model_name}:generateContent"


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If no API key is set or a value is invalid.
    """
    return ChatConfig()
