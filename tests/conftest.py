"""Pytest fixtures and shared test configuration.

Fixtures:
    - chat_config: ChatConfig with a dummy key and the default names
    - fake_transport: Scriptable transport recording every request
    - controller: ConversationController wired to fake_transport
    - async_client: HTTPX client for the FastAPI host app
    - user: simulated browser user from NiceGUI's testing plugin

Implements async fixtures with proper cleanup.
"""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from infera.api import app
from infera.chat.config import ChatConfig
from infera.chat.controller import ConversationController
from infera.chat.transport import TransportError
from infera.models.schemas import ConversationRequest

pytest_plugins = ["nicegui.testing.user_plugin"]


def gemini_payload(text: str) -> dict[str, Any]:
    """Minimal successful generateContent body."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ]
    }


class FakeTransport:
    """Transport double.

    Returns ``payload`` or raises ``error``. When ``gate`` is set, each call
    waits for it before settling so tests can observe the Sending state.
    """

    def __init__(self) -> None:
        self.payload: Any = gemini_payload("4")
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.requests: list[ConversationRequest] = []

    async def post_conversation(self, request: ConversationRequest) -> Any:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def chat_config() -> ChatConfig:
    """Return config that doesn't depend on the environment."""
    return ChatConfig(
        api_key="test-key",
        base_url="https://example.test/v1beta",
        model_name="gemini-2.0-flash",
        bot_name="Infera",
        user_name="User 1",
        user_role="Boss",
        request_timeout=None,
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def controller(chat_config: ChatConfig, fake_transport: FakeTransport) -> ConversationController:
    return ConversationController(chat_config, fake_transport)


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("Connection failed: refused")


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
