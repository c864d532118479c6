"""HTTP transport for the Gemini ``generateContent`` endpoint."""

import logging
from typing import Any, Protocol

import httpx

from infera.chat.config import ChatConfig, get_chat_config
from infera.models.schemas import ConversationRequest

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the upstream call fails before a JSON payload is available."""

    pass


class Transport(Protocol):
    async def post_conversation(self, request: ConversationRequest) -> Any: ...


class GeminiTransport:
    """Posts the conversation to Gemini and returns the decoded JSON body.

    Only network failures and undecodable bodies raise. An error body with a
    non-2xx status is handed back to the caller like any other payload.
    """

    def __init__(self, config: ChatConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.request_timeout)

    async def post_conversation(self, request: ConversationRequest) -> Any:
        """Send the conversation upstream.

        Args:
            request: Ordered turns to send.

        Returns:
            The decoded JSON payload.

        Raises:
            TransportError: On connection errors or a non-JSON body.
        """
        try:
            response = await self._client.post(
                self._config.endpoint,
                params={"key": self._config.api_key},
                json=request.to_wire(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Connection failed: {e}") from e

        if response.is_error:
            logger.warning(f"Upstream returned HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from upstream (HTTP {response.status_code})") from e

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


# Module-level shared instance, one HTTP client for every open page
_transport: GeminiTransport | None = None


def get_transport() -> GeminiTransport:
    """Get or create the shared transport.

    Returns:
        The GeminiTransport instance.
    """
    global _transport
    if _transport is None:
        _transport = GeminiTransport(get_chat_config())
    return _transport


async def close_transport() -> None:
    """Close the shared transport, if one was created."""
    global _transport
    if _transport is not None:
        await _transport.close()
        _transport = None
