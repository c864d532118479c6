"""Conversation state and the request/response round trip.

Responsibilities:
    - Message store seeded with the self-introduction and greeting
    - Projection of local history into role-tagged upstream turns
    - One-turn-at-a-time controller that reconciles replies and failures
    - HTTP transport to the Gemini generateContent endpoint

Knows nothing about NiceGUI; the UI drives it through intents.
"""

from infera.chat.config import ChatConfig, get_chat_config
from infera.chat.controller import (
    MALFORMED_RESPONSE_TEXT,
    TRANSPORT_ERROR_TEXT,
    Conversation,
    ConversationController,
)
from infera.chat.projector import build_request, project
from infera.chat.store import MessageStore, seed_messages
from infera.chat.transport import GeminiTransport, Transport, TransportError

__all__ = [
    "MALFORMED_RESPONSE_TEXT",
    "TRANSPORT_ERROR_TEXT",
    "ChatConfig",
    "Conversation",
    "ConversationController",
    "GeminiTransport",
    "MessageStore",
    "Transport",
    "TransportError",
    "build_request",
    "get_chat_config",
    "project",
    "seed_messages",
]
