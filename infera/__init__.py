"""Infera - single-page chat with a Gemini-backed assistant.

Combines NiceGUI for the chat page, httpx for the upstream call,
FastAPI as the host application, and Pydantic for configuration and
response validation.

Components:
    - chat: Message store, history projection, turn controller, transport
    - models: Conversation records and upstream schemas
    - ui: Web interface for the conversation
    - api: Host application and health endpoint
"""

__version__ = "1.0.0"
