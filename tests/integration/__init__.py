"""Integration tests for components working together.

Coverage:
    - Full turns through ConversationController and GeminiTransport
    - FastAPI host application endpoints

The Gemini endpoint is simulated with httpx.MockTransport.
"""
