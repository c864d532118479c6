"""FastAPI host for the chat UI.

Endpoints:
    - GET /health: Service health status
    - /: NiceGUI chat page (mounted in infera.main)
"""

from infera.api.app import app, create_app

__all__ = ["app", "create_app"]
