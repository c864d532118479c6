"""Test package for Infera chat.

Structure:
    - unit/: Store, projector, controller, transport, config, markdown
    - integration/: Controller over the real transport, FastAPI host app

No network access: the upstream endpoint is replaced by httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
