"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Message store, history projection, turn controller, transport, config
    - models/: Reply parsing
    - ui/: Markdown helpers and clipboard reporting

Uses a scriptable FakeTransport in place of the network.
"""
