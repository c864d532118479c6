"""NiceGUI interface - thin visualization layer for the conversation.

Responsibilities:
    - Chat message display with markdown rendering
    - Copy buttons on fenced code blocks
    - Typing indicator and disabled input while a reply is pending
    - "New Chat" reset

Contains no conversation logic. Forwards intents to the ConversationController.
"""
