"""Pydantic models for conversation state and the upstream API.

Models:
    - Message: One entry in the local conversation
    - Turn: Role-tagged entry in the upstream request
    - ConversationRequest: Ordered turns sent each round trip
    - GenerateContentResponse: The reply path we read from the upstream payload
    - TurnOutcome: How a send settled
"""

from infera.models.schemas import (
    USER_SENDER,
    ConversationRequest,
    GenerateContentResponse,
    MalformedUpstreamResponse,
    Message,
    Role,
    Turn,
    TurnOutcome,
    parse_reply,
)

__all__ = [
    "USER_SENDER",
    "ConversationRequest",
    "GenerateContentResponse",
    "MalformedUpstreamResponse",
    "Message",
    "Role",
    "Turn",
    "TurnOutcome",
    "parse_reply",
]
