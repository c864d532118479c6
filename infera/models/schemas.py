"""Conversation records and upstream request/response schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

USER_SENDER = "user"


class Role(str, Enum):
    """Roles understood by the upstream model."""

    USER = "user"
    MODEL = "model"


class TurnOutcome(str, Enum):
    """How a single call to ``send_turn`` settled."""

    FULFILLED = "fulfilled"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_ERROR = "transport_error"
    EMPTY_INPUT = "empty_input"
    CONCURRENT_SEND_REJECTED = "concurrent_send_rejected"


class Message(BaseModel):
    """One entry in the conversation.

    Attributes:
        id: Unique, increasing token used for ordering and UI keys.
        sender: ``"user"`` or the bot's display name.
        text: Raw message text, may contain markdown and code fences.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    sender: str
    text: str

    @property
    def is_user(self) -> bool:
        return self.sender == USER_SENDER


class Turn(BaseModel):
    """A role-tagged turn in the upstream request."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ConversationRequest(BaseModel):
    """Transport-independent request body: the full ordered history."""

    turns: list[Turn] = Field(default_factory=list)

    def to_wire(self) -> dict:
        """Render the body in the ``generateContent`` wire format."""
        return {
            "contents": [
                {"role": turn.role.value, "parts": [{"text": turn.content}]}
                for turn in self.turns
            ]
        }


class Part(BaseModel):
    text: str = Field(..., min_length=1)


class Content(BaseModel):
    parts: list[Part] = Field(..., min_length=1)
    role: str | None = None


class Candidate(BaseModel):
    content: Content


class GenerateContentResponse(BaseModel):
    """The subset of the ``generateContent`` response we rely on.

    Unknown fields (usage metadata, safety ratings, ...) are ignored.
    """

    candidates: list[Candidate] = Field(..., min_length=1)

    @property
    def reply_text(self) -> str:
        return self.candidates[0].content.parts[0].text


class MalformedUpstreamResponse(Exception):
    """Raised when a payload lacks ``candidates[0].content.parts[0].text``."""

    def __init__(self, payload: object, reason: str) -> None:
        super().__init__(reason)
        self.payload = payload


def parse_reply(payload: object) -> str:
    """Extract the reply text from an upstream payload.

    Only the first candidate and its first part are validated; later
    entries may be in any shape.

    Args:
        payload: Decoded JSON body returned by the transport.

    Returns:
        The non-empty reply string.

    Raises:
        MalformedUpstreamResponse: If any segment of the path is missing,
            of the wrong type, or the text is empty.
    """
    if not isinstance(payload, dict):
        raise MalformedUpstreamResponse(payload, "payload is not an object")

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise MalformedUpstreamResponse(payload, "no candidates in payload")

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        raise MalformedUpstreamResponse(payload, "first candidate has no content parts")

    try:
        response = GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"parts": [parts[0]]}}]}
        )
    except ValidationError as e:
        raise MalformedUpstreamResponse(payload, str(e)) from e

    return response.reply_text
