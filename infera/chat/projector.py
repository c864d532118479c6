"""Projection of local history into the upstream request shape."""

from collections.abc import Iterable

from infera.models.schemas import ConversationRequest, Message, Role, Turn


def project(messages: Iterable[Message]) -> list[Turn]:
    """Map messages to role-tagged turns.

    ``user`` maps to ``Role.USER``; every other sender is the model. The
    whole history is kept, in order.
    """
    return [
        Turn(role=Role.USER if message.is_user else Role.MODEL, content=message.text)
        for message in messages
    ]


def build_request(history: Iterable[Message], draft: str) -> ConversationRequest:
    """Build the request for a new turn.

    Args:
        history: Messages that existed before the draft was appended.
        draft: The text being sent; always becomes the last turn.

    Returns:
        ConversationRequest with the projected history followed by the draft.
    """
    turns = project(history)
    turns.append(Turn(role=Role.USER, content=draft))
    return ConversationRequest(turns=turns)
