"""Conversation controller: one user turn from draft to settled reply.

A turn moves Idle -> Sending -> {Fulfilled | MalformedResponse |
TransportError} -> Idle. Every failure is turned into a bot message in the
conversation; nothing is raised to the caller. There is no retry and no
timeout at this layer: if the transport never settles, the conversation
stays in Sending.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from infera.chat.config import ChatConfig
from infera.chat.projector import build_request
from infera.chat.store import MessageStore, seed_messages
from infera.chat.transport import Transport, TransportError
from infera.models.schemas import (
    USER_SENDER,
    MalformedUpstreamResponse,
    Message,
    TurnOutcome,
    parse_reply,
)

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE_TEXT = "Sorry, I could not get a response. Please try again."
TRANSPORT_ERROR_TEXT = "An error occurred while connecting to the chatbot. Please try again later."


@dataclass
class Conversation:
    """State owned by one controller.

    Attributes:
        store: Messages in append order.
        pending_input: Draft text not yet sent.
        is_awaiting_reply: True while a turn is in flight.
        copied: Copy-confirmation flags keyed by code block.
    """

    store: MessageStore = field(default_factory=MessageStore)
    pending_input: str = ""
    is_awaiting_reply: bool = False
    copied: dict[str, bool] = field(default_factory=dict)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.store.all()


class ConversationController:
    """Applies user intents to a Conversation.

    Intents: ``update_draft``, ``submit``/``send_turn``, ``reset_conversation``
    and the copy-flag helpers. Observers registered with ``on_change`` are
    called after every state change.
    """

    def __init__(
        self,
        config: ChatConfig,
        transport: Transport,
        conversation: Conversation | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._listeners: list[Callable[[], None]] = []
        self.conversation = conversation or Conversation()
        if not len(self.conversation.store):
            self.conversation.store.reset(self._seed())

    @property
    def config(self) -> ChatConfig:
        return self._config

    @property
    def bot_name(self) -> str:
        return self._config.bot_name

    def on_change(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        # A page that went away must not break the turn that is settling.
        for listener in self._listeners:
            try:
                listener()
            except Exception:
                logger.exception("Conversation listener failed")

    def _seed(self) -> list[Message]:
        return seed_messages(
            self.conversation.store,
            user_name=self._config.user_name,
            user_role=self._config.user_role,
            bot_name=self._config.bot_name,
        )

    def _append(self, sender: str, text: str) -> Message:
        message = self.conversation.store.new_message(sender, text)
        self.conversation.store.append(message)
        return message

    def update_draft(self, text: str) -> None:
        # The input widget already shows the draft; no re-render per keystroke.
        self.conversation.pending_input = text

    async def submit(self) -> TurnOutcome:
        """Send whatever is in the draft."""
        return await self.send_turn(self.conversation.pending_input)

    async def send_turn(self, draft: str) -> TurnOutcome:
        """Run one turn.

        The user message is appended before the transport is called. The
        request carries the history as it was before that append, followed
        by the draft as the final user turn.

        Args:
            draft: Raw text from the input; surrounding whitespace is dropped.

        Returns:
            The TurnOutcome the turn settled with.
        """
        conversation = self.conversation
        prompt = draft.strip()
        if not prompt:
            return TurnOutcome.EMPTY_INPUT
        if conversation.is_awaiting_reply:
            logger.debug("Send ignored, a reply is still pending")
            return TurnOutcome.CONCURRENT_SEND_REJECTED

        history = conversation.store.all()
        self._append(USER_SENDER, prompt)
        conversation.pending_input = ""
        conversation.is_awaiting_reply = True
        self._notify()

        try:
            outcome = await self._exchange(history, prompt)
        finally:
            conversation.is_awaiting_reply = False
            self._notify()

        logger.info(f"Turn settled: {outcome.value} ({len(conversation.store)} messages)")
        return outcome

    async def _exchange(self, history: tuple[Message, ...], prompt: str) -> TurnOutcome:
        request = build_request(history, prompt)
        try:
            payload = await self._transport.post_conversation(request)
        except TransportError as e:
            logger.error(f"Error fetching bot response: {e}")
            self._append(self.bot_name, TRANSPORT_ERROR_TEXT)
            return TurnOutcome.TRANSPORT_ERROR
        except Exception as e:
            logger.exception(f"Unexpected transport failure: {e}")
            self._append(self.bot_name, TRANSPORT_ERROR_TEXT)
            return TurnOutcome.TRANSPORT_ERROR

        try:
            reply = parse_reply(payload)
        except MalformedUpstreamResponse as e:
            logger.error(f"Unexpected API response structure ({e}): {e.payload!r}")
            self._append(self.bot_name, MALFORMED_RESPONSE_TEXT)
            return TurnOutcome.MALFORMED_RESPONSE

        self._append(self.bot_name, reply)
        return TurnOutcome.FULFILLED

    def reset_conversation(self) -> None:
        """Start a new chat: fresh seed messages, empty draft, no copy flags."""
        conversation = self.conversation
        conversation.store.reset(self._seed())
        conversation.pending_input = ""
        conversation.copied.clear()
        self._notify()

    def mark_copied(self, key: str) -> None:
        self.conversation.copied[key] = True
        self._notify()

    def clear_copied(self, key: str) -> None:
        if self.conversation.copied.pop(key, None) is not None:
            self._notify()

    def is_copied(self, key: str) -> bool:
        return self.conversation.copied.get(key, False)
