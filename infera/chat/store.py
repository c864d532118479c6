"""Ordered, append-only message store for a single conversation."""

import time
from collections.abc import Iterable, Iterator

from infera.models.schemas import USER_SENDER, Message


class MessageStore:
    """Holds the conversation in append order.

    Messages are only ever appended or replaced wholesale by ``reset``.
    Not safe for concurrent writers; all access happens on the UI event loop.
    """

    def __init__(self, seed: Iterable[Message] = ()) -> None:
        self._messages: list[Message] = list(seed)
        self._last_id = max((m.id for m in self._messages), default=0)

    def next_id(self) -> int:
        """Return a fresh id, strictly greater than any issued before."""
        self._last_id = max(time.time_ns(), self._last_id + 1)
        return self._last_id

    def new_message(self, sender: str, text: str) -> Message:
        return Message(id=self.next_id(), sender=sender, text=text)

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._last_id = max(self._last_id, message.id)

    def reset(self, seed: Iterable[Message]) -> None:
        self._messages = list(seed)
        self._last_id = max([self._last_id, *(m.id for m in self._messages)])

    def all(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())


def seed_messages(
    store: MessageStore, user_name: str, user_role: str, bot_name: str
) -> list[Message]:
    """Build the self-introduction and greeting every conversation starts with."""
    return [
        store.new_message(
            USER_SENDER, f"Hello, my name is {user_name} and I'm your {user_role}."
        ),
        store.new_message(
            bot_name,
            f"Hello {user_name}! I'm {bot_name}. How can I assist you today, {user_role}?",
        ),
    ]
