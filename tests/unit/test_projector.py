"""Unit tests for history projection and request building."""

import pytest
import pytest_check as check

from infera.chat.projector import build_request, project
from infera.models.schemas import Message, Role


def _messages(*senders: str) -> list[Message]:
    return [Message(id=i, sender=s, text=f"text {i}") for i, s in enumerate(senders, 1)]


class TestProject:
    """Tests for project()."""

    def test_empty_history(self) -> None:
        assert project([]) == []

    @pytest.mark.parametrize(
        "senders",
        [
            ("user",),
            ("user", "Infera"),
            ("Infera", "Infera", "user"),
            ("user", "bot", "someone else", "user"),
        ],
    )
    def test_same_length_and_roles(self, senders: tuple[str, ...]) -> None:
        """One turn per message; role is user exactly when the sender is user."""
        turns = project(_messages(*senders))

        assert len(turns) == len(senders)
        for sender, turn in zip(senders, turns, strict=True):
            check.equal(turn.role is Role.USER, sender == "user")

    def test_preserves_order_and_text(self) -> None:
        """Turn content follows message order exactly."""
        messages = _messages("user", "Infera", "user")

        turns = project(messages)

        assert [t.content for t in turns] == ["text 1", "text 2", "text 3"]

    def test_any_non_user_sender_is_model(self) -> None:
        """A sender that isn't literally 'user' is the model, even 'User'."""
        turns = project([Message(id=1, sender="User", text="x")])

        assert turns[0].role is Role.MODEL

    def test_deterministic(self) -> None:
        messages = _messages("user", "Infera")

        assert project(messages) == project(messages)


class TestBuildRequest:
    """Tests for build_request()."""

    def test_draft_is_last_and_only_once(self) -> None:
        """The new turn is appended after the history, exactly once."""
        history = _messages("user", "Infera")

        request = build_request(history, "2+2?")

        check.equal(len(request.turns), 3)
        check.equal(request.turns[-1].role, Role.USER)
        check.equal(request.turns[-1].content, "2+2?")
        check.equal(sum(t.content == "2+2?" for t in request.turns), 1)

    def test_repeated_text_in_history_is_kept(self) -> None:
        """A draft equal to an earlier message still adds its own turn."""
        history = [Message(id=1, sender="user", text="hi")]

        request = build_request(history, "hi")

        assert [t.content for t in request.turns] == ["hi", "hi"]

    def test_wire_format(self) -> None:
        """to_wire() produces the generateContent contents/parts shape."""
        history = [
            Message(id=1, sender="user", text="Hello"),
            Message(id=2, sender="Infera", text="Hi there"),
        ]

        wire = build_request(history, "2+2?").to_wire()

        assert wire == {
            "contents": [
                {"role": "user", "parts": [{"text": "Hello"}]},
                {"role": "model", "parts": [{"text": "Hi there"}]},
                {"role": "user", "parts": [{"text": "2+2?"}]},
            ]
        }
