"""Unit tests for reply parsing."""

import pytest

from infera.models.schemas import MalformedUpstreamResponse, Message, parse_reply
from tests.conftest import gemini_payload


class TestParseReply:
    """Tests for parse_reply()."""

    def test_extracts_first_part_text(self) -> None:
        assert parse_reply(gemini_payload("Hello!")) == "Hello!"

    def test_ignores_extra_candidates_and_parts(self) -> None:
        """Only candidates[0].content.parts[0] is read."""
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"inlineData": {}}]}},
                {"unexpected": True},
            ],
            "usageMetadata": {"totalTokenCount": 12},
        }

        assert parse_reply(payload) == "first"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            None,
            [],
            "text",
            {"candidates": []},
            {"candidates": None},
            {"candidates": [{}]},
            {"candidates": ["oops"]},
            {"candidates": [{"content": None}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{}]}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
            {"error": {"code": 400, "message": "API key not valid"}},
        ],
    )
    def test_malformed_payloads(self, payload: object) -> None:
        """Any missing or wrongly typed segment is reported, never crashes."""
        with pytest.raises(MalformedUpstreamResponse) as exc_info:
            parse_reply(payload)

        assert exc_info.value.payload is payload


class TestMessage:
    """Tests for the Message record."""

    def test_is_user(self) -> None:
        assert Message(id=1, sender="user", text="x").is_user
        assert not Message(id=2, sender="Infera", text="x").is_user

    def test_frozen(self) -> None:
        """Message text can't change after creation."""
        message = Message(id=1, sender="user", text="x")

        with pytest.raises(ValueError):
            message.text = "y"
