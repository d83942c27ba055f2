"""Tests for conversation turns."""

from __future__ import annotations

from datetime import datetime

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.conversation import ConversationTurn


def test_turn_strips_timestamp_for_providers():
    turn = ConversationTurn(role='user', content='hi', timestamp=datetime(2024, 5, 1, 9, 30))
    assert turn.to_message() == ChatMessage(role='user', content='hi')


def test_dump_uses_iso_timestamps():
    turn = ConversationTurn(role='assistant', content='hello', timestamp=datetime(2024, 5, 1, 9, 30, 15))
    assert turn.model_dump(mode='json')['timestamp'] == '2024-05-01T09:30:15'
