"""Conversation entity — chat turns with wall-clock timestamps."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from moxie_companion.l1_entities.chat_message import ChatMessage


class ConversationTurn(ChatMessage):
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)
