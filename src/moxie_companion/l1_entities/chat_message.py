"""Chat message entity — the provider-neutral conversation turn."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Role = Literal['system', 'user', 'assistant']


class ChatMessage(BaseModel):
    """A single message in an LLM conversation. Index 0 of a sequence is the oldest."""

    role: Role
    content: str
