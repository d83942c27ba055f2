"""Chat request/result entities shared by every provider dialect."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pydantic import BaseModel, field_validator, model_validator

from moxie_companion.l1_entities.chat_message import ChatMessage

DEFAULT_TEMPERATURE = 0.7
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


class ChatRequest(BaseModel):
    """Neutral request: either a single prompt or a multi-turn conversation.

    An empty or missing ``model`` means "use the provider's default model".
    Temperature is clamped into [0, 2] rather than rejected; NaN falls back to the default.
    """

    prompt: str | None = None
    messages: list[ChatMessage] | None = None
    model: str | None = None
    temperature: float = DEFAULT_TEMPERATURE

    @field_validator('temperature')
    @classmethod
    def _clamp_temperature(cls, value: float) -> float:
        if math.isnan(value):
            return DEFAULT_TEMPERATURE
        return min(max(value, MIN_TEMPERATURE), MAX_TEMPERATURE)

    @model_validator(mode='after')
    def _exactly_one_form(self) -> ChatRequest:
        if (self.prompt is None) == (self.messages is None):
            raise ValueError('ChatRequest needs exactly one of prompt or messages')
        return self

    @classmethod
    def single(cls, prompt: str, model: str | None = None, temperature: float = DEFAULT_TEMPERATURE) -> ChatRequest:
        return cls(prompt=prompt, model=model, temperature=temperature)

    @classmethod
    def conversation(
        cls,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> ChatRequest:
        return cls(messages=list(messages), model=model, temperature=temperature)

    def to_messages(self) -> list[ChatMessage]:
        """Neutral message sequence; the single-prompt form becomes one user turn."""
        if self.messages is not None:
            return list(self.messages)
        return [ChatMessage(role='user', content=self.prompt or '')]

    def resolve_model(self, default_model: str) -> str:
        return self.model or default_model


@dataclass(frozen=True)
class ChatResult:
    """Assistant reply plus token usage (both counts None when unreported)."""

    text: str
    input_tokens: int | None = None
    output_tokens: int | None = None

    @property
    def has_usage(self) -> bool:
        return self.input_tokens is not None and self.output_tokens is not None

    @property
    def total_tokens(self) -> int:
        return (self.input_tokens or 0) + (self.output_tokens or 0)
