"""Textual Message subclasses — contracts between the gateway/controller and the App."""

from __future__ import annotations

from textual.message import Message


class AssistantReply(Message):
    """Posted when the gateway delivers a reply (already appended to the conversation)."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text


class ChatError(Message):
    """Posted when a request is rejected or fails."""

    def __init__(self, error: str) -> None:
        super().__init__()
        self.error = error


class ProcessingState(Message):
    """Posted on every Idle ↔ Pending transition of the gateway."""

    def __init__(self, active: bool) -> None:
        super().__init__()
        self.active = active


class ProviderSwitched(Message):
    def __init__(self, provider: str) -> None:
        super().__init__()
        self.provider = provider


class TokenUsage(Message):
    """Posted after a reply when the provider reported token counts."""

    def __init__(self, input_tokens: int, output_tokens: int, cost: float) -> None:
        super().__init__()
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens
        self.cost = cost
