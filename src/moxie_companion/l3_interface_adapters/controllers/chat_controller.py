"""ChatController — owns the conversation and feeds gateway results into the usage log."""

from __future__ import annotations

import json
import logging
import time
import uuid
from pathlib import Path

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import DEFAULT_TEMPERATURE, ChatRequest
from moxie_companion.l1_entities.conversation import ConversationTurn
from moxie_companion.l1_entities.gateway_events import (
    ErrorOccurred,
    GatewayEvent,
    ProviderChanged,
    ResponseReceived,
    TokensUsed,
)
from moxie_companion.l1_entities.pricing import estimate_cost
from moxie_companion.l2_use_cases.usage_use_case import UsageLog
from moxie_companion.l3_interface_adapters.controllers.provider_gateway import ProviderGateway

log = logging.getLogger('moxie.chat')


class ChatController:
    """Central chat orchestrator bridging the gateway to the TUI.

    Subscribes to the gateway on construction, so its state is already
    updated when listeners registered later (the App) see the same event.
    """

    def __init__(
        self,
        gateway: ProviderGateway,
        usage_log: UsageLog | None = None,
        *,
        model: str = '',
        temperature: float = DEFAULT_TEMPERATURE,
        system_prompt: str = '',
        child_id: str = '',
    ) -> None:
        self._gateway = gateway
        self._usage = usage_log
        self.model = model
        self.temperature = temperature
        self.system_prompt = system_prompt
        self.child_id = child_id
        self.session_id = uuid.uuid4().hex

        self.turns: list[ConversationTurn] = []
        self.last_error: str = ''
        self.last_tokens: TokensUsed | None = None
        self.session_tokens: int = 0
        self.session_cost: float = 0.0
        self._sent_at: float | None = None

        gateway.subscribe(self.on_gateway_event)

    @property
    def gateway(self) -> ProviderGateway:
        return self._gateway

    @property
    def effective_model(self) -> str:
        return self.model or self._gateway.default_model()

    def select_model(self, model: str) -> None:
        self.model = model

    # --- Commands ---

    def send_message(self, text: str) -> bool:
        """Append a user turn and send the conversation. Returns False when nothing was sent."""
        text = text.strip()
        if not text or self._gateway.is_processing:
            return False
        self.turns.append(ConversationTurn(role='user', content=text))
        # A rejected send keeps the turn so regenerate can retry it after a config fix.
        return self._dispatch()

    def regenerate_last_response(self) -> bool:
        """Drop everything after the last user turn and send it again."""
        if self._gateway.is_processing:
            return False
        for idx in range(len(self.turns) - 1, -1, -1):
            if self.turns[idx].role == 'user':
                del self.turns[idx + 1 :]
                return self._dispatch()
        return False

    def clear(self) -> None:
        self.turns.clear()
        self.last_error = ''
        self.last_tokens = None

    def export_json(self, path: Path) -> Path:
        data = [turn.model_dump(mode='json') for turn in self.turns]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
        log.info('Exported %d turns to %s', len(data), path)
        return path

    def build_request(self) -> ChatRequest:
        messages: list[ChatMessage] = []
        if self.system_prompt.strip():
            messages.append(ChatMessage(role='system', content=self.system_prompt))
        messages.extend(turn.to_message() for turn in self.turns)
        return ChatRequest.conversation(messages, model=self.model or None, temperature=self.temperature)

    def _dispatch(self) -> bool:
        self.last_error = ''
        self._sent_at = time.monotonic()
        return self._gateway.send(self.build_request()) is not None

    # --- Gateway events ---

    def on_gateway_event(self, event: GatewayEvent) -> None:
        if isinstance(event, ResponseReceived):
            self.turns.append(ConversationTurn(role='assistant', content=event.text))
        elif isinstance(event, ErrorOccurred):
            self.last_error = event.message
        elif isinstance(event, TokensUsed):
            self._on_tokens(event)
        elif isinstance(event, ProviderChanged):
            if self.model and self.model not in self._gateway.available_models():
                log.info('Model %s not offered by %s; using provider default', self.model, event.provider)
                self.model = ''

    def _on_tokens(self, event: TokensUsed) -> None:
        tokens = event.input_tokens + event.output_tokens
        self.last_tokens = event
        self.session_tokens += tokens
        self.session_cost += estimate_cost(tokens, event.model)
        duration = int(time.monotonic() - self._sent_at) if self._sent_at is not None else 0
        if self._usage is not None:
            self._usage.record(
                child_id=self.child_id,
                feature='chat',
                model=event.model,
                tokens=tokens,
                session_id=self.session_id,
                duration_seconds=duration,
            )
