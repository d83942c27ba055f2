"""OpenAI-compatible chat completions dialect — OpenAI, DeepSeek and GroqCloud."""

from __future__ import annotations

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatResult
from moxie_companion.l1_entities.errors import MalformedResponseError, UnsupportedProviderError
from moxie_companion.l1_entities.provider import DEEPSEEK, GROQ, OPENAI
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope
from moxie_companion.l3_interface_adapters.dialects.base import (
    JSON_HEADERS,
    decode_object,
    dig,
    plain_messages,
    raise_for_error,
    token_count,
)

ENDPOINTS = {
    OPENAI: 'https://api.openai.com/v1/chat/completions',
    DEEPSEEK: 'https://api.deepseek.com/v1/chat/completions',
    GROQ: 'https://api.groq.com/openai/v1/chat/completions',
}


class OpenAICompatDialect:
    def build(
        self,
        provider_id: str,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
        api_key: str,
    ) -> Envelope:
        url = ENDPOINTS.get(provider_id)
        if url is None:
            raise UnsupportedProviderError(provider_id)
        return Envelope(
            url=url,
            headers={**JSON_HEADERS, 'Authorization': f'Bearer {api_key}'},
            body={
                'model': model,
                'messages': plain_messages(messages),
                'temperature': temperature,
                'stream': False,
            },
        )

    def parse(self, body: bytes) -> ChatResult:
        payload = decode_object(body)
        raise_for_error(payload)
        text = dig(payload, 'choices', 0, 'message', 'content')
        if not isinstance(text, str):
            raise MalformedResponseError()
        usage = payload.get('usage')
        if not isinstance(usage, dict):
            return ChatResult(text=text)
        return ChatResult(
            text=text,
            input_tokens=token_count(usage.get('prompt_tokens')),
            output_tokens=token_count(usage.get('completion_tokens')),
        )
