"""Anthropic Messages API dialect."""

from __future__ import annotations

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatResult
from moxie_companion.l1_entities.errors import MalformedResponseError
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope
from moxie_companion.l3_interface_adapters.dialects.base import (
    JSON_HEADERS,
    MAX_OUTPUT_TOKENS,
    decode_object,
    dig,
    plain_messages,
    raise_for_error,
    token_count,
)

ENDPOINT = 'https://api.anthropic.com/v1/messages'
API_VERSION = '2023-06-01'


class AnthropicDialect:
    """The Messages API rejects ``system`` turns, so they are lifted into the top-level ``system`` field."""

    def build(
        self,
        provider_id: str,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
        api_key: str,
    ) -> Envelope:
        system_parts = [m.content for m in messages if m.role == 'system']
        turns = [m for m in messages if m.role != 'system']
        body: dict = {
            'model': model,
            'messages': plain_messages(turns),
            'max_tokens': MAX_OUTPUT_TOKENS,
            'temperature': temperature,
        }
        if system_parts:
            body['system'] = '\n\n'.join(system_parts)
        return Envelope(
            url=ENDPOINT,
            headers={**JSON_HEADERS, 'x-api-key': api_key, 'anthropic-version': API_VERSION},
            body=body,
        )

    def parse(self, body: bytes) -> ChatResult:
        payload = decode_object(body)
        raise_for_error(payload)
        text = dig(payload, 'content', 0, 'text')
        if not isinstance(text, str):
            raise MalformedResponseError()
        usage = payload.get('usage')
        if not isinstance(usage, dict):
            return ChatResult(text=text)
        return ChatResult(
            text=text,
            input_tokens=token_count(usage.get('input_tokens')),
            output_tokens=token_count(usage.get('output_tokens')),
        )
