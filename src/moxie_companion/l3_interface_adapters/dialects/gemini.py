"""Google generative-language (Gemini) dialect. The key travels in the query string."""

from __future__ import annotations

from urllib.parse import quote

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatResult
from moxie_companion.l1_entities.errors import MalformedResponseError
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope
from moxie_companion.l3_interface_adapters.dialects.base import (
    JSON_HEADERS,
    MAX_OUTPUT_TOKENS,
    decode_object,
    dig,
    raise_for_error,
)

BASE_URL = 'https://generativelanguage.googleapis.com/v1beta/models'


def _wire_role(role: str) -> str:
    # Gemini only knows 'user' and 'model'; system prompts ride along as user turns.
    return 'model' if role == 'assistant' else 'user'


class GeminiDialect:
    def build(
        self,
        provider_id: str,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
        api_key: str,
    ) -> Envelope:
        url = f'{BASE_URL}/{quote(model, safe=".-_")}:generateContent?key={quote(api_key, safe="")}'
        return Envelope(
            url=url,
            headers=dict(JSON_HEADERS),
            body={
                'contents': [{'role': _wire_role(m.role), 'parts': [{'text': m.content}]} for m in messages],
                'generationConfig': {'temperature': temperature, 'maxOutputTokens': MAX_OUTPUT_TOKENS},
            },
        )

    def parse(self, body: bytes) -> ChatResult:
        payload = decode_object(body)
        raise_for_error(payload)
        text = dig(payload, 'candidates', 0, 'content', 'parts', 0, 'text')
        if not isinstance(text, str):
            raise MalformedResponseError()
        return ChatResult(text=text)
