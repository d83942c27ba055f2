"""Local Ollama ``/api/chat`` dialect."""

from __future__ import annotations

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatResult
from moxie_companion.l1_entities.errors import MalformedResponseError
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope
from moxie_companion.l3_interface_adapters.dialects.base import (
    JSON_HEADERS,
    decode_object,
    dig,
    plain_messages,
    raise_for_error,
)

DEFAULT_HOST = 'http://localhost:11434'
MALFORMED = 'Invalid response format from Ollama'


class OllamaDialect:
    def __init__(self, host: str = DEFAULT_HOST) -> None:
        self._host = host.rstrip('/')

    @property
    def url(self) -> str:
        return f'{self._host}/api/chat'

    def build(
        self,
        provider_id: str,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
        api_key: str,
    ) -> Envelope:
        return Envelope(
            url=self.url,
            headers=dict(JSON_HEADERS),
            body={
                'model': model,
                'messages': plain_messages(messages),
                'stream': False,
                'options': {'temperature': temperature},
            },
        )

    def parse(self, body: bytes) -> ChatResult:
        payload = decode_object(body, MALFORMED)
        raise_for_error(payload, source='Ollama')
        text = dig(payload, 'message', 'content')
        if not isinstance(text, str):
            raise MalformedResponseError(MALFORMED)
        return ChatResult(text=text)
