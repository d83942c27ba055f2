"""Shared contract and JSON helpers for provider wire dialects."""

from __future__ import annotations

import json
from typing import Any, Protocol

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatResult
from moxie_companion.l1_entities.errors import MalformedResponseError, ProviderAPIError
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope

JSON_HEADERS = {'Content-Type': 'application/json'}
MAX_OUTPUT_TOKENS = 4096


class Dialect(Protocol):
    """Builds the envelope for a provider and parses its reply body."""

    def build(
        self,
        provider_id: str,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
        api_key: str,
    ) -> Envelope: ...

    def parse(self, body: bytes) -> ChatResult: ...


def decode_object(body: bytes, malformed_message: str = 'Invalid response format') -> dict[str, Any]:
    """Decode *body* as a JSON object or raise MalformedResponseError."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponseError(malformed_message) from e
    if not isinstance(payload, dict):
        raise MalformedResponseError(malformed_message)
    return payload


def raise_for_error(payload: dict[str, Any], source: str = 'API') -> None:
    """Raise ProviderAPIError when the payload carries a top-level ``error``."""
    if 'error' not in payload:
        return
    error = payload['error']
    if isinstance(error, dict):
        message = error.get('message')
        raise ProviderAPIError(message if isinstance(message, str) else json.dumps(error), source=source)
    raise ProviderAPIError(str(error), source=source)


def dig(payload: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists; None as soon as a step is missing or mistyped."""
    node = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict):
            return None
        node = node[step] if isinstance(step, int) else node.get(step)
    return node


def token_count(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def plain_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    return [{'role': m.role, 'content': m.content} for m in messages]
