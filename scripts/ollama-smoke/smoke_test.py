"""Smoke test: drive ProviderGateway against a real local Ollama.

Run on a machine (or container) with ``ollama serve`` up and the default
model pulled (``ollama pull llama3.2``). Set OLLAMA_HOST to point elsewhere.
"""

from __future__ import annotations

import asyncio
import os

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.chat_request import ChatRequest
from moxie_companion.l1_entities.gateway_events import (
    ErrorOccurred,
    ProcessingChanged,
    ResponseReceived,
    TokensUsed,
)
from moxie_companion.l3_interface_adapters.controllers.provider_gateway import ProviderGateway
from moxie_companion.l3_interface_adapters.dialects import build_dialect_table
from moxie_companion.l3_interface_adapters.gateways.httpx_chat_transport import HttpxChatTransport


async def main() -> None:
    print('--- ProviderGateway / Ollama smoke test ---')

    host = os.environ.get('OLLAMA_HOST', 'http://localhost:11434')
    events: list = []
    gateway = ProviderGateway(HttpxChatTransport(timeout=120.0), dialects=build_dialect_table(host), provider='ollama')
    gateway.subscribe(events.append)

    print(f'[1/4] Sending single prompt to {host}...')
    gateway.send(ChatRequest.single('Reply with the single word: beep'))
    assert gateway.is_processing, 'FAIL: gateway did not enter processing state'
    await gateway.drain()
    errors = [e for e in events if isinstance(e, ErrorOccurred)]
    assert not errors, f'FAIL: {errors[0].error}'
    replies = [e for e in events if isinstance(e, ResponseReceived)]
    assert len(replies) == 1, f'FAIL: expected one reply, got {len(replies)}'
    print(f'       OK — reply: {replies[0].text.strip()[:60]!r}')

    print('[2/4] Checking event order...')
    kinds = [type(e).__name__ for e in events]
    assert kinds[:3] == ['ProcessingChanged', 'ProcessingChanged', 'ResponseReceived'], f'FAIL: {kinds}'
    assert [e.is_processing for e in events if isinstance(e, ProcessingChanged)] == [True, False]
    print(f'       OK — {" → ".join(kinds)}')

    print('[3/4] Checking token counts...')
    tokens = [e for e in events if isinstance(e, TokensUsed)]
    assert tokens and tokens[0].input_tokens > 0, 'FAIL: Ollama reported no prompt tokens'
    print(f'       OK — {tokens[0].input_tokens}→{tokens[0].output_tokens} tokens on {tokens[0].model}')

    print('[4/4] Sending multi-turn conversation...')
    events.clear()
    gateway.send(
        ChatRequest.conversation(
            [
                ChatMessage(role='system', content='You are terse.'),
                ChatMessage(role='user', content='My name is Ava.'),
                ChatMessage(role='assistant', content='Hi Ava.'),
                ChatMessage(role='user', content='What is my name?'),
            ]
        )
    )
    await gateway.drain()
    replies = [e for e in events if isinstance(e, ResponseReceived)]
    assert replies, f'FAIL: {[e for e in events if isinstance(e, ErrorOccurred)]}'
    print(f'       OK — reply: {replies[0].text.strip()[:60]!r}')

    await gateway.aclose()
    print('\nSUCCESS: ProviderGateway round-trips through a live Ollama server')


if __name__ == '__main__':
    asyncio.run(main())
