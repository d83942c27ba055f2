"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from moxie_companion.l1_entities.config import AppConfig
from moxie_companion.l1_entities.games import GameResult
from moxie_companion.l1_entities.gateway_events import (
    ErrorOccurred,
    GatewayEvent,
    ProcessingChanged,
    ResponseReceived,
    TokensUsed,
)
from moxie_companion.l1_entities.usage import UsageRecord
from moxie_companion.l2_use_cases.ports.chat_transport import Envelope, TransportErrorKind, TransportReply
from moxie_companion.l4_frameworks_and_drivers.config import build_app_config

# --- Reply helpers ---


def json_reply(payload: dict, status: int = 200) -> TransportReply:
    return TransportReply(status_code=status, body=json.dumps(payload).encode('utf-8'))


def openai_reply(text: str = 'ok', prompt_tokens: int | None = 12, completion_tokens: int | None = 7) -> TransportReply:
    payload: dict = {'choices': [{'message': {'role': 'assistant', 'content': text}}]}
    if prompt_tokens is not None and completion_tokens is not None:
        payload['usage'] = {'prompt_tokens': prompt_tokens, 'completion_tokens': completion_tokens}
    return json_reply(payload)


def ollama_reply(text: str = 'Hello from llama') -> TransportReply:
    return json_reply({'model': 'llama3.2', 'message': {'role': 'assistant', 'content': text}, 'done': True})


def refused_reply() -> TransportReply:
    return TransportReply(error=TransportErrorKind.CONNECTION_REFUSED, error_detail='Connection refused')


# --- Protocol-conforming Fakes ---


class FakeTransport:
    """Fake ChatTransport. Replies immediately, or holds each call until resolved by the test."""

    def __init__(self, reply: TransportReply | None = None, hold: bool = False, ignore_cancel: bool = False):
        self.reply = reply or ollama_reply()
        self.hold = hold
        self.ignore_cancel = ignore_cancel
        self.envelopes: list[Envelope] = []
        self.pending: list[asyncio.Future[TransportReply]] = []

    async def post(self, envelope: Envelope) -> TransportReply:
        self.envelopes.append(envelope)
        if not self.hold:
            return self.reply
        fut: asyncio.Future[TransportReply] = asyncio.get_running_loop().create_future()
        self.pending.append(fut)
        if not self.ignore_cancel:
            return await fut
        # Simulates a transport that cannot be interrupted: the reply still arrives later.
        while True:
            try:
                return await asyncio.shield(fut)
            except asyncio.CancelledError:
                if fut.done():
                    return fut.result()

    def resolve(self, index: int, reply: TransportReply) -> None:
        self.pending[index].set_result(reply)


class EventRecorder:
    """Gateway listener that keeps every event in order."""

    def __init__(self):
        self.events: list[GatewayEvent] = []

    def __call__(self, event: GatewayEvent) -> None:
        self.events.append(event)

    def of_type(self, kind: type) -> list:
        return [e for e in self.events if isinstance(e, kind)]

    @property
    def processing_timeline(self) -> list[bool]:
        return [e.is_processing for e in self.of_type(ProcessingChanged)]

    @property
    def errors(self) -> list[str]:
        return [e.message for e in self.of_type(ErrorOccurred)]

    @property
    def replies(self) -> list[str]:
        return [e.text for e in self.of_type(ResponseReceived)]

    @property
    def tokens(self) -> list[tuple[int, int]]:
        return [(e.input_tokens, e.output_tokens) for e in self.of_type(TokensUsed)]


class FakeUsageRepository:
    def __init__(self, records: list[UsageRecord] | None = None):
        self.records: list[UsageRecord] = list(records or [])
        self.replace_calls = 0

    def append(self, record: UsageRecord) -> None:
        self.records.append(record)

    def load_all(self) -> list[UsageRecord]:
        return list(self.records)

    def replace_all(self, records: list[UsageRecord]) -> None:
        self.replace_calls += 1
        self.records = list(records)


class FakeGameResultRepository:
    def __init__(self, results: list[GameResult] | None = None):
        self.results: list[GameResult] = list(results or [])

    def append(self, result: GameResult) -> None:
        self.results.append(result)

    def load_all(self) -> list[GameResult]:
        return list(self.results)


class FakeContainerRuntime:
    """In-memory ContainerRuntime that records every mutating call."""

    def __init__(self, daemon: bool = True, running: bool = False):
        self.daemon = daemon
        self.running = running
        self.calls: list[tuple] = []

    def is_daemon_running(self) -> bool:
        return self.daemon

    def is_container_running(self, name: str) -> bool:
        return self.running

    def run_container(self, name: str, image: str, ports: list[str], volumes: list[str]) -> str:
        self.calls.append(('run', name, image, tuple(ports), tuple(volumes)))
        self.running = True
        return 'abc123'

    def stop_container(self, name: str) -> str:
        self.calls.append(('stop', name))
        self.running = False
        return name

    def restart_container(self, name: str) -> str:
        self.calls.append(('restart', name))
        self.running = True
        return name

    def pull_image(self, image: str) -> str:
        self.calls.append(('pull', image))
        return 'Status: Image is up to date'


# --- Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    config_file = tmp_path / 'config.yaml'
    config_file.write_text(
        'chat:\n'
        '  provider: groq\n'
        '  temperature: 0.3\n'
        '  child_id: ava\n'
        'storage:\n'
        f'  directory: {tmp_path / "data"}\n'
        'api_keys:\n'
        '  groq: gsk-test\n',
        encoding='utf-8',
    )
    return config_file
