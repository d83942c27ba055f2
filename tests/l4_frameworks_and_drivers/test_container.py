"""Tests for the dependency container."""

from __future__ import annotations

from pathlib import Path

import pytest

from moxie_companion.l1_entities.chat_request import ChatRequest
from moxie_companion.l3_interface_adapters.gateways.httpx_chat_transport import HttpxChatTransport
from moxie_companion.l4_frameworks_and_drivers.config import InfraConfig, build_app_config
from moxie_companion.l4_frameworks_and_drivers.container import DependencyContainer
from tests.conftest import FakeContainerRuntime, FakeTransport


class TestDependencyContainer:
    def test_creates_all_components(self, tmp_path: Path):
        config = build_app_config({})

        container = DependencyContainer(config, data_dir=tmp_path)

        assert container.config is config
        assert container.data_dir == tmp_path
        assert isinstance(container.transport, HttpxChatTransport)
        assert container.chat.gateway is container.gateway
        assert container.usage_log is not None
        assert container.games is not None
        assert container.server is not None

    def test_provider_and_key_from_config(self, tmp_path: Path):
        config = build_app_config({'chat': {'provider': 'groq', 'model': 'gemma2-9b-it'}})
        infra = InfraConfig(api_keys={'groq': 'gsk-1'})

        container = DependencyContainer(config, infra=infra, data_dir=tmp_path)

        assert container.gateway.current_provider == 'groq'
        assert container.gateway.api_key == 'gsk-1'
        assert container.chat.model == 'gemma2-9b-it'
        assert container.api_key_for('groq') == 'gsk-1'

    def test_storage_directory_from_config(self, tmp_path: Path):
        config = build_app_config({'storage': {'directory': str(tmp_path / 'store')}})
        container = DependencyContainer(config)
        assert container.data_dir == tmp_path / 'store'
        assert container.store.data_dir.is_dir()

    @pytest.mark.asyncio
    async def test_ollama_host_reaches_requests(self, tmp_path: Path):
        transport = FakeTransport()
        infra = InfraConfig.model_validate({'ollama': {'host': 'http://robot.local:11434'}})
        container = DependencyContainer(build_app_config({}), infra=infra, data_dir=tmp_path, transport=transport)

        await container.gateway.send(ChatRequest.single('hi'))

        assert transport.envelopes[0].url == 'http://robot.local:11434/api/chat'

    def test_server_uses_injected_runtime(self, tmp_path: Path):
        runtime = FakeContainerRuntime(running=True)
        container = DependencyContainer(build_app_config({}), data_dir=tmp_path, runtime=runtime)
        assert container.server.refresh_status().container_running
