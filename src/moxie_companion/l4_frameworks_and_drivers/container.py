"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from moxie_companion.l1_entities.config import AppConfig
from moxie_companion.l2_use_cases.games_stats_use_case import GamesStatsUseCase
from moxie_companion.l2_use_cases.ports.chat_transport import ChatTransport
from moxie_companion.l2_use_cases.ports.container_runtime import ContainerRuntime
from moxie_companion.l2_use_cases.usage_use_case import UsageLog
from moxie_companion.l3_interface_adapters.controllers.chat_controller import ChatController
from moxie_companion.l3_interface_adapters.controllers.provider_gateway import ProviderGateway
from moxie_companion.l3_interface_adapters.controllers.server_controller import ServerController
from moxie_companion.l3_interface_adapters.dialects import build_dialect_table
from moxie_companion.l3_interface_adapters.gateways.docker_cli_runtime import DockerCliRuntime
from moxie_companion.l3_interface_adapters.gateways.httpx_chat_transport import HttpxChatTransport
from moxie_companion.l3_interface_adapters.gateways.json_file_store import JsonFileStore
from moxie_companion.l3_interface_adapters.gateways.json_game_result_repository import JsonGameResultRepository
from moxie_companion.l3_interface_adapters.gateways.json_usage_repository import JsonUsageRepository
from moxie_companion.l4_frameworks_and_drivers.config import InfraConfig, resolve_data_dir


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        infra: InfraConfig | None = None,
        data_dir: Path | None = None,
        transport: ChatTransport | None = None,
        runtime: ContainerRuntime | None = None,
    ) -> None:
        self.config = config
        self.infra = infra or InfraConfig()
        self.data_dir = data_dir or resolve_data_dir(config)

        self.store = JsonFileStore(self.data_dir)
        self.usage_log = UsageLog(JsonUsageRepository(self.store))
        self.games = GamesStatsUseCase(JsonGameResultRepository(self.store))

        self.transport: ChatTransport = transport or HttpxChatTransport(timeout=self.infra.http.timeout)
        provider = config.chat.provider
        self.gateway = ProviderGateway(
            self.transport,
            dialects=build_dialect_table(self.infra.ollama.host),
            provider=provider,
            api_key=self.infra.api_key_for(provider),
        )
        self.chat = ChatController(
            self.gateway,
            self.usage_log,
            model=config.chat.model,
            temperature=config.chat.temperature,
            system_prompt=config.chat.system_prompt,
            child_id=config.chat.child_id,
        )

        self.server = ServerController(
            runtime or DockerCliRuntime(),
            container_name=self.infra.docker.container_name,
            image=self.infra.docker.image,
        )

    def api_key_for(self, provider_id: str) -> str:
        return self.infra.api_key_for(provider_id)
