"""Infrastructure provider configs — lives in L4, not domain."""

from __future__ import annotations

import copy
import os
from pathlib import Path

from pydantic import BaseModel, Field

from moxie_companion.l1_entities.config import AppConfig
from moxie_companion.l1_entities.provider import ANTHROPIC, DEEPSEEK, GEMINI, GROQ, OPENAI
from moxie_companion.l3_interface_adapters.controllers.server_controller import DEFAULT_CONTAINER, DEFAULT_IMAGE
from moxie_companion.l3_interface_adapters.gateways.paths import DATA_DIR
from moxie_companion.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'chat': {
        'provider': 'ollama',
        'model': '',
        'temperature': 0.7,
        'system_prompt': 'You are Moxie, a friendly robot who helps children learn and explore.',
        'child_id': '',
    },
    'storage': {
        'directory': None,
    },
}

API_KEY_ENV_VARS = {
    OPENAI: 'OPENAI_API_KEY',
    ANTHROPIC: 'ANTHROPIC_API_KEY',
    GEMINI: 'GEMINI_API_KEY',
    DEEPSEEK: 'DEEPSEEK_API_KEY',
    GROQ: 'GROQ_API_KEY',
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


def resolve_data_dir(config: AppConfig) -> Path:
    return Path(config.storage.directory).expanduser() if config.storage.directory else DATA_DIR


class OllamaProviderConfig(BaseModel):
    host: str = 'http://localhost:11434'


class HttpConfig(BaseModel):
    timeout: float = 120.0


class DockerConfig(BaseModel):
    container_name: str = DEFAULT_CONTAINER
    image: str = DEFAULT_IMAGE


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    ollama: OllamaProviderConfig = Field(default_factory=OllamaProviderConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    api_keys: dict[str, str] = Field(default_factory=dict)  # provider id → key; env vars fill gaps
    docker: DockerConfig = Field(default_factory=DockerConfig)

    def api_key_for(self, provider_id: str) -> str:
        key = self.api_keys.get(provider_id)
        if key:
            return key
        env_var = API_KEY_ENV_VARS.get(provider_id)
        return os.environ.get(env_var, '') if env_var else ''
