"""Tests for L4 config defaults, build_app_config and InfraConfig."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from moxie_companion.l3_interface_adapters.gateways.paths import DATA_DIR
from moxie_companion.l4_frameworks_and_drivers.config import (
    APP_CONFIG_DEFAULTS,
    InfraConfig,
    build_app_config,
    resolve_data_dir,
)


class TestBuildAppConfig:
    def test_defaults_produce_valid_config(self):
        cfg = build_app_config({})
        assert cfg.chat.provider == 'ollama'
        assert cfg.chat.model == ''
        assert cfg.chat.temperature == 0.7
        assert 'Moxie' in cfg.chat.system_prompt
        assert cfg.storage.directory is None

    def test_user_overrides_take_precedence(self):
        cfg = build_app_config({'chat': {'provider': 'anthropic', 'child_id': 'ben'}})
        assert cfg.chat.provider == 'anthropic'
        assert cfg.chat.child_id == 'ben'
        assert cfg.chat.temperature == 0.7  # default preserved

    def test_infra_keys_are_ignored_by_app_config(self):
        cfg = build_app_config({'api_keys': {'openai': 'sk'}, 'ollama': {'host': 'http://x:1'}})
        assert cfg.chat.provider == 'ollama'

    def test_build_does_not_mutate_defaults(self):
        snapshot = copy.deepcopy(APP_CONFIG_DEFAULTS)
        build_app_config({'chat': {'provider': 'mutant'}})
        assert APP_CONFIG_DEFAULTS == snapshot


class TestResolveDataDir:
    def test_default_platform_dir(self):
        assert resolve_data_dir(build_app_config({})) == DATA_DIR

    def test_configured_dir_expands_user(self):
        cfg = build_app_config({'storage': {'directory': '~/moxie-data'}})
        assert resolve_data_dir(cfg) == Path('~/moxie-data').expanduser()


class TestInfraConfig:
    def test_defaults(self):
        infra = InfraConfig()
        assert infra.ollama.host == 'http://localhost:11434'
        assert infra.http.timeout == 120.0
        assert infra.docker.container_name == 'openmoxie'

    def test_from_raw_yaml_dict(self):
        infra = InfraConfig.model_validate(
            {'chat': {'provider': 'groq'}, 'ollama': {'host': 'http://robot:11434'}, 'http': {'timeout': 30}}
        )
        assert infra.ollama.host == 'http://robot:11434'
        assert infra.http.timeout == 30.0

    def test_configured_key_wins_over_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('OPENAI_API_KEY', 'from-env')
        infra = InfraConfig(api_keys={'openai': 'from-config'})
        assert infra.api_key_for('openai') == 'from-config'

    def test_env_fills_gaps(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('ANTHROPIC_API_KEY', 'ak-env')
        assert InfraConfig().api_key_for('anthropic') == 'ak-env'

    def test_no_key(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv('GROQ_API_KEY', raising=False)
        assert InfraConfig().api_key_for('groq') == ''
        assert InfraConfig().api_key_for('ollama') == ''
