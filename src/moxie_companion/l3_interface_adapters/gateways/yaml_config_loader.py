"""Gateway: YAML configuration loader — implements ConfigLoader port."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from moxie_companion.l1_entities.config import AppConfig
from moxie_companion.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('moxie.config')


class YamlConfigLoader:
    """Reads one YAML document: an explicit path, else the first existing search path."""

    def __init__(self, search_paths: Sequence[Path] | None = None) -> None:
        self._search_paths = list(search_paths) if search_paths is not None else list(DEFAULT_CONFIG_PATHS)

    def resolve_path(self, config_path: str | None = None) -> Path | None:
        if config_path is not None:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in self._search_paths if p.exists()), None)

    def load_raw(self, config_path: str | None = None, overrides: dict | None = None) -> dict:
        """Merged YAML data as a plain dict; infra sections are kept for InfraConfig."""
        path = self.resolve_path(config_path)
        data = _read_mapping(path) if path is not None else {}
        if overrides:
            deep_merge(data, overrides)
        return data

    def load(self, config_path: str | None = None, overrides: dict | None = None) -> AppConfig:
        return AppConfig.model_validate(self.load_raw(config_path, overrides))


def _read_mapping(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding='utf-8'))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f'{path}: top level must be a mapping, got {type(data).__name__}')
    log.debug('Loaded config from %s', path)
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
