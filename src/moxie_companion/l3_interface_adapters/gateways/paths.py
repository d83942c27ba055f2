"""Shared path constants for configuration and application data."""

from __future__ import annotations

from platformdirs import user_config_path, user_data_path

APP_NAME = 'moxie-companion'

CONFIG_DIR = user_config_path(APP_NAME)
DATA_DIR = user_data_path(APP_NAME)

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]
