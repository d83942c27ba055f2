"""Port: configuration loader."""

from __future__ import annotations

from typing import Protocol

from moxie_companion.l1_entities.config import AppConfig


class ConfigLoader(Protocol):
    def load_raw(self, config_path: str | None = None, overrides: dict | None = None) -> dict:
        """Merged configuration document, including sections AppConfig does not model."""
        ...

    def load(self, config_path: str | None = None, overrides: dict | None = None) -> AppConfig: ...
