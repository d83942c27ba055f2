"""Gateway: JSON documents stored as files under the application data directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

log = logging.getLogger('moxie.store')


class JsonFileStore:
    """Reads and writes named JSON documents (``usage/usage.json`` etc.) under *data_dir*."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, name: str) -> Path:
        return self._data_dir / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def save(self, name: str, data: Any) -> Path:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + '.tmp')
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
        tmp.replace(path)
        log.debug('Saved %s', path.name)
        return path

    def load(self, name: str, default: Any = None) -> Any:
        """Return the decoded document, or *default* when missing or unreadable."""
        path = self.path_for(name)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            log.error('Cannot read %s: %s', path, e)
            return default

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if path.exists():
            path.unlink()
            return True
        return False
