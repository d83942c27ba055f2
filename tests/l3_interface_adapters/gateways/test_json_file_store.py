"""Tests for JsonFileStore."""

from __future__ import annotations

from pathlib import Path

from moxie_companion.l3_interface_adapters.gateways.json_file_store import JsonFileStore


class TestJsonFileStore:
    def test_creates_data_dir(self, tmp_path: Path):
        store = JsonFileStore(tmp_path / 'a' / 'b')
        assert store.data_dir.is_dir()

    def test_save_and_load(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        path = store.save('usage/usage.json', [{'tokens': 3, 'note': 'héllo'}])
        assert path == tmp_path / 'usage' / 'usage.json'
        assert store.exists('usage/usage.json')
        assert store.load('usage/usage.json') == [{'tokens': 3, 'note': 'héllo'}]
        assert not (tmp_path / 'usage' / 'usage.json.tmp').exists()

    def test_missing_returns_default(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        assert store.load('nope.json', default=[]) == []
        assert store.load('nope.json') is None

    def test_corrupt_returns_default(self, tmp_path: Path):
        (tmp_path / 'broken.json').write_text('{not json', encoding='utf-8')
        assert JsonFileStore(tmp_path).load('broken.json', default={}) == {}

    def test_overwrite(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        store.save('x.json', {'v': 1})
        store.save('x.json', {'v': 2})
        assert store.load('x.json') == {'v': 2}

    def test_delete(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        store.save('x.json', {})
        assert store.delete('x.json')
        assert not store.exists('x.json')
        assert not store.delete('x.json')
