"""Gateway: usage records in a JSON document — implements UsageRepository port."""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from moxie_companion.l1_entities.usage import UsageRecord
from moxie_companion.l3_interface_adapters.gateways.json_file_store import JsonFileStore

log = logging.getLogger('moxie.usage')

USAGE_DOCUMENT = 'usage/usage.json'

_RECORDS = TypeAdapter(list[UsageRecord])


class JsonUsageRepository:
    def __init__(self, store: JsonFileStore, document: str = USAGE_DOCUMENT) -> None:
        self._store = store
        self._document = document

    def load_all(self) -> list[UsageRecord]:
        raw = self._store.load(self._document, default=[])
        try:
            return _RECORDS.validate_python(raw)
        except ValidationError as e:
            log.error('Ignoring corrupt usage log %s: %s', self._document, e)
            return []

    def append(self, record: UsageRecord) -> None:
        records = self.load_all()
        records.append(record)
        self.replace_all(records)

    def replace_all(self, records: list[UsageRecord]) -> None:
        self._store.save(self._document, _RECORDS.dump_python(records, mode='json'))
