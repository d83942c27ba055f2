"""Gateway: finished games in a JSON document — implements GameResultRepository port."""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from moxie_companion.l1_entities.games import GameResult
from moxie_companion.l3_interface_adapters.gateways.json_file_store import JsonFileStore

log = logging.getLogger('moxie.games')

GAMES_DOCUMENT = 'games/results.json'

_RESULTS = TypeAdapter(list[GameResult])


class JsonGameResultRepository:
    def __init__(self, store: JsonFileStore, document: str = GAMES_DOCUMENT) -> None:
        self._store = store
        self._document = document

    def load_all(self) -> list[GameResult]:
        try:
            return _RESULTS.validate_python(self._store.load(self._document, default=[]))
        except ValidationError as e:
            log.error('Ignoring corrupt game results %s: %s', self._document, e)
            return []

    def append(self, result: GameResult) -> None:
        results = self.load_all()
        results.append(result)
        self._store.save(self._document, _RESULTS.dump_python(results, mode='json'))
