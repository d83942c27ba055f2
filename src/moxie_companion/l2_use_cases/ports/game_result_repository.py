"""Port: persistence for finished games."""

from __future__ import annotations

from typing import Protocol

from moxie_companion.l1_entities.games import GameResult


class GameResultRepository(Protocol):
    def append(self, result: GameResult) -> None: ...

    def load_all(self) -> list[GameResult]: ...
