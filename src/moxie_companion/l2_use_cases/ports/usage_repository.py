"""Port: persistence for usage records."""

from __future__ import annotations

from typing import Protocol

from moxie_companion.l1_entities.usage import UsageRecord


class UsageRepository(Protocol):
    def append(self, record: UsageRecord) -> None:
        """Persist one more record."""
        ...

    def load_all(self) -> list[UsageRecord]:
        """Return every stored record, oldest first."""
        ...

    def replace_all(self, records: list[UsageRecord]) -> None:
        """Overwrite the stored records."""
        ...
