"""Port: HTTP transport used by the provider gateway."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class Envelope:
    """One HTTP call: URL, headers and JSON body."""

    url: str
    headers: dict[str, str]
    body: dict[str, Any] = field(default_factory=dict)


class TransportErrorKind(enum.Enum):
    CONNECTION_REFUSED = 'connection_refused'
    TIMEOUT = 'timeout'
    OTHER = 'other'


@dataclass(frozen=True)
class TransportReply:
    """Outcome of a POST. ``error`` is None when a response arrived (any status)."""

    status_code: int = 0
    body: bytes = b''
    error: TransportErrorKind | None = None
    error_detail: str = ''

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatTransport(Protocol):
    """Abstract POST-only HTTP client. Must report failures in the reply, not raise."""

    async def post(self, envelope: Envelope) -> TransportReply:
        """Issue the POST described by *envelope*."""
        ...
