"""Events published by the provider gateway to its listener."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from moxie_companion.l1_entities.errors import GatewayError


@dataclass(frozen=True)
class ResponseReceived:
    text: str


@dataclass(frozen=True)
class ErrorOccurred:
    error: GatewayError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class ProcessingChanged:
    """Listener reads ``is_processing``; the new value is carried for convenience."""

    is_processing: bool


@dataclass(frozen=True)
class ProviderChanged:
    provider: str


@dataclass(frozen=True)
class TokensUsed:
    input_tokens: int
    output_tokens: int
    model: str = ''


GatewayEvent = Union[ResponseReceived, ErrorOccurred, ProcessingChanged, ProviderChanged, TokensUsed]
