"""Tests for user-visible error messages."""

from __future__ import annotations

import pytest

from moxie_companion.l1_entities.errors import (
    BusyError,
    GatewayError,
    MalformedResponseError,
    NotConfiguredError,
    ProviderAPIError,
    TransportFailureError,
    UnsupportedProviderError,
)
from moxie_companion.l1_entities.gateway_events import ErrorOccurred


@pytest.mark.parametrize(
    ('error', 'message'),
    [
        (NotConfiguredError('openai'), 'API key not configured for openai'),
        (BusyError(), 'Already processing a request'),
        (UnsupportedProviderError('cohere'), 'Unsupported provider: cohere'),
        (TransportFailureError('timed out'), 'Network error: timed out'),
        (ProviderAPIError('bad key'), 'API Error: bad key'),
        (ProviderAPIError('model not found', source='Ollama'), 'Ollama Error: model not found'),
        (MalformedResponseError(), 'Invalid response format'),
        (MalformedResponseError('Invalid response format from Ollama'), 'Invalid response format from Ollama'),
    ],
)
def test_messages(error, message):
    assert isinstance(error, GatewayError)
    assert str(error) == message
    assert ErrorOccurred(error).message == message


def test_transport_failure_keeps_detail():
    err = TransportFailureError('HTTP 502')
    assert err.detail == 'HTTP 502'
