"""Domain error types. ``str(err)`` is the message shown to the user."""

from __future__ import annotations


class GatewayError(Exception):
    """Base for every failure the provider gateway reports."""


class NotConfiguredError(GatewayError):
    def __init__(self, provider: str) -> None:
        super().__init__(f'API key not configured for {provider}')
        self.provider = provider


class BusyError(GatewayError):
    def __init__(self) -> None:
        super().__init__('Already processing a request')


class UnsupportedProviderError(GatewayError):
    def __init__(self, provider: str) -> None:
        super().__init__(f'Unsupported provider: {provider}')
        self.provider = provider


class TransportFailureError(GatewayError):
    """Raised when the HTTP round-trip itself failed (no usable reply)."""

    def __init__(self, detail: str) -> None:
        super().__init__(f'Network error: {detail}')
        self.detail = detail


class ProviderAPIError(GatewayError):
    """The provider answered with an ``error`` payload."""

    def __init__(self, message: str, source: str = 'API') -> None:
        super().__init__(f'{source} Error: {message}')
        self.detail = message
        self.source = source


class MalformedResponseError(GatewayError):
    def __init__(self, message: str = 'Invalid response format') -> None:
        super().__init__(message)


class ContainerRuntimeError(Exception):
    """Raised when a container runtime command cannot be completed."""
