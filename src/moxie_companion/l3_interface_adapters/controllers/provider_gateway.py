"""ProviderGateway — single-flight chat requests across every supported LLM provider.

The gateway is a two-state machine (Idle / Pending) driven from one asyncio
event loop. ``send`` either rejects synchronously (busy, missing key,
unknown provider) or starts exactly one transport task; that task's
completion moves the gateway back to Idle and publishes the outcome.
Completions from a task the gateway no longer tracks are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from moxie_companion.l1_entities.chat_request import ChatRequest, ChatResult
from moxie_companion.l1_entities.errors import (
    BusyError,
    GatewayError,
    MalformedResponseError,
    NotConfiguredError,
    TransportFailureError,
    UnsupportedProviderError,
)
from moxie_companion.l1_entities.gateway_events import (
    ErrorOccurred,
    GatewayEvent,
    ProcessingChanged,
    ProviderChanged,
    ResponseReceived,
    TokensUsed,
)
from moxie_companion.l1_entities.provider import OLLAMA
from moxie_companion.l2_use_cases import provider_registry
from moxie_companion.l2_use_cases.ports.chat_transport import ChatTransport, Envelope, TransportErrorKind, TransportReply
from moxie_companion.l3_interface_adapters.dialects import Dialect, build_dialect_table

log = logging.getLogger('moxie.gateway')

OLLAMA_OFFLINE = 'Cannot connect to Ollama. Please ensure Ollama is installed and running.'

GatewayListener = Callable[[GatewayEvent], None]


class _Flight:
    """The in-flight handle: one accepted request and the task carrying it."""

    def __init__(self, provider_id: str, model: str, dialect: Dialect) -> None:
        self.provider_id = provider_id
        self.model = model
        self.dialect = dialect
        self.task: asyncio.Task[None] | None = None


class ProviderGateway:
    """Routes neutral chat requests through dialect → transport → dialect.

    Listeners receive events in a fixed order for every accepted request:
    ``ProcessingChanged(True)``, later ``ProcessingChanged(False)``, then
    either ``ErrorOccurred`` or ``ResponseReceived`` followed by
    ``TokensUsed`` when the provider reported both token counts.
    """

    def __init__(
        self,
        transport: ChatTransport,
        listener: GatewayListener | None = None,
        *,
        dialects: dict[str, Dialect] | None = None,
        provider: str = OLLAMA,
        api_key: str = '',
    ) -> None:
        self._transport = transport
        self._listeners: list[GatewayListener] = [listener] if listener is not None else []
        self._dialects = dialects if dialects is not None else build_dialect_table()
        self._provider = provider
        self._api_key = api_key
        self._inflight: _Flight | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # --- Observable state ---

    @property
    def current_provider(self) -> str:
        return self._provider

    @property
    def is_processing(self) -> bool:
        return self._inflight is not None

    @property
    def api_key(self) -> str:
        return self._api_key

    def subscribe(self, listener: GatewayListener) -> None:
        self._listeners.append(listener)

    def set_provider(self, provider_id: str) -> None:
        """Select a provider. An in-flight request keeps the provider it was sent with."""
        if provider_id == self._provider:
            return
        self._provider = provider_id
        log.info('Provider changed to %s', provider_id)
        self._emit(ProviderChanged(provider_id))

    def set_api_key(self, key: str) -> None:
        self._api_key = key

    # --- Registry delegation ---

    def available_providers(self) -> list[str]:
        return provider_registry.list_providers()

    def available_models(self) -> list[str]:
        return list(provider_registry.models(self._provider))

    def default_model(self) -> str:
        return provider_registry.default_model(self._provider)

    def provider_info(self, provider_id: str) -> str:
        return provider_registry.info(provider_id)

    def provider_requires_api_key(self, provider_id: str) -> bool:
        return provider_registry.requires_api_key(provider_id)

    # --- Requests ---

    def send(self, request: ChatRequest) -> asyncio.Task[None] | None:
        """Start *request*. Returns the in-flight task, or None when rejected.

        Must be called from the running event loop. Rejections are published
        as ``ErrorOccurred`` and never change ``is_processing``.
        """
        try:
            flight, envelope = self._accept(request)
        except GatewayError as e:
            log.warning('Request rejected: %s', e)
            self._emit(ErrorOccurred(e))
            return None

        task = asyncio.get_running_loop().create_task(self._fly(flight, envelope))
        flight.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self._inflight = flight
        log.info(
            'Request sent: provider=%s model=%s messages=%d',
            flight.provider_id,
            flight.model,
            len(envelope.body.get('messages', envelope.body.get('contents', []))),
        )
        self._emit(ProcessingChanged(True))
        return task

    def _accept(self, request: ChatRequest) -> tuple[_Flight, Envelope]:
        if self._inflight is not None:
            raise BusyError()
        provider_id = self._provider
        if provider_registry.requires_api_key(provider_id) and not self._api_key:
            raise NotConfiguredError(provider_id)
        dialect = self._dialects.get(provider_id)
        if dialect is None or not provider_registry.is_supported(provider_id):
            raise UnsupportedProviderError(provider_id)

        model = request.resolve_model(provider_registry.default_model(provider_id))
        envelope = dialect.build(provider_id, model, request.temperature, request.to_messages(), self._api_key)
        return _Flight(provider_id, model, dialect), envelope

    async def _fly(self, flight: _Flight, envelope: Envelope) -> None:
        try:
            reply = await self._transport.post(envelope)
        except Exception as e:
            log.error('Transport raised instead of replying: %s', e, exc_info=True)
            reply = TransportReply(error=TransportErrorKind.OTHER, error_detail=str(e) or type(e).__name__)
        self._complete(flight, reply)

    def _complete(self, flight: _Flight, reply: TransportReply) -> None:
        if flight is not self._inflight:
            log.debug('Dropping stale completion from %s', flight.provider_id)
            return

        self._inflight = None
        self._emit(ProcessingChanged(False))

        try:
            result = self._interpret(flight, reply)
        except GatewayError as e:
            log.warning('Request failed: %s', e)
            self._emit(ErrorOccurred(e))
            return

        log.info(
            'Response received: provider=%s chars=%d tokens=%s/%s',
            flight.provider_id,
            len(result.text),
            result.input_tokens,
            result.output_tokens,
        )
        self._emit(ResponseReceived(result.text))
        if result.has_usage:
            self._emit(TokensUsed(result.input_tokens or 0, result.output_tokens or 0, model=flight.model))

    @staticmethod
    def _interpret(flight: _Flight, reply: TransportReply) -> ChatResult:
        if reply.error is not None:
            if flight.provider_id == OLLAMA and reply.error is TransportErrorKind.CONNECTION_REFUSED:
                raise TransportFailureError(OLLAMA_OFFLINE)
            raise TransportFailureError(reply.error_detail or reply.error.value)
        try:
            return flight.dialect.parse(reply.body)
        except MalformedResponseError:
            # An HTTP error without a readable provider error is a transport-level failure.
            if reply.status_code >= 400:
                raise TransportFailureError(f'HTTP {reply.status_code}') from None
            raise

    # --- Teardown ---

    def _abandon_inflight(self) -> None:
        """Forget the current handle so its eventual completion is dropped."""
        flight = self._inflight
        if flight is None:
            return
        self._inflight = None
        if flight.task is not None:
            flight.task.cancel()
        log.info('Abandoned in-flight request to %s', flight.provider_id)
        self._emit(ProcessingChanged(False))

    async def drain(self) -> None:
        """Wait until every started request task has finished."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Release the in-flight request (best effort) and wait for its task to unwind."""
        self._abandon_inflight()
        await self.drain()

    def _emit(self, event: GatewayEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:  # noqa: BLE001 -- one failing listener must not starve the rest
                log.exception('Listener %r failed on %s', listener, type(event).__name__)
