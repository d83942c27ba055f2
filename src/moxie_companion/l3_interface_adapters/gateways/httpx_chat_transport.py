"""Gateway: httpx-backed POST transport — implements ChatTransport port."""

from __future__ import annotations

import errno
import json
import logging

import httpx

from moxie_companion.l2_use_cases.ports.chat_transport import Envelope, TransportErrorKind, TransportReply

log = logging.getLogger('moxie.http')

DEFAULT_TIMEOUT = 120.0


# anyio's message when every resolved address refused or was unreachable.
_ALL_ATTEMPTS_FAILED = 'all connection attempts failed'


def _is_refused(exc: BaseException) -> bool:
    """Walk the cause/context chain (and exception groups) looking for a refused connect."""
    pending: list[BaseException] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return True
        if isinstance(current, OSError) and current.errno == errno.ECONNREFUSED:
            return True
        text = str(current).lower()
        if 'refused' in text or _ALL_ATTEMPTS_FAILED in text:
            return True
        if isinstance(current, BaseExceptionGroup):
            pending.extend(current.exceptions)
        pending.extend(e for e in (current.__cause__, current.__context__) if e is not None)
    return False


class HttpxChatTransport:
    """One short-lived AsyncClient per request; failures are folded into the reply."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def post(self, envelope: Envelope) -> TransportReply:
        # Log the host only: Gemini carries the API key in the query string.
        host = httpx.URL(envelope.url).host
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    envelope.url,
                    headers=envelope.headers,
                    content=json.dumps(envelope.body).encode('utf-8'),
                )
        except httpx.ConnectError as e:
            kind = TransportErrorKind.CONNECTION_REFUSED if _is_refused(e) else TransportErrorKind.OTHER
            log.warning('POST %s failed to connect: %s', host, e)
            return TransportReply(error=kind, error_detail=str(e) or 'Connection failed')
        except httpx.TimeoutException as e:
            log.warning('POST %s timed out after %.0fs', host, self._timeout)
            return TransportReply(error=TransportErrorKind.TIMEOUT, error_detail=str(e) or 'Request timed out')
        except httpx.HTTPError as e:
            log.warning('POST %s failed: %s', host, e)
            return TransportReply(error=TransportErrorKind.OTHER, error_detail=str(e) or type(e).__name__)

        log.debug('POST %s -> %d (%d bytes)', host, response.status_code, len(response.content))
        return TransportReply(status_code=response.status_code, body=response.content)
