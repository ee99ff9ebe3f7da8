"""Blocking and non-blocking transports built on httpx."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import httpx

from dbx_client._errors import TransportError, TransportTimeout
from dbx_client._transport import AsyncResponse, AsyncTransport, Response, Transport

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from dbx_client._codec import Request

log = logging.getLogger(__name__)


@contextmanager
def _errors(transport: str) -> Iterator[None]:
    """Map httpx exceptions to dbx_client transport errors."""
    try:
        yield
    except httpx.TimeoutException as exc:
        raise TransportTimeout(str(exc) or type(exc).__name__, transport=transport) from exc
    except httpx.HTTPError as exc:
        raise TransportError(str(exc) or type(exc).__name__, transport=transport) from exc


def _build(client: httpx.Client | httpx.AsyncClient, request: Request) -> httpx.Request:
    return client.build_request(request.method, request.url, headers=request.headers, content=request.body)


class HttpxResponse(Response):
    """Streaming :class:`httpx.Response` behind the :class:`Response` port."""

    def __init__(self, response: httpx.Response, transport: str) -> None:
        self._response = response
        self._transport = transport

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    def read(self) -> bytes:
        with _errors(self._transport):
            return self._response.read()

    def close(self) -> None:
        self._response.close()


class AsyncHttpxResponse(AsyncResponse):
    """Streaming :class:`httpx.Response` behind the :class:`AsyncResponse` port."""

    def __init__(self, response: httpx.Response, transport: str) -> None:
        self._response = response
        self._transport = transport

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    async def read(self) -> bytes:
        with _errors(self._transport):
            return await self._response.aread()

    async def aclose(self) -> None:
        await self._response.aclose()


class HttpxTransport(Transport):
    """Blocking transport using a pooled :class:`httpx.Client`.

    :param timeout: Overall timeout in seconds (connect, read, write, pool).
    :param client: Pre-built client to use instead of creating one. It is
        not closed by :meth:`close`.
    :param client_options: Additional options passed to :class:`httpx.Client`.
    """

    def __init__(self, *, timeout: float = 10.0, client: httpx.Client | None = None, **client_options: Any) -> None:
        self._owns_client = client is None
        if client is None:
            client_options.setdefault("timeout", httpx.Timeout(timeout))
            client = httpx.Client(**client_options)
            log.info("Opened httpx transport (timeout=%ss)", timeout)
        self._client = client

    @property
    def name(self) -> str:
        return "httpx"

    def send(self, request: Request) -> Response:
        with _errors(self.name):
            response = self._client.send(_build(self._client, request), stream=True)
        return HttpxResponse(response, self.name)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
            log.info("Closed httpx transport")


class AsyncHttpxTransport(AsyncTransport):
    """Non-blocking transport using a pooled :class:`httpx.AsyncClient`.

    Only the connect phase is bounded by default; reads wait as long as
    the server keeps the stream open.

    :param connect_timeout: Connect timeout in seconds.
    :param client: Pre-built client to use instead of creating one. It is
        not closed by :meth:`aclose`.
    :param client_options: Additional options passed to :class:`httpx.AsyncClient`.
    """

    def __init__(
        self,
        *,
        connect_timeout: float = 100.0,
        client: httpx.AsyncClient | None = None,
        **client_options: Any,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client_options.setdefault("timeout", httpx.Timeout(None, connect=connect_timeout))
            client = httpx.AsyncClient(**client_options)
            log.info("Opened async httpx transport (connect_timeout=%ss)", connect_timeout)
        self._client = client

    @property
    def name(self) -> str:
        return "httpx-async"

    async def send(self, request: Request) -> AsyncResponse:
        with _errors(self.name):
            response = await self._client.send(_build(self._client, request), stream=True)
        return AsyncHttpxResponse(response, self.name)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
            log.info("Closed async httpx transport")
