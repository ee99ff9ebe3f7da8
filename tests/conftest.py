"""Shared test fixtures, in-memory transports and marker registration."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from dbx_client._client import AsyncClient, Client
from dbx_client._errors import TransportError
from dbx_client._transport import AsyncResponse, AsyncTransport, Response, Transport

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dbx_client._codec import Request

TOKEN = "sl.test-token"


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external services")


class FakeResponse(Response):
    """Canned response; counts reads and records whether it was closed."""

    def __init__(self, status: int, body: bytes = b"", *, fail_read: bool = False) -> None:
        self._status = status
        self._body = body
        self._fail_read = fail_read
        self.reads = 0
        self.closed = False

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Mapping[str, str]:
        return {"Content-Length": str(len(self._body))}

    def read(self) -> bytes:
        self.reads += 1
        if self._fail_read:
            raise TransportError("connection reset mid-body", transport="fake")
        return self._body

    def close(self) -> None:
        self.closed = True


class FakeTransport(Transport):
    """Records every request and answers with the configured reply."""

    def __init__(self) -> None:
        self.requests: list[Request] = []
        self.responses: list[FakeResponse] = []
        self.error: Exception | None = None
        self.closed = False
        self._reply: tuple[int, bytes, bool] = (200, b"", False)

    @property
    def name(self) -> str:
        return "fake"

    def reply(self, status: int, body: bytes = b"", *, fail_read: bool = False) -> None:
        self._reply = (status, body, fail_read)

    def send(self, request: Request) -> Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status, body, fail_read = self._reply
        response = FakeResponse(status, body, fail_read=fail_read)
        self.responses.append(response)
        return response

    def close(self) -> None:
        self.closed = True


class FakeAsyncResponse(AsyncResponse):
    def __init__(self, status: int, body: bytes = b"", *, fail_read: bool = False) -> None:
        self._status = status
        self._body = body
        self._fail_read = fail_read
        self.reads = 0
        self.closed = False

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Mapping[str, str]:
        return {"Content-Length": str(len(self._body))}

    async def read(self) -> bytes:
        self.reads += 1
        await asyncio.sleep(0)
        if self._fail_read:
            raise TransportError("connection reset mid-body", transport="fake-async")
        return self._body

    async def aclose(self) -> None:
        self.closed = True


class FakeAsyncTransport(AsyncTransport):
    """Async twin of :class:`FakeTransport`.

    Requests whose URL or ``Dropbox-API-Arg`` header contains a key of
    ``gates`` wait on that event before answering, so tests can hold a
    call in flight.
    """

    def __init__(self) -> None:
        self.requests: list[Request] = []
        self.responses: list[FakeAsyncResponse] = []
        self.error: Exception | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.closed = False
        self._reply: tuple[int, bytes, bool] = (200, b"", False)

    @property
    def name(self) -> str:
        return "fake-async"

    def reply(self, status: int, body: bytes = b"", *, fail_read: bool = False) -> None:
        self._reply = (status, body, fail_read)

    async def send(self, request: Request) -> AsyncResponse:
        self.requests.append(request)
        target = request.url + request.headers.get("Dropbox-API-Arg", "")
        for fragment, gate in self.gates.items():
            if fragment in target:
                await gate.wait()
        if self.error is not None:
            raise self.error
        status, body, fail_read = self._reply
        response = FakeAsyncResponse(status, body, fail_read=fail_read)
        self.responses.append(response)
        return response

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def async_transport() -> FakeAsyncTransport:
    return FakeAsyncTransport()


@pytest.fixture
def client(transport: FakeTransport) -> Client:
    return Client(TOKEN, transport=transport)


@pytest.fixture
def async_client(async_transport: FakeAsyncTransport) -> AsyncClient:
    return AsyncClient(TOKEN, transport=async_transport)
