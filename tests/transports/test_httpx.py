"""Tests for the httpx transports, served by httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Iterator

import httpx
import pytest

from dbx_client._client import AsyncClient, Client
from dbx_client._codec import Request
from dbx_client._errors import (
    BodyDecodeError,
    ExistedError,
    InvalidTokenError,
    RequestLimitsError,
    TransportError,
    TransportTimeout,
)
from dbx_client._options import UploadOption
from dbx_client.transports import AsyncHttpxTransport, HttpxTransport

TOKEN = "sl.test-token"


class _BrokenStream(httpx.SyncByteStream):
    def __iter__(self) -> Iterator[bytes]:
        yield b"hel"
        raise httpx.ReadError("connection reset by peer")


class _AsyncBrokenStream(httpx.AsyncByteStream):
    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield b"hel"
        raise httpx.ReadError("connection reset by peer")


class _Recorder:
    """MockTransport handler that records requests and serves a fixed reply."""

    def __init__(self, status: int = 200, content: bytes = b"", *, stream: httpx.SyncByteStream | None = None) -> None:
        self.status = status
        self.content = content
        self.stream = stream
        self.seen: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.seen.append(request)
        if self.stream is not None:
            return httpx.Response(self.status, stream=self.stream)
        return httpx.Response(self.status, content=self.content)


def _blocking(handler: object) -> Client:
    return Client(TOKEN, transport=HttpxTransport(transport=httpx.MockTransport(handler)))  # type: ignore[arg-type]


def _non_blocking(handler: object) -> AsyncClient:
    return AsyncClient(TOKEN, transport=AsyncHttpxTransport(transport=httpx.MockTransport(handler)))  # type: ignore[arg-type]


class TestHttpxTransportIdentity:
    def test_names(self) -> None:
        blocking = HttpxTransport()
        assert blocking.name == "httpx"
        blocking.close()

        async def main() -> str:
            non_blocking = AsyncHttpxTransport()
            await non_blocking.aclose()
            return non_blocking.name

        assert asyncio.run(main()) == "httpx-async"

    def test_send_returns_response_port(self) -> None:
        recorder = _Recorder(204, b"")
        transport = HttpxTransport(transport=httpx.MockTransport(recorder))
        response = transport.send(Request(method="POST", url="https://api.dropboxapi.com/2/check/user"))
        try:
            assert response.status == 204
            assert response.read() == b""
        finally:
            response.close()
            transport.close()

    def test_external_client_not_closed(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(_Recorder()))
        HttpxTransport(client=client).close()
        assert client.is_closed is False
        client.close()


class TestBlockingWire:
    def test_upload_reaches_server_unchanged(self) -> None:
        recorder = _Recorder()
        with _blocking(recorder) as client:
            client.upload(b"\x00bytes", "/a b/ü.txt", UploadOption().mute_notification())
        sent = recorder.seen[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://content.dropboxapi.com/2/files/upload"
        assert sent.headers["authorization"] == f"Bearer {TOKEN}"
        assert sent.headers["content-type"] == "application/octet-stream"
        assert json.loads(sent.headers["dropbox-api-arg"]) == {
            "path": "/a b/ü.txt",
            "mode": "add",
            "autorename": True,
            "mute": True,
            "strict_conflict": False,
        }
        assert sent.content == b"\x00bytes"

    def test_download_round_trip(self) -> None:
        with _blocking(_Recorder(200, b"hello")) as client:
            assert client.download("/hello.txt") == b"hello"

    def test_conflict_classified(self) -> None:
        body = b'{"error_summary":"to/conflict/file/..","error":{".tag":"to"}}'
        with _blocking(_Recorder(409, body)) as client, pytest.raises(ExistedError) as exc_info:
            client.move("/a", "/b")
        assert exc_info.value.message == "conflict/file/.."

    def test_broken_body_is_body_decode_error(self) -> None:
        with _blocking(_Recorder(200, stream=_BrokenStream())) as client, pytest.raises(BodyDecodeError) as exc_info:
            client.download("/hello.txt")
        cause = exc_info.value.__cause__
        assert isinstance(cause, TransportError)
        assert cause.transport == "httpx"


class TestBlockingErrorMapping:
    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with _blocking(handler) as client, pytest.raises(TransportTimeout) as exc_info:
            client.check_user()
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)

    def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name or service not known", request=request)

        with _blocking(handler) as client, pytest.raises(TransportError) as exc_info:
            client.check_user()
        assert not isinstance(exc_info.value, TransportTimeout)
        assert exc_info.value.transport == "httpx"


class TestNonBlockingWire:
    def test_download_round_trip(self) -> None:
        async def main() -> bytes:
            async with _non_blocking(_Recorder(200, b"hello")) as client:
                return await client.download("/hello.txt")

        assert asyncio.run(main()) == b"hello"

    def test_check_user_400(self) -> None:
        async def main() -> None:
            async with _non_blocking(_Recorder(400, b"Error in call to API function")) as client:
                await client.check_user()

        with pytest.raises(InvalidTokenError):
            asyncio.run(main())

    def test_rate_limit(self) -> None:
        body = b'{"error_summary":"too_many_requests/..","error":{"reason":{".tag":"too_many_requests"},"retry_after":30}}'

        async def main() -> None:
            async with _non_blocking(_Recorder(429, body)) as client:
                await client.copy("/a", "/b")

        with pytest.raises(RequestLimitsError) as exc_info:
            asyncio.run(main())
        assert exc_info.value.retry_after == 30

    def test_broken_body_is_body_decode_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=_AsyncBrokenStream())

        async def main() -> None:
            async with _non_blocking(handler) as client:
                await client.download("/hello.txt")

        with pytest.raises(BodyDecodeError) as exc_info:
            asyncio.run(main())
        cause = exc_info.value.__cause__
        assert isinstance(cause, TransportError)
        assert cause.transport == "httpx-async"

    def test_read_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        async def main() -> None:
            async with _non_blocking(handler) as client:
                await client.move("/a", "/b")

        with pytest.raises(TransportTimeout):
            asyncio.run(main())
