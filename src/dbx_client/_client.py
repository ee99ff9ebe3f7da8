"""Client and AsyncClient — one request, one response, per operation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from dbx_client._classify import OK, classify
from dbx_client._codec import RequestBuilder
from dbx_client._config import ClientConfig
from dbx_client._errors import BodyDecodeError, DropboxError, InvalidTokenError, TransportError
from dbx_client._options import MoveCopyOption, UploadOption

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from dbx_client._codec import Request
    from dbx_client._transport import AsyncTransport, Transport

log = logging.getLogger(__name__)

# The check endpoint answers a bad token with a plain-text 400.
CHECK_USER_OVERRIDES: Mapping[int, type[DropboxError]] = {400: InvalidTokenError}


class _BaseClient:
    """Credential, configuration and request building shared by both client flavors."""

    def __init__(self, token: str, config: ClientConfig | None) -> None:
        if not isinstance(token, str) or not token.strip():
            raise ValueError("token must be a non-empty string")
        self._config = config or ClientConfig()
        self._requests = RequestBuilder(token, self._config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _upload_request(self, content: bytes, path: str, option: UploadOption | None) -> Request:
        return self._requests.upload(content, path, option or UploadOption())

    def _move_copy_request(self, kind: str, from_path: str, to_path: str, option: MoveCopyOption | None) -> Request:
        return self._requests.move_or_copy(kind, from_path, to_path, option or MoveCopyOption())


def _raise_for_status(status: int, body: bytes, overrides: Optional[Mapping[int, type[DropboxError]]]) -> None:
    error = classify(status, body, overrides=overrides)
    if error is not None:
        raise error


class Client(_BaseClient):
    """Blocking client. Each call occupies the calling thread for its full duration.

    The client holds no mutable state and may be shared across threads.

    :param token: OAuth2 bearer token. Never logged or shown in ``repr()``.
    :param transport: Blocking transport (default: :class:`~dbx_client.transports.HttpxTransport`).
    :param config: Endpoints and timeouts.
    """

    def __init__(self, token: str, *, transport: Transport | None = None, config: ClientConfig | None = None) -> None:
        super().__init__(token, config)
        if transport is None:
            from dbx_client.transports import HttpxTransport

            transport = HttpxTransport(timeout=self._config.timeout)
        self._transport = transport

    def __repr__(self) -> str:
        return f"Client(transport={self._transport.name!r}, api_url={self._config.api_url!r})"

    def close(self) -> None:
        """Close the underlying transport."""
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _execute(
        self,
        request: Request,
        *,
        want_body: bool = False,
        overrides: Optional[Mapping[int, type[DropboxError]]] = None,
    ) -> bytes:
        log.debug("%s %s", request.method, request.url)
        response = self._transport.send(request)
        try:
            if response.status != OK:
                _raise_for_status(response.status, response.read(), overrides)
            if not want_body:
                return b""
            try:
                return response.read()
            except TransportError as exc:
                raise BodyDecodeError(f"Failed to read response body: {exc}", status=response.status) from exc
        finally:
            response.close()

    def check_user(self, query: str = "ping") -> None:
        """Verify the token by echoing ``query`` off the service.

        :raises InvalidTokenError: If the token is rejected.
        """
        self._execute(self._requests.check_user(query), overrides=CHECK_USER_OVERRIDES)

    def upload(self, content: bytes, path: str, option: UploadOption | None = None) -> None:
        """Upload ``content`` to ``path`` in a single request.

        :param option: Upload flags (default: :class:`UploadOption` defaults).
        :raises InvalidPathError: If ``path`` is empty.
        :raises DropboxError: On any non-200 response.
        """
        self._execute(self._upload_request(content, path, option))

    def download(self, path: str) -> bytes:
        """Download the file at ``path``.

        :raises InvalidPathError: If ``path`` is empty.
        :raises BodyDecodeError: If the body stream fails after a 200.
        """
        return self._execute(self._requests.download(path), want_body=True)

    def move(self, from_path: str, to_path: str, option: MoveCopyOption | None = None) -> None:
        """Move a file or folder.

        :raises FromLookupError: If ``from_path`` cannot be resolved.
        :raises ExistedError: If ``to_path`` conflicts with an existing entry.
        """
        self._execute(self._move_copy_request("move", from_path, to_path, option))

    def copy(self, from_path: str, to_path: str, option: MoveCopyOption | None = None) -> None:
        """Copy a file or folder.

        :raises FromLookupError: If ``from_path`` cannot be resolved.
        :raises ExistedError: If ``to_path`` conflicts with an existing entry.
        """
        self._execute(self._move_copy_request("copy", from_path, to_path, option))


class AsyncClient(_BaseClient):
    """Non-blocking client for asyncio.

    Calls on one client are independent; cancelling one propagates
    :class:`asyncio.CancelledError` to its caller and leaves the others alone.

    :param token: OAuth2 bearer token. Never logged or shown in ``repr()``.
    :param transport: Non-blocking transport (default: :class:`~dbx_client.transports.AsyncHttpxTransport`).
    :param config: Endpoints and timeouts.
    """

    def __init__(
        self,
        token: str,
        *,
        transport: AsyncTransport | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        super().__init__(token, config)
        if transport is None:
            from dbx_client.transports import AsyncHttpxTransport

            transport = AsyncHttpxTransport(connect_timeout=self._config.connect_timeout)
        self._transport = transport

    def __repr__(self) -> str:
        return f"AsyncClient(transport={self._transport.name!r}, api_url={self._config.api_url!r})"

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _execute(
        self,
        request: Request,
        *,
        want_body: bool = False,
        overrides: Optional[Mapping[int, type[DropboxError]]] = None,
    ) -> bytes:
        log.debug("%s %s", request.method, request.url)
        response = await self._transport.send(request)
        try:
            if response.status != OK:
                _raise_for_status(response.status, await response.read(), overrides)
            if not want_body:
                return b""
            try:
                return await response.read()
            except TransportError as exc:
                raise BodyDecodeError(f"Failed to read response body: {exc}", status=response.status) from exc
        finally:
            await response.aclose()

    async def check_user(self, query: str = "ping") -> None:
        """Verify the token by echoing ``query`` off the service."""
        await self._execute(self._requests.check_user(query), overrides=CHECK_USER_OVERRIDES)

    async def upload(self, content: bytes, path: str, option: UploadOption | None = None) -> None:
        await self._execute(self._upload_request(content, path, option))

    async def download(self, path: str) -> bytes:
        return await self._execute(self._requests.download(path), want_body=True)

    async def move(self, from_path: str, to_path: str, option: MoveCopyOption | None = None) -> None:
        await self._execute(self._move_copy_request("move", from_path, to_path, option))

    async def copy(self, from_path: str, to_path: str, option: MoveCopyOption | None = None) -> None:
        await self._execute(self._move_copy_request("copy", from_path, to_path, option))
