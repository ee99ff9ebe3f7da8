"""Transport port — the send contract each blocking or non-blocking transport implements."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dbx_client._codec import Request


class Response(abc.ABC):
    """Response whose headers have arrived and whose body is read on demand.

    Transport-native exceptions must never leak from :meth:`read`; they
    must be mapped to :class:`~dbx_client.TransportError`.
    """

    @property
    @abc.abstractmethod
    def status(self) -> int:
        """HTTP status code."""

    @property
    @abc.abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Response headers."""

    @abc.abstractmethod
    def read(self) -> bytes:
        """Read the remaining body. May block.

        :raises TransportError: If the body stream fails.
        """

    def close(self) -> None:  # noqa: B027
        """Release the underlying connection. Default is a no-op."""


class AsyncResponse(abc.ABC):
    """Non-blocking counterpart of :class:`Response`; body reads are suspension points."""

    @property
    @abc.abstractmethod
    def status(self) -> int:
        """HTTP status code."""

    @property
    @abc.abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Response headers."""

    @abc.abstractmethod
    async def read(self) -> bytes:
        """Read the remaining body.

        :raises TransportError: If the body stream fails.
        """

    async def aclose(self) -> None:  # noqa: B027
        """Release the underlying connection. Default is a no-op."""


class Transport(abc.ABC):
    """Blocking transport: :meth:`send` occupies the calling thread until headers arrive.

    Implementations must be stateless or internally thread-safe; a single
    instance is shared by every call made through a client.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Identifier for this transport (e.g. ``'httpx'``)."""

    @abc.abstractmethod
    def send(self, request: Request) -> Response:
        """Send ``request`` and return once response headers are available.

        :raises TransportError: On connection failure.
        :raises TransportTimeout: If the transport's timeout elapses.
        """

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""


class AsyncTransport(abc.ABC):
    """Non-blocking transport: :meth:`send` suspends the task until headers arrive."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Identifier for this transport (e.g. ``'httpx-async'``)."""

    @abc.abstractmethod
    async def send(self, request: Request) -> AsyncResponse:
        """Send ``request`` and return once response headers are available.

        :raises TransportError: On connection failure.
        :raises TransportTimeout: If the transport's timeout elapses.
        """

    async def aclose(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""
