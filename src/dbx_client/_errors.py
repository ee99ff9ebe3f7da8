"""Closed error taxonomy for dbx_client."""

from __future__ import annotations

from typing import Optional


class DropboxError(Exception):
    """Base class for all dbx_client errors.

    :param message: Human-readable error description.
    :param status: HTTP status code of the failed round trip, if any.
    """

    def __init__(self, message: str = "", *, status: Optional[int] = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = []
        if self.status is not None:
            parts.append(f"status={self.status!r}")
        return parts

    def __str__(self) -> str:
        parts = [super().__str__(), *self._context()]
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.message)]
        args.extend(self._context())
        return f"{cls}({', '.join(args)})"


class TransportError(DropboxError):
    """Raised when the transport fails before a response could be classified.

    :param transport: Name of the transport that failed.
    """

    def __init__(self, message: str = "", *, transport: Optional[str] = None) -> None:
        self.transport = transport
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.transport is not None:
            parts.append(f"transport={self.transport!r}")
        return parts


class TransportTimeout(TransportError):
    """Raised when the transport gives up waiting on connect or read."""


class BodyDecodeError(DropboxError):
    """Raised when a 200 response body could not be read or decoded."""


class InvalidPathError(DropboxError):
    """Raised locally for a path argument that must not be sent (e.g. empty)."""


class PathError(DropboxError):
    """400 response, or a 409 whose summary starts with ``path/``."""


class InvalidTokenError(DropboxError):
    """401 response: the bearer token is missing, malformed, expired or revoked."""


class AccessError(DropboxError):
    """403 response: the token lacks access to the requested resource."""


class FromLookupError(DropboxError):
    """409 response whose summary starts with ``from_lookup/``."""


class ExistedError(DropboxError):
    """409 response whose summary starts with ``to/``."""


class ConflictError(DropboxError):
    """409 response with an unrecognized summary prefix."""


class RequestLimitsError(DropboxError):
    """429 response.

    :param retry_after: Server-advised delay in seconds, when the body carried one.
    """

    def __init__(self, message: str = "", *, status: Optional[int] = None, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(message, status=status)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.retry_after is not None:
            parts.append(f"retry_after={self.retry_after!r}")
        return parts


class ServerError(DropboxError):
    """500 or 503 response."""


class OtherError(DropboxError):
    """Any other non-200 response."""
