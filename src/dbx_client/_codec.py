"""Wire codec — builds the exact request each operation sends. No I/O."""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING

from dbx_client._errors import InvalidPathError

if TYPE_CHECKING:
    from dbx_client._config import ClientConfig
    from dbx_client._options import MoveCopyOption, UploadOption

CHECK_USER_PATH = "/2/check/user"
UPLOAD_PATH = "/2/files/upload"
DOWNLOAD_PATH = "/2/files/download"
MOVE_PATH = "/2/files/move_v2"
COPY_PATH = "/2/files/copy_v2"

API_ARG_HEADER = "Dropbox-API-Arg"
_SENSITIVE_HEADERS = frozenset({"authorization"})

_MOVE_COPY_PATHS = {"move": MOVE_PATH, "copy": COPY_PATH}


def encode_json(payload: dict[str, object]) -> str:
    """Compact, ASCII-only JSON; safe to place in a header value."""
    return json.dumps(payload, separators=(",", ":"))


@dataclasses.dataclass(frozen=True)
class Request:
    """A fully built request, ready for a transport.

    :param method: HTTP method.
    :param url: Absolute URL.
    :param headers: Header names to values, Authorization included.
    :param body: Raw body bytes (empty for no body).
    """

    method: str
    url: str
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""

    def __repr__(self) -> str:
        shown = {k: ("<redacted>" if k.lower() in _SENSITIVE_HEADERS else v) for k, v in self.headers.items()}
        return f"Request(method={self.method!r}, url={self.url!r}, headers={shown!r}, body=<{len(self.body)} bytes>)"


def _require_path(path: str, name: str = "path") -> str:
    if not path:
        raise InvalidPathError(f"{name} must not be empty")
    return path


class RequestBuilder:
    """Builds one :class:`Request` per operation for a given token and config.

    Paths are passed through untouched; the service is the authority on
    path syntax. Only emptiness is checked locally.

    :param token: Bearer token.
    :param config: Endpoint configuration.
    """

    __slots__ = ("_auth", "_config")

    def __init__(self, token: str, config: ClientConfig) -> None:
        self._auth = f"Bearer {token}"
        self._config = config

    def __repr__(self) -> str:
        return f"RequestBuilder(api_url={self._config.api_url!r}, content_url={self._config.content_url!r})"

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        headers = {"Authorization": self._auth}
        if self._config.user_agent:
            headers["User-Agent"] = self._config.user_agent
        if content_type is not None:
            headers["Content-Type"] = content_type
        return headers

    def _rpc(self, endpoint: str, payload: dict[str, object]) -> Request:
        return Request(
            method="POST",
            url=self._config.api_url + endpoint,
            headers=self._headers("application/json"),
            body=encode_json(payload).encode("utf-8"),
        )

    def check_user(self, query: str) -> Request:
        return self._rpc(CHECK_USER_PATH, {"query": query})

    def upload(self, content: bytes, path: str, option: UploadOption) -> Request:
        _require_path(path)
        headers = self._headers("application/octet-stream")
        headers[API_ARG_HEADER] = encode_json(option.to_arg(path))
        return Request(method="POST", url=self._config.content_url + UPLOAD_PATH, headers=headers, body=bytes(content))

    def download(self, path: str) -> Request:
        _require_path(path)
        headers = self._headers()
        headers[API_ARG_HEADER] = encode_json({"path": path})
        return Request(method="POST", url=self._config.content_url + DOWNLOAD_PATH, headers=headers)

    def move_or_copy(self, kind: str, from_path: str, to_path: str, option: MoveCopyOption) -> Request:
        """Build a move or copy request.

        :param kind: ``"move"`` or ``"copy"``.
        :raises ValueError: If ``kind`` is neither.
        :raises InvalidPathError: If either path is empty.
        """
        if kind not in _MOVE_COPY_PATHS:
            raise ValueError(f"kind must be 'move' or 'copy', got {kind!r}")
        _require_path(from_path, "from_path")
        _require_path(to_path, "to_path")
        return self._rpc(_MOVE_COPY_PATHS[kind], option.to_arg(from_path, to_path))
