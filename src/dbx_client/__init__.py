"""Client for a Dropbox-style file API, with blocking and asyncio flavors."""

from dbx_client._classify import classify, classify_conflict, split_error_summary
from dbx_client._client import AsyncClient, Client
from dbx_client._codec import Request, RequestBuilder
from dbx_client._config import ClientConfig
from dbx_client._errors import (
    AccessError,
    BodyDecodeError,
    ConflictError,
    DropboxError,
    ExistedError,
    FromLookupError,
    InvalidPathError,
    InvalidTokenError,
    OtherError,
    PathError,
    RequestLimitsError,
    ServerError,
    TransportError,
    TransportTimeout,
)
from dbx_client._options import MoveCopyOption, UploadMode, UploadOption
from dbx_client._transport import AsyncResponse, AsyncTransport, Response, Transport

__version__ = "0.1.0"

__all__ = [
    # Core
    "Client",
    "AsyncClient",
    # Options
    "UploadMode",
    "UploadOption",
    "MoveCopyOption",
    # Config
    "ClientConfig",
    # Wire
    "Request",
    "RequestBuilder",
    # Transport port
    "Transport",
    "AsyncTransport",
    "Response",
    "AsyncResponse",
    # Classification
    "classify",
    "classify_conflict",
    "split_error_summary",
    # Errors
    "DropboxError",
    "TransportError",
    "TransportTimeout",
    "BodyDecodeError",
    "InvalidPathError",
    "PathError",
    "InvalidTokenError",
    "AccessError",
    "FromLookupError",
    "ExistedError",
    "ConflictError",
    "RequestLimitsError",
    "ServerError",
    "OtherError",
    # Version
    "__version__",
]
