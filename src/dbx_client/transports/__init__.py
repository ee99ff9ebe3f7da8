"""Transport implementations."""

from dbx_client.transports._httpx import AsyncHttpxTransport, HttpxTransport

__all__ = ["AsyncHttpxTransport", "HttpxTransport"]
