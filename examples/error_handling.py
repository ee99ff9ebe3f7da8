"""Error handling — catching classified errors and acting on retry-after.

Demonstrates the closed error hierarchy and how to react programmatically
using structured attributes, plus the opt-in tenacity helper.
"""

from __future__ import annotations

import os
import time

from dbx_client import (
    Client,
    DropboxError,
    ExistedError,
    FromLookupError,
    InvalidTokenError,
    PathError,
    RequestLimitsError,
    TransportError,
)
from dbx_client.retry import retry_rate_limited

if __name__ == "__main__":
    token = os.environ.get("DROPBOX_TOKEN", "not-a-real-token")

    with Client(token) as client:
        # --- InvalidTokenError ---
        try:
            client.check_user()
        except InvalidTokenError as exc:
            print(f"InvalidTokenError: {exc}")
            raise SystemExit(1) from None

        # --- PathError (409 path/not_found/...) ---
        try:
            client.download("/definitely/missing.txt")
        except PathError as exc:
            print(f"PathError: {exc.message} (status={exc.status})")

        # --- FromLookupError / ExistedError on move ---
        try:
            client.move("/missing-source.txt", "/target.txt")
        except FromLookupError as exc:
            print(f"\nFromLookupError: {exc.message}")
        except ExistedError as exc:
            print(f"\nExistedError: {exc.message}")

        # --- RequestLimitsError carries the server's advice ---
        try:
            client.download("/dbx-client-demo/hello.txt")
        except RequestLimitsError as exc:
            if exc.retry_after is not None:
                print(f"\nRate limited, sleeping {exc.retry_after}s")
                time.sleep(exc.retry_after)
        except DropboxError as exc:
            print(f"\n{type(exc).__name__}: {exc}")

        # --- Or let tenacity do it ---
        @retry_rate_limited(attempts=4, max_wait=60)
        def fetch(path: str) -> bytes:
            return client.download(path)

        try:
            print(f"\nFetched {len(fetch('/dbx-client-demo/hello.txt'))} bytes")
        except TransportError as exc:
            print(f"\nTransport failed ({exc.transport}): {exc}")
        except DropboxError as exc:
            print(f"\nGave up: {type(exc).__name__}: {exc}")

    print("\nDone!")
