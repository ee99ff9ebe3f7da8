"""Quickstart — check the token, upload, download and move with dbx_client.

Demonstrates:
- Creating a Client from a token in the environment
- Uploading with UploadOption flags
- Downloading the bytes back
- Moving a file with MoveCopyOption

Run with ``DROPBOX_TOKEN=... python examples/quickstart.py``.
"""

from __future__ import annotations

import os

from dbx_client import Client, MoveCopyOption, UploadOption

if __name__ == "__main__":
    token = os.environ["DROPBOX_TOKEN"]

    with Client(token) as client:
        client.check_user("ping")
        print("Token accepted.")

        client.upload(b"Hello, world!", "/dbx-client-demo/hello.txt", UploadOption().overwrite())
        content = client.download("/dbx-client-demo/hello.txt")
        print(f"Content: {content!r}")

        client.move(
            "/dbx-client-demo/hello.txt",
            "/dbx-client-demo/archive/hello.txt",
            MoveCopyOption().allow_auto_rename(),
        )
        print("Moved to archive/.")

    print("Done!")
