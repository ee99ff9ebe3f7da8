"""Async usage — concurrent downloads on one AsyncClient.

Demonstrates:
- Sharing one AsyncClient across tasks
- Collecting per-call errors with asyncio.gather
- Cancelling one call without disturbing the others
"""

from __future__ import annotations

import asyncio
import os

from dbx_client import AsyncClient, ClientConfig, DropboxError


async def main(token: str) -> None:
    config = ClientConfig.from_dict({"connect_timeout": 30, "user_agent": "dbx-client-example/0.1"})
    async with AsyncClient(token, config=config) as client:
        paths = ["/dbx-client-demo/a.txt", "/dbx-client-demo/b.txt", "/dbx-client-demo/missing.txt"]
        results = await asyncio.gather(*(client.download(p) for p in paths), return_exceptions=True)
        for path, result in zip(paths, results):
            if isinstance(result, DropboxError):
                print(f"{path}: {type(result).__name__}: {result.message}")
            else:
                print(f"{path}: {len(result)} bytes")

        slow = asyncio.create_task(client.download("/dbx-client-demo/large.bin"))
        await asyncio.sleep(0.1)
        slow.cancel()
        try:
            await slow
        except asyncio.CancelledError:
            print("Large download cancelled; client still usable.")
        await client.check_user()


if __name__ == "__main__":
    asyncio.run(main(os.environ["DROPBOX_TOKEN"]))
