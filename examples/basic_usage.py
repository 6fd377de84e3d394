#!/usr/bin/env python3
"""
Basic usage example for the webhook listener.

Starts a listener on a local port, posts a webhook to it and prints
what the registered consumer received.
"""

import asyncio
import sys
from pathlib import Path

import aiohttp

# Add the src directory to the path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import webhook_listener


async def main():
    """Run a listener and deliver one webhook to it."""
    received = asyncio.Queue()

    async def on_webhook(payload):
        await received.put(payload)

    webhook_listener.register(on_webhook)
    server = await webhook_listener.start(
        {"listener": {"host": "127.0.0.1", "port": 0, "endpoint": "demo"}}
    )
    print(f"Listening on http://127.0.0.1:{server.bound_port}{server.endpoint}")

    try:
        async with aiohttp.ClientSession() as session:
            url = f"http://127.0.0.1:{server.bound_port}{server.endpoint}"
            async with session.post(url, json={"event": "publish", "data": {"id": 1}}) as resp:
                print(f"Response: {resp.status} {await resp.json()}")

        print(f"Consumer received: {await received.get()}")
    finally:
        await server.stop()


if __name__ == "__main__":
    asyncio.run(main())
