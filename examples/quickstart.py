#!/usr/bin/env python3
"""
wsrelay Quickstart — three clients, two messages, one disconnect.

X, Y and Z connect. X says "hello" (Y and Z get it, X doesn't).
Z leaves. Y says "world" (only X gets it).
Run with: python examples/quickstart.py

Requires: pip install httpx websockets
Relay must be running: wsrelay serve   (ws://localhost:3000/)
"""

import asyncio
import sys

import httpx
import websockets

HTTP = "http://localhost:3000"
WS = "ws://localhost:3000/"


async def expect_nothing(ws, who: str, timeout: float = 0.5):
    try:
        msg = await asyncio.wait_for(ws.recv(), timeout)
    except asyncio.TimeoutError:
        print(f"   {who}: (nothing) ✓")
        return
    print(f"   {who}: unexpected {msg!r} ✗")
    sys.exit(1)


async def main():
    # ── Health check ──────────────────────────────────────────────
    print("Checking relay health...")
    try:
        resp = httpx.get(f"{HTTP}/health", timeout=5)
    except httpx.ConnectError:
        print(f"Relay not reachable at {HTTP}. Start it with: wsrelay serve")
        sys.exit(1)
    health = resp.json()
    print(f"  Version:     {health['version']}")
    print(f"  Connections: {health['connections']}")

    # ── Connect X, Y, Z ───────────────────────────────────────────
    print("\n1. Connecting X, Y, Z...")
    x = await websockets.connect(WS)
    y = await websockets.connect(WS)
    z = await websockets.connect(WS)

    # ── X → everyone else ─────────────────────────────────────────
    print('\n2. X sends "hello"')
    await x.send("hello")
    print(f"   Y: {await y.recv()!r}")
    print(f"   Z: {await z.recv()!r}")
    await expect_nothing(x, "X")

    # ── Z leaves, Y → everyone else ───────────────────────────────
    print('\n3. Z disconnects, Y sends "world"')
    await z.close()
    await y.send("world")
    print(f"   X: {await x.recv()!r}")
    await expect_nothing(y, "Y")

    await x.close()
    await y.close()
    print("\nDone.")


if __name__ == "__main__":
    asyncio.run(main())
