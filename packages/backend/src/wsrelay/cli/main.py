"""wsrelay CLI — run the relay, or poke at one from the terminal.

Usage:
    wsrelay serve                                  # Listen on 0.0.0.0:3000
    wsrelay serve --port 9000 --log-level debug    # Override settings
    wsrelay send "hello"                           # Send one message
    wsrelay listen -u ws://relay.lan:3000/ -n 5    # Print the next 5 messages
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
import uvicorn
import websockets

from wsrelay import __version__
from wsrelay.config import settings
from wsrelay.log import configure_logging

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _default_url() -> str:
    host = "localhost" if settings.host in ("0.0.0.0", "") else settings.host
    return f"ws://{host}:{settings.port}{settings.ws_path}"


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _format_message(message: str | bytes) -> str:
    if isinstance(message, bytes):
        return f"<{len(message)} bytes> {message.hex()}"
    return message


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="wsrelay")
def main():
    """wsrelay — forward every client's messages to every other client."""


# ---------------------------------------------------------------------------
# wsrelay serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help=f"Bind address (default {settings.host})")
@click.option("--port", "-p", type=int, default=None, help=f"Port (default {settings.port})")
@click.option("--path", "ws_path", default=None, help=f"WebSocket path (default {settings.ws_path})")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error", "critical"], case_sensitive=False),
    default=None,
    help=f"Log level (default {settings.log_level.lower()})",
)
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
def serve(host: Optional[str], port: Optional[int], ws_path: Optional[str],
          log_level: Optional[str], json_logs: bool):
    """Run the relay until interrupted."""
    overrides = {
        "host": host,
        "port": port,
        "ws_path": ws_path,
        "log_level": log_level.upper() if log_level else None,
        "log_json": json_logs or None,
    }
    config = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    if not config.ws_path.startswith("/"):
        _fail("--path must start with '/'")

    configure_logging(config.log_level, json=config.log_json)

    from wsrelay.main import create_app

    # uvicorn exits the process non-zero if the port cannot be bound
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )


# ---------------------------------------------------------------------------
# wsrelay send
# ---------------------------------------------------------------------------


@main.command()
@click.argument("message")
@click.option("--url", "-u", default=None, help="Relay URL (default from WSRELAY_* settings)")
@click.option("--binary", is_flag=True, help="Send MESSAGE as a binary frame (UTF-8 bytes)")
def send(message: str, url: Optional[str], binary: bool):
    """Send MESSAGE to every other client connected to the relay."""
    payload: str | bytes = message.encode("utf-8") if binary else message
    asyncio.run(_send_impl(url or _default_url(), payload))


async def _send_impl(url: str, payload: str | bytes):
    try:
        async with websockets.connect(url) as ws:
            await ws.send(payload)
    except (OSError, websockets.WebSocketException) as e:
        _fail(f"could not send to {url}: {e}")
        return
    click.secho(f"Sent {len(payload)} {'bytes' if isinstance(payload, bytes) else 'chars'} to {url}", fg="green")


# ---------------------------------------------------------------------------
# wsrelay listen
# ---------------------------------------------------------------------------


@main.command()
@click.option("--url", "-u", default=None, help="Relay URL (default from WSRELAY_* settings)")
@click.option("--count", "-n", type=int, default=0, help="Exit after N messages (0 = forever)")
def listen(url: Optional[str], count: int):
    """Print messages relayed from other clients."""
    asyncio.run(_listen_impl(url or _default_url(), count))


async def _listen_impl(url: str, count: int):
    received = 0
    try:
        async with websockets.connect(url) as ws:
            click.secho(f"Listening on {url}", fg="green", err=True)
            async for message in ws:
                click.echo(_format_message(message))
                received += 1
                if count and received >= count:
                    break
    except websockets.ConnectionClosed as e:
        _fail(f"relay closed the connection: {e}")
    except (OSError, websockets.WebSocketException) as e:
        _fail(f"could not connect to {url}: {e}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
