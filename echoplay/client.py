"""Echo client: connects, greets the server and yields its replies."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import AsyncIterator

from .protocol import FrameDecoder, encode_message

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 12345
GREETING = "您好!"
_READ_SIZE = 65536


class EchoClient:
    """Asyncio client for the length-prefixed echo protocol."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        self.host = host
        self.port = port
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._decoder = FrameDecoder()

    async def __aenter__(self) -> "EchoClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return self._writer is not None and not self._writer.is_closing()

    async def connect(self) -> None:
        """Open the connection and send the greeting."""
        log.info("connecting to server %s:%d...", self.host, self.port)
        self._reader, self._writer = await asyncio.open_connection(self.host, self.port)
        self._decoder = FrameDecoder()
        log.info("connected to server")
        await self.send_message(GREETING)

    async def send_message(self, message: str) -> None:
        """Send one framed message; raises ConnectionError when not connected."""
        if not self.connected:
            raise ConnectionError("not connected to server")
        assert self._writer is not None
        self._writer.write(encode_message(message))
        await self._writer.drain()
        log.debug("sent: %s", message)

    async def messages(self) -> AsyncIterator[str]:
        """Yield each message from the server until the connection ends."""
        if self._reader is None:
            raise ConnectionError("not connected to server")
        reader = self._reader
        while True:
            try:
                chunk = await reader.read(_READ_SIZE)
            except ConnectionResetError:
                log.info("server closed the connection")
                break
            except OSError as exc:
                log.warning("socket error: %s", exc)
                break
            if not chunk:
                log.info("disconnected from server")
                break
            for message in self._decoder.feed(chunk):
                yield message
        await self.close()

    async def close(self) -> None:
        """Close the connection; safe to call more than once."""
        writer, self._writer, self._reader = self._writer, None, None
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass


async def _run(host: str, port: int) -> int:
    client = EchoClient(host, port)
    try:
        await client.connect()
    except OSError as exc:
        log.error("could not connect to %s:%d: %s", host, port, exc)
        return 1
    async for message in client.messages():
        print(message, flush=True)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Connect to an echo server and print the replies."""
    parser = argparse.ArgumentParser(description="Echo protocol client.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        return asyncio.run(_run(args.host, args.port))
    except KeyboardInterrupt:
        return 0