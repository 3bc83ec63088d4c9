"""Echo server: answers every framed message with a timestamped echo."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime

from .protocol import FrameDecoder, encode_message

log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 12345
_READ_SIZE = 65536


def make_response(message: str, now: datetime) -> str:
    """Build the echo reply, stamped with ``now`` as hh:mm:ss.zzz."""
    stamp = f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"
    return f"[{stamp}] Echo: {message}"


class EchoServer:
    """Asyncio TCP server keeping one frame buffer per connection."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        self.host = host
        self.port = port
        self._server: asyncio.base_events.Server | None = None
        self._connections: set[asyncio.StreamWriter] = set()

    async def __aenter__(self) -> "EchoServer":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def start(self) -> None:
        """Bind and listen; raises OSError if the port cannot be used."""
        self._server = await asyncio.start_server(self._handle, self.host, self.port)
        self.port = self._server.sockets[0].getsockname()[1]
        log.info("server listening on port %d", self.port)

    async def serve_forever(self) -> None:
        """Serve until closed, starting first if needed."""
        if self._server is None:
            await self.start()
        assert self._server is not None
        await self._server.serve_forever()

    async def close(self) -> None:
        """Stop listening and close every open connection."""
        server, self._server = self._server, None
        if server is not None:
            server.close()
        for writer in list(self._connections):
            writer.close()
        self._connections.clear()
        if server is not None:
            await server.wait_closed()

    async def _handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        peer = _peer_name(writer)
        log.info("new connection: %s", peer)
        self._connections.add(writer)
        decoder = FrameDecoder()
        try:
            while True:
                chunk = await reader.read(_READ_SIZE)
                if not chunk:
                    break
                for message in decoder.feed(chunk):
                    log.info("received %r from %s", message, peer)
                    writer.write(encode_message(make_response(message, datetime.now())))
                await writer.drain()
        except ConnectionResetError:
            log.info("client closed the connection")
        except OSError as exc:
            log.warning("socket error: %s", exc)
        finally:
            log.info("client disconnected: %s", peer)
            self._connections.discard(writer)
            writer.close()


def _peer_name(writer: asyncio.StreamWriter) -> str:
    peer = writer.get_extra_info("peername")
    return str(peer[0]) if peer else "unknown"


async def _run(host: str, port: int) -> int:
    server = EchoServer(host, port)
    try:
        await server.start()
    except OSError as exc:
        log.critical("server failed to start: %s", exc)
        return 1
    try:
        await server.serve_forever()
    except asyncio.CancelledError:
        pass
    finally:
        await server.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the echo server until interrupted."""
    parser = argparse.ArgumentParser(description="Echo protocol server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        return asyncio.run(_run(args.host, args.port))
    except KeyboardInterrupt:
        return 0