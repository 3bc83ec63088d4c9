import asyncio
import contextlib

import pytest

from echoplay.client import GREETING, EchoClient
from echoplay.protocol import FrameDecoder, encode_message


@contextlib.asynccontextmanager
async def fake_server(replies=()):
    """Server that records received messages and sends fixed replies then closes."""
    received = []
    done = asyncio.Event()

    async def handle(reader, writer):
        decoder = FrameDecoder()
        chunk = await reader.read(65536)
        received.extend(decoder.feed(chunk))
        for reply in replies:
            writer.write(encode_message(reply))
        await writer.drain()
        writer.close()
        done.set()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port, received, done
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_connect_sends_greeting():
    async with fake_server() as (port, received, done):
        client = EchoClient("127.0.0.1", port)
        await client.connect()
        assert client.connected is True
        await asyncio.wait_for(done.wait(), 5)
        await client.close()
        assert client.connected is False
    assert received == [GREETING]


@pytest.mark.asyncio
async def test_messages_yields_replies_until_close():
    async with fake_server(["one", "两", ""]) as (port, received, done):
        client = EchoClient("127.0.0.1", port)
        await client.connect()
        got = [m async for m in client.messages()]
    assert got == ["one", "两", ""]
    assert client.connected is False


@pytest.mark.asyncio
async def test_send_before_connect_raises():
    client = EchoClient("127.0.0.1", 1)
    with pytest.raises(ConnectionError):
        await client.send_message("hello")


@pytest.mark.asyncio
async def test_messages_before_connect_raises():
    client = EchoClient("127.0.0.1", 1)
    with pytest.raises(ConnectionError):
        async for _ in client.messages():
            pass


@pytest.mark.asyncio
async def test_send_after_close_raises():
    async with fake_server() as (port, received, done):
        client = EchoClient("127.0.0.1", port)
        await client.connect()
        await client.close()
        with pytest.raises(ConnectionError):
            await client.send_message("late")
        await client.close()
    assert client.connected is False


@pytest.mark.asyncio
async def test_context_manager_connects():
    async with fake_server(["ack"]) as (port, received, done):
        async with EchoClient("127.0.0.1", port) as client:
            assert client.connected is True
            got = [m async for m in client.messages()]
    assert got == ["ack"]
    assert received == [GREETING]


def test_main_returns_error_when_unreachable():
    async def free_port():
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()
        return port

    port = asyncio.run(free_port())
    from echoplay.client import main

    assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1