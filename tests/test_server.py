import asyncio
import re
from datetime import datetime

import pytest

from echoplay.protocol import FrameDecoder, encode_message
from echoplay.server import EchoServer, make_response

RESPONSE = re.compile(r"\[\d{2}:\d{2}:\d{2}\.\d{3}\] Echo: (.*)", re.S)


async def read_frames(reader, count):
    decoder = FrameDecoder()
    frames = []
    while len(frames) < count:
        chunk = await asyncio.wait_for(reader.read(65536), 5)
        assert chunk, "connection closed early"
        frames.extend(decoder.feed(chunk))
    return frames


def test_make_response_format():
    now = datetime(2024, 1, 2, 3, 4, 5, 678000)
    assert make_response("hi", now) == "[03:04:05.678] Echo: hi"


def test_make_response_pads_milliseconds():
    now = datetime(2024, 1, 2, 23, 59, 1, 7000)
    assert make_response("x", now).startswith("[23:59:01.007]")


@pytest.mark.parametrize("text", ["", "hello", "您好!"])
def test_make_response_keeps_message(text):
    match = RESPONSE.fullmatch(make_response(text, datetime.now()))
    assert match is not None
    assert match.group(1) == text


@pytest.mark.asyncio
async def test_echoes_single_message():
    async with EchoServer("127.0.0.1", 0) as server:
        reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
        writer.write(encode_message("hello"))
        await writer.drain()
        (reply,) = await read_frames(reader, 1)
        writer.close()
    assert RESPONSE.fullmatch(reply).group(1) == "hello"


@pytest.mark.asyncio
async def test_echoes_split_and_merged_frames():
    async with EchoServer("127.0.0.1", 0) as server:
        reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
        data = encode_message("a") + encode_message("您好!") + encode_message("c")
        writer.write(data[:3])
        await writer.drain()
        await asyncio.sleep(0.05)
        writer.write(data[3:])
        await writer.drain()
        replies = await read_frames(reader, 3)
        writer.close()
    assert [RESPONSE.fullmatch(r).group(1) for r in replies] == ["a", "您好!", "c"]


@pytest.mark.asyncio
async def test_connections_have_separate_buffers():
    async with EchoServer("127.0.0.1", 0) as server:
        r1, w1 = await asyncio.open_connection("127.0.0.1", server.port)
        r2, w2 = await asyncio.open_connection("127.0.0.1", server.port)
        frame1 = encode_message("first")
        w1.write(frame1[:6])
        await w1.drain()
        w2.write(encode_message("second"))
        await w2.drain()
        (reply2,) = await read_frames(r2, 1)
        w1.write(frame1[6:])
        await w1.drain()
        (reply1,) = await read_frames(r1, 1)
        w1.close()
        w2.close()
    assert RESPONSE.fullmatch(reply1).group(1) == "first"
    assert RESPONSE.fullmatch(reply2).group(1) == "second"


@pytest.mark.asyncio
async def test_start_assigns_port():
    server = EchoServer("127.0.0.1", 0)
    await server.start()
    try:
        assert server.port > 0
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_start_on_busy_port_raises():
    async with EchoServer("127.0.0.1", 0) as first:
        second = EchoServer("127.0.0.1", first.port)
        with pytest.raises(OSError):
            await second.start()


@pytest.mark.asyncio
async def test_close_disconnects_clients():
    server = EchoServer("127.0.0.1", 0)
    await server.start()
    reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
    writer.write(encode_message("ping"))
    await writer.drain()
    await read_frames(reader, 1)
    await server.close()
    rest = await asyncio.wait_for(reader.read(), 5)
    writer.close()
    assert rest == b""


@pytest.mark.asyncio
async def test_serve_forever_ends_on_close():
    server = EchoServer("127.0.0.1", 0)
    task = asyncio.create_task(server.serve_forever())
    await asyncio.sleep(0.05)
    reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
    writer.write(encode_message("run"))
    await writer.drain()
    (reply,) = await read_frames(reader, 1)
    writer.close()
    await server.close()
    with pytest.raises(asyncio.CancelledError):
        await asyncio.wait_for(task, 5)
    assert RESPONSE.fullmatch(reply).group(1) == "run"