# echoplay

`echoplay` holds two small pieces of networking and media code:

- a TCP echo **server** and **client**, built on asyncio, that exchange
  length-prefixed UTF-8 messages, and
- the toolkit-free **control logic of a video player**: the seek slider's
  geometry and the player state machine (play/pause, mute, volume, speed,
  seeking, full screen, time label).

It needs nothing outside the standard library.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Wire format (`echoplay.protocol`)

Every message is a frame made of a 4-byte big-endian unsigned length
followed by that many bytes of UTF-8 text. Several frames may arrive in one
read, and one frame may be split over several reads; the decoder copes with
both.

```python
from echoplay.protocol import encode_message, FrameDecoder

frame = encode_message("hello")
decoder = FrameDecoder()
decoder.feed(frame[:3])   # [] - header not complete yet
decoder.feed(frame[3:])   # ["hello"]
decoder.pending()         # 0 - bytes still waiting for a full frame
```

`encode_message` raises `ValueError` for a message whose UTF-8 form does not
fit a 32-bit length. `FrameDecoder.feed` returns a list of every message the
new bytes complete; invalid UTF-8 is decoded with replacement characters.

## The echo server

```
echoplay-server [--host HOST] [--port PORT]
```

By default the server listens on port 12345 on every IPv4 address
(`0.0.0.0`). For each message it receives it replies with one frame of the
form

```
[hh:mm:ss.zzz] Echo: <message>
```

stamped with the local time to the millisecond. The reply text can be built
on its own with `echoplay.server.make_response(message, now)`, where `now` is
a `datetime`. If the port cannot be bound the command logs the error and
exits with status 1; Ctrl-C stops it.

From code, `EchoServer` is used inside a running event loop:

```python
from echoplay.server import EchoServer

async def run():
    async with EchoServer("127.0.0.1", 0) as server:   # port 0: pick a free port
        print(server.port)                             # the port actually bound
        await server.serve_forever()
```

`start()` binds and listens (raising `OSError` on failure), `serve_forever()`
handles clients until cancelled (starting first if needed), and `close()`
stops listening and closes every open connection. Each connection keeps its
own frame buffer.

## The echo client

```
echoplay-client [--host HOST] [--port PORT]
```

By default the client connects to 127.0.0.1 on port 12345, greets the server
with `您好!`, and prints every reply it receives until the server closes the
connection. If it cannot connect it logs the error and exits with status 1.

From code:

```python
from echoplay.client import EchoClient

async def run():
    async with EchoClient("127.0.0.1", 12345) as client:   # connects and greets
        await client.send_message("hello")
        async for reply in client.messages():
            print(reply)
```

`connect()` opens the connection and sends the greeting,
`send_message(text)` sends one framed message, `messages()` yields the
replies as they arrive and closes the client when the connection ends, and
`close()` ends the session (it is safe to call twice). The `connected`
property tells whether the connection is open. Sending, or asking for
messages, while not connected raises `ConnectionError`.

## Slider geometry (`echoplay.slider`)

- `slider_value_from_position(minimum, maximum, position, span, upside_down)`
  maps a pixel offset along a track of `span` pixels to a slider value,
  rounding to the nearest value and clamping at both ends.
- `jump_value(minimum, maximum, click, groove, handle, horizontal, upside_down)`
  turns a click `(x, y)` on the groove into the value to jump to, measured
  from the handle's centre, for horizontal or vertical sliders. A click on
  the handle itself returns `None`, leaving the ordinary drag behaviour.
- `paint_layout(width, height, value, minimum, maximum)` returns a
  `SliderLayout` with the `groove`, `progress_bar` and `handle` rectangles to
  draw and the filled `fraction`. The groove is inset 2 pixels horizontally
  and 10 vertically; the round handle is 12 pixels across.

`Rect(x, y, width, height)` is a frozen dataclass with `left`, `top`,
`center_y` and `contains(x, y)`.

## Player control (`echoplay.player`)

`PlayerController` drives a media backend you supply. The backend follows
the `MediaBackend` protocol: attributes `duration`, `position` (both in
milliseconds) and `playing`, and methods `set_source(path)`, `play()`,
`pause()`, `set_position(ms)`, `set_playback_rate(rate)` and
`set_volume(fraction)`.

The controller keeps the state a player window shows and acts on the
backend:

- `load(path)` sets the source and starts playing; it returns `False` and
  does nothing for an empty path. Play/pause is disabled until a file is
  loaded.
- `toggle_play()` plays or pauses, and starts or stops the periodic position
  refresh (`timer_running`); `tick()` is that refresh, to be called every
  `POSITION_INTERVAL_MS` (100 ms).
- `toggle_mute()` and `set_volume(volume)` handle sound; volume runs from 0
  to 100, starts at 50, and a volume of 0 counts as muted.
- `set_playback_speed(speed)` sets the rate; `SPEEDS` offers 0.5, 1.0, 1.5
  and 2.0, with 1.0 the default.
- `seek_percent(percent)`, `jump_to(percent)`, `slider_pressed()` and
  `slider_released()` handle the progress slider; playback pauses while the
  slider is dragged and resumes afterwards if it was playing.
- `on_duration_changed(ms)` and `on_position_changed(ms)` are fed from the
  backend and update `progress` and the time label.
- `toggle_fullscreen()` and `escape()` track the full-screen flag; `escape()`
  returns whether it left full screen.
- `time_label()` gives the `mm:ss/mm:ss` text, `"00:00/00:00"` at first.

`format_clock(milliseconds)` does the `mm:ss` formatting on its own,
wrapping at a day like a clock.

## What it does not do

The player part is logic only. There is no window, no video or audio
decoding, no file dialog and no command that starts a player: you supply
the media backend and the user interface, and call the controller from
them. The echo client sends only its greeting from the command line; it
has no interactive prompt for further messages.