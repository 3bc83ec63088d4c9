"""Length-prefixed message framing shared by the echo client and server.

Every frame is a 4-byte big-endian unsigned length followed by that many
bytes of UTF-8 text.
"""

from __future__ import annotations

import struct

_HEADER = struct.Struct(">I")
HEADER_SIZE = _HEADER.size
MAX_MESSAGE_SIZE = 0xFFFFFFFF


def encode_message(message: str) -> bytes:
    """Return one frame carrying ``message``."""
    payload = message.encode("utf-8")
    if len(payload) > MAX_MESSAGE_SIZE:
        raise ValueError("message too large for a 32-bit length header")
    return _HEADER.pack(len(payload)) + payload


class FrameDecoder:
    """Reassembles frames from a byte stream that may split or merge them."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        """Add received bytes and return every message completed by them."""
        self._buffer.extend(data)
        messages: list[str] = []
        while len(self._buffer) >= HEADER_SIZE:
            (size,) = _HEADER.unpack_from(self._buffer)
            end = HEADER_SIZE + size
            if len(self._buffer) < end:
                break
            payload = bytes(self._buffer[HEADER_SIZE:end])
            del self._buffer[:end]
            messages.append(payload.decode("utf-8", errors="replace"))
        return messages

    def pending(self) -> int:
        """Number of buffered bytes not yet forming a complete frame."""
        return len(self._buffer)