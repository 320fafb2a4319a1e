"""Pixel data encodings that a VNC server may use for rectangles."""

from __future__ import annotations

import struct
import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from mediadevkit.vnc.primitives import Color, Rectangle, read_exact


class Encoding(ABC):
    """A method of encoding rectangle pixel data.

    ``read`` receives the connection (which exposes ``pixel_format`` and
    ``color_map``), the rectangle header and the stream, and returns a new
    encoding holding the decoded data.
    """

    #: The number that identifies this encoding on the wire.
    type: ClassVar[int]

    @abstractmethod
    def read(self, conn: Any, rect: Rectangle, stream: Any) -> Encoding:
        """Read this rectangle's encoded data from ``stream``."""


def _pixel_value(chunk: bytes, bpp: int, order: str) -> int:
    if bpp in (8, 16, 32):
        return int.from_bytes(chunk, order)
    return 0


def _expand(value: int, shift: int) -> int:
    return ((value << shift) | (value >> 2)) & 0xFFFF


def _decode_pixels(conn: Any, rect: Rectangle, data: bytes) -> tuple[list[Color], list[int]]:
    pf = conn.pixel_format
    size = pf.bpp // 8
    order = "big" if pf.big_endian else "little"
    colors: list[Color] = []
    raw_pixels: list[int] = []
    for index in range(rect.width * rect.height):
        value = _pixel_value(data[index * size : (index + 1) * size], pf.bpp, order)
        if pf.true_color:
            r = (value >> pf.red_shift) & pf.red_max & 0xFFFF
            g = (value >> pf.green_shift) & pf.green_max & 0xFFFF
            b = (value >> pf.blue_shift) & pf.blue_max & 0xFFFF
            if pf.bpp == 16:
                r, g, b = _expand(r, 3), _expand(g, 2), _expand(b, 3)
            color = Color(r, g, b)
        else:
            color = conn.color_map[value]
        colors.append(color)
        raw_pixels.append(
            (0xFF << 24 | color.b << 16 | color.g << 8 | color.r) & 0xFFFFFFFF
        )
    return colors, raw_pixels


def _payload_size(conn: Any, rect: Rectangle) -> int:
    return rect.width * rect.height * (conn.pixel_format.bpp // 8)


@dataclass
class CursorEncoding(Encoding):
    """Cursor pseudo-encoding; its data is read and discarded."""

    type: ClassVar[int] = -239

    def read(self, conn: Any, rect: Rectangle, stream: Any) -> CursorEncoding:
        """Skip the cursor pixels and its bitmask."""
        read_exact(stream, rect.height * rect.width * conn.pixel_format.bpp // 8)
        read_exact(stream, ((rect.width + 7) // 8) * rect.height)
        return CursorEncoding()


@dataclass
class RawEncoding(Encoding):
    """Uncompressed pixel data; ``raw_pixel`` holds packed RGBA (R in the low byte)."""

    type: ClassVar[int] = 0

    colors: list[Color] = field(default_factory=list)
    raw_pixel: list[int] = field(default_factory=list)

    def read(self, conn: Any, rect: Rectangle, stream: Any) -> RawEncoding:
        """Read and decode one rectangle of raw pixels."""
        data = read_exact(stream, _payload_size(conn, rect))
        colors, raw_pixels = _decode_pixels(conn, rect, data)
        return RawEncoding(colors=colors, raw_pixel=raw_pixels)


@dataclass
class ZlibEncoding(Encoding):
    """Raw pixels compressed with one zlib stream kept across rectangles."""

    type: ClassVar[int] = 6

    colors: list[Color] = field(default_factory=list)
    raw_pixel: list[int] = field(default_factory=list)
    _inflater: Any = field(default=None, init=False, repr=False, compare=False)
    _pending: bytes = field(default=b"", init=False, repr=False, compare=False)

    def read(self, conn: Any, rect: Rectangle, stream: Any) -> ZlibEncoding:
        """Read a length-prefixed compressed chunk and decode one rectangle.

        The first chunk after creation or ``close`` must start a zlib stream;
        later chunks continue it.
        """
        (length,) = struct.unpack(">I", read_exact(stream, 4))
        compressed = read_exact(stream, length)
        if self._inflater is None:
            self._inflater = zlib.decompressobj()
        try:
            self._pending += self._inflater.decompress(compressed)
        except zlib.error:
            self.close()
            raise
        size = _payload_size(conn, rect)
        if len(self._pending) < size:
            raise EOFError(
                f"zlib stream ended early: wanted {size} bytes, got {len(self._pending)}"
            )
        data, self._pending = self._pending[:size], self._pending[size:]
        colors, raw_pixels = _decode_pixels(conn, rect, data)
        return ZlibEncoding(colors=colors, raw_pixel=raw_pixels)

    def close(self) -> None:
        """Drop the zlib stream; the next chunk must start a new one."""
        self._inflater = None
        self._pending = b""