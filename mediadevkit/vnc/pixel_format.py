"""The RFB pixel format structure and its 16-byte wire form."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any

from mediadevkit.vnc.primitives import read_exact

_WIRE_SIZE = 16
_HEADER = struct.Struct(">BBBB")
_TRUE_COLOR = struct.Struct(">HHHBBB")


@dataclass
class PixelFormat:
    """How a pixel is laid out on a VNC connection."""

    bpp: int = 0
    depth: int = 0
    big_endian: bool = False
    true_color: bool = False
    red_max: int = 0
    green_max: int = 0
    blue_max: int = 0
    red_shift: int = 0
    green_shift: int = 0
    blue_shift: int = 0


def read_pixel_format(stream: Any) -> PixelFormat:
    """Read a 16-byte pixel format from ``stream``.

    Color maxima and shifts are only taken when the true-color flag is set.
    """
    raw = read_exact(stream, _WIRE_SIZE)
    bpp, depth, big_endian, true_color = _HEADER.unpack_from(raw, 0)
    result = PixelFormat(bpp=bpp, depth=depth, big_endian=big_endian != 0)
    if true_color:
        result.true_color = True
        (
            result.red_max,
            result.green_max,
            result.blue_max,
            result.red_shift,
            result.green_shift,
            result.blue_shift,
        ) = _TRUE_COLOR.unpack_from(raw, _HEADER.size)
    return result


def write_pixel_format(fmt: PixelFormat) -> bytes:
    """Encode ``fmt`` as its 16-byte wire form, zero padded."""
    try:
        data = _HEADER.pack(fmt.bpp, fmt.depth, int(fmt.big_endian), int(fmt.true_color))
        if fmt.true_color:
            data += _TRUE_COLOR.pack(
                fmt.red_max,
                fmt.green_max,
                fmt.blue_max,
                fmt.red_shift,
                fmt.green_shift,
                fmt.blue_shift,
            )
    except struct.error as exc:
        raise ValueError(f"pixel format field out of range: {exc}") from None
    return data.ljust(_WIRE_SIZE, b"\x00")