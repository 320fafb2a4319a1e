"""Small value types and stream helpers shared by the VNC client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Any


@dataclass(frozen=True)
class Color:
    """A single color in a color map, 16 bits per channel."""

    r: int = 0
    g: int = 0
    b: int = 0


class ButtonMask(IntFlag):
    """Pointer buttons; a set bit means the button is pressed."""

    LEFT = 1
    MIDDLE = 2
    RIGHT = 4
    BUTTON4 = 8
    BUTTON5 = 16
    BUTTON6 = 32
    BUTTON7 = 64
    BUTTON8 = 128


@dataclass
class Rectangle:
    """A rectangle of pixel data within a framebuffer update."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    enc: Any = None


def read_exact(stream: Any, size: int) -> bytes:
    """Read exactly ``size`` bytes from a socket-like or file-like object.

    Raises EOFError if the stream ends first.
    """
    if size < 0:
        raise ValueError(f"negative read size: {size}")
    recv = getattr(stream, "recv", None)
    read_chunk = recv if recv is not None else stream.read
    parts: list[bytes] = []
    remaining = size
    while remaining:
        chunk = read_chunk(remaining)
        if not chunk:
            raise EOFError(
                f"unexpected end of stream: wanted {size} bytes, got {size - remaining}"
            )
        parts.append(bytes(chunk))
        remaining -= len(chunk)
    return b"".join(parts)