"""Decoder for 16-bit little-endian depth frames."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from mediadevkit.frame.yuv import FrameLengthError


@dataclass(frozen=True)
class Gray16Image:
    """A 16-bit grayscale image; ``pix`` holds big-endian samples row by row."""

    pix: bytes
    stride: int
    width: int
    height: int

    def at(self, x: int, y: int) -> int:
        """Sample value at ``(x, y)``; points outside the image read as 0."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return 0
        offset = y * self.stride + 2 * x
        return (self.pix[offset] << 8) | self.pix[offset + 1]

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """The image rectangle as ``(x0, y0, x1, y1)``."""
        return (0, 0, self.width, self.height)


def decode_z16(frame: bytes, width: int, height: int) -> Gray16Image:
    """Decode a Z16 depth frame of little-endian 16-bit samples in row order."""
    count = width * height
    expected = 2 * count
    if len(frame) != expected:
        raise FrameLengthError(
            f"frame length ({len(frame)}) not expected size ({expected})"
        )
    values = struct.unpack(f"<{count}H", bytes(frame))
    return Gray16Image(
        pix=struct.pack(f">{count}H", *values),
        stride=2 * width,
        width=width,
        height=height,
    )