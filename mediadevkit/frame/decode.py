"""Frame formats and the decoder registry."""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from PIL import Image

from mediadevkit.frame.yuv import (
    decode_i420,
    decode_nv12,
    decode_nv21,
    decode_uyvy,
    decode_yuy2,
)
from mediadevkit.frame.z16 import decode_z16


class Format(str, Enum):
    """Raw frame formats a device may deliver."""

    I420 = "I420"
    I444 = "I444"
    NV21 = "NV21"
    NV12 = "NV12"
    YUY2 = "YUY2"
    YUYV = "YUY2"
    UYVY = "UYVY"
    RGBA = "RGBA"
    MJPEG = "MJPEG"
    Z16 = "Z16"

    def __str__(self) -> str:
        return self.value


DecodeFn = Callable[[bytes, int, int], Any]


@dataclass(frozen=True)
class Decoder:
    """Turns raw frames of one format into images."""

    func: DecodeFn

    def decode(self, frame: bytes, width: int, height: int) -> Any:
        """Decode one frame of the given dimensions."""
        return self.func(frame, width, height)

    def __call__(self, frame: bytes, width: int, height: int) -> Any:
        return self.decode(frame, width, height)


def decode_mjpeg(frame: bytes, width: int, height: int) -> Image.Image:
    """Decode a JPEG-compressed frame; the given dimensions are not used."""
    img = Image.open(io.BytesIO(bytes(frame)))
    img.load()
    return img


_DECODERS: dict[Format, DecodeFn] = {
    Format.I420: decode_i420,
    Format.NV21: decode_nv21,
    Format.NV12: decode_nv12,
    Format.YUY2: decode_yuy2,
    Format.UYVY: decode_uyvy,
    Format.MJPEG: decode_mjpeg,
    Format.Z16: decode_z16,
}


def new_decoder(fmt: Format | str) -> Decoder:
    """Return the decoder for ``fmt``; raise ValueError if it is not supported."""
    try:
        key = Format(fmt)
        func = _DECODERS[key]
    except (ValueError, KeyError):
        name = fmt.value if isinstance(fmt, Format) else fmt
        raise ValueError(f"{name} is not supported") from None
    return Decoder(func)