"""Decoders for planar and packed YUV frame layouts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FrameLengthError(ValueError):
    """Raised when a raw frame is shorter (or longer) than its layout needs."""


class SubsampleRatio(str, Enum):
    """Chroma subsampling ratio of a YCbCr image."""

    RATIO_444 = "4:4:4"
    RATIO_422 = "4:2:2"
    RATIO_420 = "4:2:0"


@dataclass(frozen=True)
class YCbCrImage:
    """A YCbCr image with separate luma and chroma planes."""

    y: bytes
    y_stride: int
    cb: bytes
    cr: bytes
    c_stride: int
    subsample_ratio: SubsampleRatio
    width: int
    height: int

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """The image rectangle as ``(x0, y0, x1, y1)``."""
        return (0, 0, self.width, self.height)


def _require_length(frame: bytes, expected: int) -> None:
    if len(frame) < expected:
        raise FrameLengthError(
            f"frame length ({len(frame)}) less than expected ({expected})"
        )


def decode_i420(frame: bytes, width: int, height: int) -> YCbCrImage:
    """Decode a planar I420 frame: Y plane, then Cb, then Cr at quarter size."""
    yi = width * height
    cbi = yi + width * height // 4
    cri = cbi + width * height // 4
    _require_length(frame, cri)
    return YCbCrImage(
        y=bytes(frame[:yi]),
        y_stride=width,
        cb=bytes(frame[yi:cbi]),
        cr=bytes(frame[cbi:cri]),
        c_stride=width // 2,
        subsample_ratio=SubsampleRatio.RATIO_420,
        width=width,
        height=height,
    )


def decode_nv21(frame: bytes, width: int, height: int) -> YCbCrImage:
    """Decode an NV21 frame: Y plane followed by interleaved Cr/Cb pairs."""
    yi = width * height
    ci = yi + width * height // 2
    _require_length(frame, ci)
    return YCbCrImage(
        y=bytes(frame[:yi]),
        y_stride=width,
        cb=bytes(frame[yi + 1 : ci + 1 : 2]),
        cr=bytes(frame[yi:ci:2]),
        c_stride=width // 2,
        subsample_ratio=SubsampleRatio.RATIO_420,
        width=width,
        height=height,
    )


def decode_nv12(frame: bytes, width: int, height: int) -> YCbCrImage:
    """Decode an NV12 frame: like NV21 with the chroma order swapped."""
    img = decode_nv21(frame, width, height)
    return YCbCrImage(
        y=img.y,
        y_stride=img.y_stride,
        cb=img.cr,
        cr=img.cb,
        c_stride=img.c_stride,
        subsample_ratio=img.subsample_ratio,
        width=img.width,
        height=img.height,
    )


def _packed_sizes(width: int, height: int) -> tuple[int, int]:
    yi = width * height
    ci = yi // 2
    return yi, yi + 2 * ci


def decode_yuy2(frame: bytes, width: int, height: int) -> YCbCrImage:
    """Decode a packed YUY2 (Y Cb Y Cr) frame."""
    _, fi = _packed_sizes(width, height)
    _require_length(frame, fi)
    return YCbCrImage(
        y=bytes(frame[0:fi:2]),
        y_stride=width,
        cb=bytes(frame[1:fi:4]),
        cr=bytes(frame[3:fi:4]),
        c_stride=width // 2,
        subsample_ratio=SubsampleRatio.RATIO_422,
        width=width,
        height=height,
    )


def decode_uyvy(frame: bytes, width: int, height: int) -> YCbCrImage:
    """Decode a packed UYVY (Cb Y Cr Y) frame."""
    _, fi = _packed_sizes(width, height)
    _require_length(frame, fi)
    return YCbCrImage(
        y=bytes(frame[1:fi:2]),
        y_stride=width,
        cb=bytes(frame[0:fi:4]),
        cr=bytes(frame[2:fi:4]),
        c_stride=width // 2,
        subsample_ratio=SubsampleRatio.RATIO_422,
        width=width,
        height=height,
    )