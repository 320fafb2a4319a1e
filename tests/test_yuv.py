import pytest

from mediadevkit.frame.yuv import (
    FrameLengthError,
    SubsampleRatio,
    YCbCrImage,
    decode_i420,
    decode_nv12,
    decode_nv21,
    decode_uyvy,
    decode_yuy2,
)

WIDTH = 2
HEIGHT = 2


def test_decode_yuy2():
    data = bytes([0x01, 0x82, 0x03, 0x84, 0x05, 0x86, 0x07, 0x88])
    expected = YCbCrImage(
        y=bytes([0x01, 0x03, 0x05, 0x07]),
        y_stride=WIDTH,
        cb=bytes([0x82, 0x86]),
        cr=bytes([0x84, 0x88]),
        c_stride=WIDTH // 2,
        subsample_ratio=SubsampleRatio.RATIO_422,
        width=WIDTH,
        height=HEIGHT,
    )
    assert decode_yuy2(data, WIDTH, HEIGHT) == expected


def test_decode_uyvy():
    data = bytes([0x82, 0x01, 0x84, 0x03, 0x86, 0x05, 0x88, 0x07])
    expected = YCbCrImage(
        y=bytes([0x01, 0x03, 0x05, 0x07]),
        y_stride=WIDTH,
        cb=bytes([0x82, 0x86]),
        cr=bytes([0x84, 0x88]),
        c_stride=WIDTH // 2,
        subsample_ratio=SubsampleRatio.RATIO_422,
        width=WIDTH,
        height=HEIGHT,
    )
    assert decode_uyvy(data, WIDTH, HEIGHT) == expected


def test_decode_nv21():
    data = bytes([0x01, 0x03, 0x05, 0x07, 0x82, 0x84])
    expected = YCbCrImage(
        y=bytes([0x01, 0x03, 0x05, 0x07]),
        y_stride=WIDTH,
        cb=bytes([0x84]),
        cr=bytes([0x82]),
        c_stride=WIDTH // 2,
        subsample_ratio=SubsampleRatio.RATIO_420,
        width=WIDTH,
        height=HEIGHT,
    )
    assert decode_nv21(data, WIDTH, HEIGHT) == expected


def test_decode_nv12():
    data = bytes([0x01, 0x03, 0x05, 0x07, 0x84, 0x82])
    expected = YCbCrImage(
        y=bytes([0x01, 0x03, 0x05, 0x07]),
        y_stride=WIDTH,
        cb=bytes([0x84]),
        cr=bytes([0x82]),
        c_stride=WIDTH // 2,
        subsample_ratio=SubsampleRatio.RATIO_420,
        width=WIDTH,
        height=HEIGHT,
    )
    assert decode_nv12(data, WIDTH, HEIGHT) == expected


def test_decode_i420():
    data = bytes([0x01, 0x03, 0x05, 0x07, 0x84, 0x82])
    img = decode_i420(data, WIDTH, HEIGHT)
    assert img.y == bytes([0x01, 0x03, 0x05, 0x07])
    assert img.cb == bytes([0x84])
    assert img.cr == bytes([0x82])
    assert img.subsample_ratio is SubsampleRatio.RATIO_420
    assert img.bounds == (0, 0, WIDTH, HEIGHT)


def test_decode_accepts_bytearray():
    data = bytearray([0x01, 0x82, 0x03, 0x84, 0x05, 0x86, 0x07, 0x88])
    assert decode_yuy2(data, WIDTH, HEIGHT).y == bytes([0x01, 0x03, 0x05, 0x07])


@pytest.mark.parametrize(
    "decoder, needed",
    [
        (decode_i420, 6),
        (decode_nv21, 6),
        (decode_nv12, 6),
        (decode_yuy2, 8),
        (decode_uyvy, 8),
    ],
)
def test_short_frame_raises(decoder, needed):
    with pytest.raises(FrameLengthError) as excinfo:
        decoder(bytes(3), WIDTH, HEIGHT)
    assert str(excinfo.value) == f"frame length (3) less than expected ({needed})"


def test_zero_filled_yuy2_plane_sizes():
    img = decode_yuy2(bytes(640 * 480 * 2), 640, 480)
    assert len(img.y) == 640 * 480
    assert len(img.cb) == len(img.cr) == 640 * 480 // 2
    assert img.c_stride == 320