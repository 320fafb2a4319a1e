import io

import pytest

from mediadevkit.vnc.pixel_format import PixelFormat, read_pixel_format, write_pixel_format


def true_color_format():
    return PixelFormat(
        bpp=32,
        depth=24,
        big_endian=False,
        true_color=True,
        red_max=255,
        green_max=255,
        blue_max=255,
        red_shift=16,
        green_shift=8,
        blue_shift=0,
    )


def test_wire_layout_of_true_color_format():
    assert write_pixel_format(true_color_format()) == bytes(
        [32, 24, 0, 1, 0, 255, 0, 255, 0, 255, 16, 8, 0, 0, 0, 0]
    )


def test_round_trip_true_color():
    fmt = true_color_format()
    assert read_pixel_format(io.BytesIO(write_pixel_format(fmt))) == fmt


def test_round_trip_big_endian_16bpp():
    fmt = PixelFormat(
        bpp=16,
        depth=16,
        big_endian=True,
        true_color=True,
        red_max=31,
        green_max=63,
        blue_max=31,
        red_shift=11,
        green_shift=5,
        blue_shift=0,
    )
    assert read_pixel_format(io.BytesIO(write_pixel_format(fmt))) == fmt


def test_palette_format_is_padded_with_zeros():
    fmt = PixelFormat(bpp=8, depth=8)
    data = write_pixel_format(fmt)
    assert len(data) == 16
    assert data[:4] == bytes([8, 8, 0, 0])
    assert data[4:] == bytes(12)
    assert read_pixel_format(io.BytesIO(data)) == fmt


def test_palette_format_ignores_trailing_color_fields():
    raw = bytes([8, 8, 0, 0]) + bytes(range(1, 13))
    fmt = read_pixel_format(io.BytesIO(raw))
    assert fmt.true_color is False
    assert (fmt.red_max, fmt.green_max, fmt.blue_max) == (0, 0, 0)
    assert (fmt.red_shift, fmt.green_shift, fmt.blue_shift) == (0, 0, 0)


def test_any_nonzero_flag_byte_is_true():
    raw = bytes([32, 24, 7, 9]) + bytes(12)
    fmt = read_pixel_format(io.BytesIO(raw))
    assert fmt.big_endian is True
    assert fmt.true_color is True


def test_read_consumes_exactly_sixteen_bytes():
    stream = io.BytesIO(write_pixel_format(true_color_format()) + b"rest")
    read_pixel_format(stream)
    assert stream.read() == b"rest"


def test_short_stream_raises():
    with pytest.raises(EOFError):
        read_pixel_format(io.BytesIO(bytes(10)))


def test_out_of_range_field_raises():
    with pytest.raises(ValueError):
        write_pixel_format(PixelFormat(bpp=256))