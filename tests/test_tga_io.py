import io
import struct

import pytest

from commonitems import tga_io
from commonitems.tga_image import (
    COLOR_MAP_PRESENT,
    T_TO_B_BIT,
    ImageType,
    TgaError,
    TgaErrorCode,
    TgaImage,
)


def _bgr_image(image_type=ImageType.BGR):
    data = bytearray(
        b"\x01\x02\x03" b"\x01\x02\x03" b"\x01\x02\x03" b"\x04\x05\x06"
        b"\x07\x08\x09" b"\x0a\x0b\x0c" b"\x0d\x0e\x0f" b"\x0d\x0e\x0f"
    )
    return TgaImage(width=4, height=2, pixel_depth=24, image_type=image_type, image_data=data)


def _encode(img):
    buffer = io.BytesIO()
    tga_io.write_to_file(buffer, img)
    return buffer.getvalue()


def _decode(data):
    return tga_io.read_from_file(io.BytesIO(data))


def test_footer_is_signature():
    data = _encode(_bgr_image())
    assert data.endswith(b"\x00" * 8 + b"TRUEVISION-XFILE.\x00")
    assert len(tga_io.FOOTER) == 26


def test_header_layout():
    img = _bgr_image()
    data = _encode(img)
    fields = struct.unpack("<BBBHHBHHHHBB", data[:18])
    assert fields == (0, 0, ImageType.BGR, 0, 0, 0, 0, 0, 4, 2, 24, T_TO_B_BIT)
    assert data[18:18 + len(img.image_data)] == bytes(img.image_data)


@pytest.mark.parametrize("image_type", [ImageType.BGR, ImageType.BGR_RLE])
def test_round_trip(image_type):
    img = _bgr_image(image_type)
    back = _decode(_encode(img))
    assert back.image_data == img.image_data
    assert (back.width, back.height, back.pixel_depth) == (4, 2, 24)
    assert back.image_type == image_type


def test_rle_is_smaller_for_repeated_pixels():
    data = bytes([9, 9, 9]) * 100
    raw = _encode(TgaImage(width=100, height=1, pixel_depth=24, image_type=ImageType.BGR,
                           image_data=bytearray(data)))
    rle = _encode(TgaImage(width=100, height=1, pixel_depth=24, image_type=ImageType.BGR_RLE,
                           image_data=bytearray(data)))
    assert len(rle) < len(raw)
    assert _decode(rle).image_data == bytearray(data)


def test_rle_run_packet():
    img = TgaImage(width=4, height=1, pixel_depth=24, image_type=ImageType.BGR_RLE,
                   image_data=bytearray(b"\x01\x02\x03" * 4))
    data = _encode(img)
    assert data[18:22] == b"\x83\x01\x02\x03"


def test_long_rows_split_into_packets():
    data = bytearray(range(200)) + bytearray(300)
    img = TgaImage(width=500, height=1, pixel_depth=8, image_type=ImageType.MONO_RLE,
                   image_data=data)
    assert _decode(_encode(img)).image_data == data


def test_image_id_round_trip():
    img = _bgr_image()
    img.image_id = b"hello"
    back = _decode(_encode(img))
    assert back.image_id == b"hello"
    assert back.image_id_length == 5


def test_color_map_round_trip_with_origin():
    palette = bytearray(2 * 3) + bytearray(b"\x10\x20\x30\x40\x50\x60")
    img = TgaImage(width=2, height=1, pixel_depth=8, image_type=ImageType.COLORMAP,
                   color_map_type=COLOR_MAP_PRESENT, color_map_origin=2,
                   color_map_length=2, color_map_depth=24,
                   color_map_data=palette, image_data=bytearray(b"\x02\x03"))
    back = _decode(_encode(img))
    assert back.color_map_data == palette
    assert back.color_map_origin == 2
    assert back.image_data == bytearray(b"\x02\x03")


def test_file_round_trip(tmp_path):
    path = tmp_path / "image.tga"
    img = _bgr_image(ImageType.BGR_RLE)
    tga_io.write(path, img)
    assert tga_io.read(path).image_data == img.image_data


def test_read_missing_file(tmp_path):
    with pytest.raises(TgaError) as err:
        tga_io.read(tmp_path / "missing.tga")
    assert err.value.code == TgaErrorCode.FOPEN


def test_truncated_data_is_eof():
    data = _encode(_bgr_image())
    with pytest.raises(TgaError) as err:
        _decode(data[:20])
    assert err.value.code == TgaErrorCode.EOF


def test_bad_color_map_type():
    with pytest.raises(TgaError) as err:
        _decode(b"\x00\x05")
    assert err.value.code == TgaErrorCode.CMAP_TYPE


def test_corrupt_rle_is_reported():
    header = struct.pack("<BBBHHBHHHHBB", 0, 0, ImageType.MONO_RLE, 0, 0, 0, 0, 0, 2, 1, 8, 0)
    with pytest.raises(TgaError) as err:
        _decode(header + b"\x85\x07")
    assert err.value.code == TgaErrorCode.RLE


@pytest.mark.parametrize(
    "changes, code",
    [
        ({"width": 0}, TgaErrorCode.ZERO_SIZE),
        ({"pixel_depth": 12}, TgaErrorCode.PIXEL_DEPTH),
        ({"image_type": ImageType.NONE}, TgaErrorCode.NO_IMG),
        ({"image_type": 5}, TgaErrorCode.IMG_TYPE),
        ({"image_type": ImageType.COLORMAP}, TgaErrorCode.CMAP_MISSING),
        ({"color_map_type": COLOR_MAP_PRESENT}, TgaErrorCode.CMAP_PRESENT),
    ],
)
def test_write_validation(changes, code):
    img = _bgr_image()
    for name, value in changes.items():
        setattr(img, name, value)
    with pytest.raises(TgaError) as err:
        _encode(img)
    assert err.value.code == code


def test_write_mono_and_rle(tmp_path):
    pixels = bytes([1, 1, 1, 2, 3, 3])
    tga_io.write_mono(tmp_path / "a.tga", pixels, 3, 2)
    tga_io.write_mono_rle(tmp_path / "b.tga", pixels, 3, 2)
    a = tga_io.read(tmp_path / "a.tga")
    b = tga_io.read(tmp_path / "b.tga")
    assert a.image_data == b.image_data == bytearray(pixels)
    assert a.image_type == ImageType.MONO
    assert b.image_type == ImageType.MONO_RLE
    assert a.is_top_to_bottom()


def test_write_bgr_rle(tmp_path):
    pixels = bytes([1, 2, 3, 4]) * 3
    tga_io.write_bgr_rle(tmp_path / "c.tga", pixels, 3, 1, 32)
    back = tga_io.read(tmp_path / "c.tga")
    assert back.image_data == bytearray(pixels)
    assert back.pixel_depth == 32


def test_write_rgb_swaps_channels(tmp_path):
    pixels = bytes([10, 20, 30, 40, 50, 60])
    tga_io.write_rgb(tmp_path / "d.tga", pixels, 2, 1, 24)
    back = tga_io.read(tmp_path / "d.tga")
    assert back.image_data[:3] == bytearray([30, 20, 10])
    # The final pixel is left as given.
    assert back.image_data[3:] == bytearray([40, 50, 60])
    assert pixels == bytes([10, 20, 30, 40, 50, 60])


def test_write_rgb_rle_matches_plain(tmp_path):
    pixels = bytes([5, 6, 7]) * 4
    tga_io.write_rgb(tmp_path / "e.tga", pixels, 4, 1, 24)
    tga_io.write_rgb_rle(tmp_path / "f.tga", pixels, 4, 1, 24)
    assert tga_io.read(tmp_path / "e.tga").image_data == tga_io.read(tmp_path / "f.tga").image_data