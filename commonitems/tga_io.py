"""Reading and writing Truevision Targa files."""

import struct
from pathlib import Path
from typing import BinaryIO, Union

from commonitems.tga_image import (
    COLOR_MAP_ABSENT,
    COLOR_MAP_PRESENT,
    SANE_DEPTHS,
    UNMAP_DEPTHS,
    ImageType,
    TgaError,
    TgaErrorCode,
    TgaImage,
)
from commonitems.tga_ops import swap_red_blue

PathLike = Union[str, Path]

# Extension area offset, developer directory offset and signature, NUL-terminated.
FOOTER = b"\x00\x00\x00\x00" b"\x00\x00\x00\x00" b"TRUEVISION-XFILE.\x00"

_RLE_BIT = 0x80
_MAX_PACKET = 128
_VALID_TYPES = frozenset(
    (
        ImageType.COLORMAP,
        ImageType.BGR,
        ImageType.MONO,
        ImageType.COLORMAP_RLE,
        ImageType.BGR_RLE,
        ImageType.MONO_RLE,
    )
)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise TgaError(TgaErrorCode.EOF)
    return data


def _read_u8(stream: BinaryIO) -> int:
    return _read_exact(stream, 1)[0]


def _read_u16(stream: BinaryIO) -> int:
    return struct.unpack("<H", _read_exact(stream, 2))[0]


def _check_type(color_map_type: int, image_type: int) -> None:
    if color_map_type not in (COLOR_MAP_ABSENT, COLOR_MAP_PRESENT):
        raise TgaError(TgaErrorCode.CMAP_TYPE)
    if image_type == ImageType.NONE:
        raise TgaError(TgaErrorCode.NO_IMG)
    if image_type not in _VALID_TYPES:
        raise TgaError(TgaErrorCode.IMG_TYPE)
    colormapped = image_type in (ImageType.COLORMAP, ImageType.COLORMAP_RLE)
    if colormapped and color_map_type == COLOR_MAP_ABSENT:
        raise TgaError(TgaErrorCode.CMAP_MISSING)
    if not colormapped and color_map_type == COLOR_MAP_PRESENT:
        raise TgaError(TgaErrorCode.CMAP_PRESENT)


def _check_color_map(color_map_type: int, length: int, depth: int) -> None:
    if color_map_type == COLOR_MAP_PRESENT:
        if length == 0:
            raise TgaError(TgaErrorCode.CMAP_LENGTH)
        if depth not in UNMAP_DEPTHS:
            raise TgaError(TgaErrorCode.CMAP_DEPTH)


def _check_pixel_depth(depth: int, image_type: int) -> None:
    colormapped = image_type in (ImageType.COLORMAP, ImageType.COLORMAP_RLE)
    if depth not in SANE_DEPTHS or (depth != 8 and colormapped):
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)


def _read_rle(stream: BinaryIO, pixel_count: int, bpp: int) -> bytearray:
    data = bytearray()
    loaded = 0
    while loaded < pixel_count:
        header = _read_u8(stream)
        count = (header & ~_RLE_BIT & 0xFF) + 1
        if header & _RLE_BIT:
            pixel = _read_exact(stream, bpp)
            if loaded + count > pixel_count:
                raise TgaError(TgaErrorCode.RLE)
            data += pixel * count
        else:
            if loaded + count > pixel_count:
                raise TgaError(TgaErrorCode.RLE)
            data += _read_exact(stream, bpp * count)
        loaded += count
    return data


def read_from_file(stream: BinaryIO) -> TgaImage:
    """Read a Targa image from an open binary stream."""
    id_length = _read_u8(stream)
    color_map_type = _read_u8(stream)
    if color_map_type not in (COLOR_MAP_ABSENT, COLOR_MAP_PRESENT):
        raise TgaError(TgaErrorCode.CMAP_TYPE)
    image_type = _read_u8(stream)
    _check_type(color_map_type, image_type)

    color_map_origin = _read_u16(stream)
    color_map_length = _read_u16(stream)
    color_map_depth = _read_u8(stream)
    _check_color_map(color_map_type, color_map_length, color_map_depth)

    origin_x = _read_u16(stream)
    origin_y = _read_u16(stream)
    width = _read_u16(stream)
    height = _read_u16(stream)
    if width == 0 or height == 0:
        raise TgaError(TgaErrorCode.ZERO_SIZE)

    pixel_depth = _read_u8(stream)
    _check_pixel_depth(pixel_depth, image_type)
    image_descriptor = _read_u8(stream)

    image_id = _read_exact(stream, id_length) if id_length else b""

    color_map_data = bytearray()
    if color_map_type == COLOR_MAP_PRESENT:
        color_map_data = bytearray(color_map_origin * color_map_depth // 8)
        color_map_data += _read_exact(stream, color_map_length * color_map_depth // 8)

    img = TgaImage(
        width=width,
        height=height,
        pixel_depth=pixel_depth,
        image_type=ImageType(image_type),
        color_map_type=color_map_type,
        color_map_origin=color_map_origin,
        color_map_length=color_map_length,
        color_map_depth=color_map_depth,
        origin_x=origin_x,
        origin_y=origin_y,
        image_descriptor=image_descriptor,
        image_id=bytes(image_id),
        color_map_data=color_map_data,
    )

    bpp = pixel_depth // 8
    if img.is_rle():
        img.image_data = _read_rle(stream, width * height, bpp)
    else:
        img.image_data = bytearray(_read_exact(stream, width * height * bpp))
    return img


def read(path: PathLike) -> TgaImage:
    """Read a Targa image from the file at ``path``."""
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise TgaError(TgaErrorCode.FOPEN) from exc
    with stream:
        return read_from_file(stream)


def _packet_is_rle(row: bytes, pos: int, width: int, bpp: int) -> bool:
    def same(a: int, b: int) -> bool:
        return row[a * bpp:(a + 1) * bpp] == row[b * bpp:(b + 1) * bpp]

    if pos == width - 1:
        return False
    if same(pos, pos + 1):
        if bpp > 1:
            return True
        # Only three repeats make a run worthwhile at one byte per pixel.
        if pos < width - 2 and same(pos + 1, pos + 2):
            return True
    return False


def _packet_length(row: bytes, pos: int, width: int, bpp: int, is_rle: bool) -> int:
    if pos == width - 1:
        return 1
    if pos == width - 2:
        return 2
    first = row[pos * bpp:(pos + 1) * bpp]
    length = 2
    while pos + length < width:
        current = pos + length
        if is_rle:
            extends = row[current * bpp:(current + 1) * bpp] == first
        else:
            extends = not _packet_is_rle(row, current, width, bpp)
        if not extends:
            return length
        length += 1
        if length == _MAX_PACKET:
            return _MAX_PACKET
    return length


def _encode_row(row: bytes, width: int, bpp: int) -> bytes:
    out = bytearray()
    pos = 0
    while pos < width:
        is_rle = _packet_is_rle(row, pos, width, bpp)
        length = _packet_length(row, pos, width, bpp, is_rle)
        header = length - 1
        start = pos * bpp
        if is_rle:
            out.append(header | _RLE_BIT)
            out += row[start:start + bpp]
        else:
            out.append(header)
            out += row[start:start + bpp * length]
        pos += length
    return bytes(out)


def _encode(img: TgaImage) -> bytes:
    _check_type(img.color_map_type, img.image_type)
    _check_color_map(img.color_map_type, img.color_map_length, img.color_map_depth)
    if img.width == 0 or img.height == 0:
        raise TgaError(TgaErrorCode.ZERO_SIZE)
    _check_pixel_depth(img.pixel_depth, img.image_type)
    if img.image_id_length > 0xFF:
        raise ValueError("image id longer than 255 bytes")

    out = bytearray(
        struct.pack(
            "<BBBHHBHHHHBB",
            img.image_id_length,
            img.color_map_type,
            img.image_type,
            img.color_map_origin,
            img.color_map_length,
            img.color_map_depth,
            img.origin_x,
            img.origin_y,
            img.width,
            img.height,
            img.pixel_depth,
            img.image_descriptor,
        )
    )
    out += img.image_id

    if img.color_map_type == COLOR_MAP_PRESENT:
        start = img.color_map_origin * img.color_map_depth // 8
        out += img.color_map_data[start:start + img.color_map_length * img.color_map_depth // 8]

    bpp = img.pixel_depth // 8
    line = img.width * bpp
    if img.is_rle():
        for row_start in range(0, img.height * line, line):
            out += _encode_row(bytes(img.image_data[row_start:row_start + line]), img.width, bpp)
    else:
        out += img.image_data[:img.height * line]

    out += FOOTER
    return bytes(out)


def write_to_file(stream: BinaryIO, img: TgaImage) -> None:
    """Write ``img`` as a Targa file to an open binary stream."""
    data = _encode(img)
    try:
        stream.write(data)
    except OSError as exc:
        raise TgaError(TgaErrorCode.WRITE) from exc


def write(path: PathLike, img: TgaImage) -> None:
    """Write ``img`` as a Targa file at ``path``."""
    try:
        stream = open(path, "wb")
    except OSError as exc:
        raise TgaError(TgaErrorCode.FOPEN) from exc
    with stream:
        write_to_file(stream, img)


def _image(image: bytes, width: int, height: int, depth: int, image_type: ImageType) -> TgaImage:
    return TgaImage(
        width=width,
        height=height,
        pixel_depth=depth,
        image_type=image_type,
        image_data=bytearray(image),
    )


def write_mono(path: PathLike, image: bytes, width: int, height: int) -> None:
    """Write 8-bit black and white pixel data, stored top to bottom."""
    write(path, _image(image, width, height, 8, ImageType.MONO))


def write_mono_rle(path: PathLike, image: bytes, width: int, height: int) -> None:
    """Write 8-bit black and white pixel data run-length encoded."""
    write(path, _image(image, width, height, 8, ImageType.MONO_RLE))


def write_bgr(path: PathLike, image: bytes, width: int, height: int, depth: int) -> None:
    """Write BGR(A) pixel data uncompressed."""
    write(path, _image(image, width, height, depth, ImageType.BGR))


def write_bgr_rle(path: PathLike, image: bytes, width: int, height: int, depth: int) -> None:
    """Write BGR(A) pixel data run-length encoded."""
    write(path, _image(image, width, height, depth, ImageType.BGR_RLE))


def _write_rgb(path: PathLike, img: TgaImage) -> None:
    try:
        swap_red_blue(img)
    except TgaError:
        pass
    write(path, img)


def write_rgb(path: PathLike, image: bytes, width: int, height: int, depth: int) -> None:
    """Write RGB(A) pixel data uncompressed, swapping it to BGR order first."""
    _write_rgb(path, _image(image, width, height, depth, ImageType.BGR))


def write_rgb_rle(path: PathLike, image: bytes, width: int, height: int, depth: int) -> None:
    """Write RGB(A) pixel data run-length encoded, swapping it to BGR order first."""
    _write_rgb(path, _image(image, width, height, depth, ImageType.BGR_RLE))