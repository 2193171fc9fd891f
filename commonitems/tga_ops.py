"""In-place manipulation of Targa images: flipping, unmapping, desaturating, depth changes."""

from typing import Iterator, Optional, Tuple

from commonitems.tga_image import (
    COLOR_MAP_ABSENT,
    R_TO_L_BIT,
    SANE_DEPTHS,
    T_TO_B_BIT,
    ImageType,
    TgaError,
    TgaErrorCode,
    TgaImage,
)

_UNMAP_DEPTHS = (16, 24, 32)
_FIVE_BITS = 0x1F
_ALPHA_BIT = 0x8000

Pixel = Tuple[int, int, int, int]


def _chunks(data: bytes, size: int) -> Iterator[bytes]:
    for start in range(0, len(data), size):
        yield bytes(data[start:start + size])


def _pixel_count(img: TgaImage) -> int:
    return img.width * img.height


def flip_horiz(img: TgaImage) -> None:
    """Mirror the image left to right in place and toggle its right-to-left bit."""
    if img.pixel_depth not in SANE_DEPTHS:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)
    bpp = img.pixel_depth // 8
    line = img.width * bpp
    for start in range(0, img.height * line, line):
        row = img.image_data[start:start + line]
        img.image_data[start:start + line] = b"".join(reversed(list(_chunks(row, bpp))))
    img.image_descriptor ^= R_TO_L_BIT


def flip_vert(img: TgaImage) -> None:
    """Mirror the image top to bottom in place and toggle its top-to-bottom bit."""
    if img.pixel_depth not in SANE_DEPTHS:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)
    line = img.width * img.pixel_depth // 8
    total = img.height * line
    rows = list(_chunks(img.image_data[:total], line))
    img.image_data[:total] = b"".join(reversed(rows))
    img.image_descriptor ^= T_TO_B_BIT


def color_unmap(img: TgaImage) -> None:
    """Replace every color-map index by its color, turning the image into plain BGR."""
    if not img.is_colormapped():
        raise TgaError(TgaErrorCode.NOT_CMAP)
    if img.pixel_depth != 8:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)
    if img.color_map_depth not in SANE_DEPTHS:
        raise TgaError(TgaErrorCode.CMAP_DEPTH)

    bpp = img.color_map_depth // 8
    limit = img.color_map_origin + img.color_map_length
    indices = img.image_data[:_pixel_count(img)]
    if any(index >= limit for index in indices):
        raise TgaError(TgaErrorCode.INDEX_RANGE)

    palette = img.color_map_data
    img.image_data = bytearray(
        b"".join(bytes(palette[index * bpp:(index + 1) * bpp]) for index in indices)
    )
    img.image_type = ImageType.BGR
    img.pixel_depth = img.color_map_depth
    img.color_map_data = bytearray()
    img.color_map_type = COLOR_MAP_ABSENT
    img.color_map_origin = 0
    img.color_map_length = 0
    img.color_map_depth = 0


def find_pixel(img: TgaImage, x: int, y: int) -> Optional[int]:
    """Return the byte offset of pixel (x, y) in ``image_data``, honouring orientation.

    Coordinates count from the top left. Returns None when out of range.
    """
    if not (0 <= x < img.width and 0 <= y < img.height):
        return None
    if not img.is_top_to_bottom():
        y = img.height - 1 - y
    if img.is_right_to_left():
        x = img.width - 1 - x
    return (x + y * img.width) * img.pixel_depth // 8


def unpack_pixel(data: bytes, bits: int) -> Pixel:
    """Decode one pixel of the given depth into (b, g, r, a)."""
    if bits == 32:
        return data[0], data[1], data[2], data[3]
    if bits == 24:
        return data[0], data[1], data[2], 0
    if bits == 16:
        value = data[0] | (data[1] << 8)
        return (
            (value & _FIVE_BITS) << 3,
            ((value >> 5) & _FIVE_BITS) << 3,
            ((value >> 10) & _FIVE_BITS) << 3,
            255 if value & _ALPHA_BIT else 0,
        )
    if bits == 8:
        return data[0], data[0], data[0], 0
    raise TgaError(TgaErrorCode.PIXEL_DEPTH)


def pack_pixel(bits: int, b: int, g: int, r: int, a: int) -> bytes:
    """Encode (b, g, r, a) as one pixel of 16, 24 or 32 bits."""
    if bits == 32:
        return bytes((b, g, r, a))
    if bits == 24:
        return bytes((b, g, r))
    if bits == 16:
        value = (b >> 3) & _FIVE_BITS
        value |= ((g >> 3) & _FIVE_BITS) << 5
        value |= ((r >> 3) & _FIVE_BITS) << 10
        if a > 127:
            value |= _ALPHA_BIT
        return value.to_bytes(2, "little")
    raise TgaError(TgaErrorCode.PIXEL_DEPTH)


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def desaturate(img: TgaImage, cr: int, cg: int, cb: int, dv: int) -> None:
    """Turn the image into 8-bit mono using (r*cr + g*cg + b*cb) / dv per pixel."""
    if img.is_mono():
        raise TgaError(TgaErrorCode.MONO)
    if img.is_colormapped():
        color_unmap(img)
    if img.pixel_depth not in _UNMAP_DEPTHS:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)

    bpp = img.pixel_depth // 8
    grey = bytearray()
    for chunk in _chunks(img.image_data[:_pixel_count(img) * bpp], bpp):
        b, g, r, _ = unpack_pixel(chunk, img.pixel_depth)
        grey.append(_truncating_div(b * cb + g * cg + r * cr, dv) & 0xFF)
    img.image_data = grey
    img.pixel_depth = 8
    img.image_type = ImageType.MONO


def desaturate_rec_601_1(img: TgaImage) -> None:
    """Desaturate with the Rec. 601-1 luma coefficients."""
    desaturate(img, 2989, 5866, 1145, 10000)


def desaturate_rec_709(img: TgaImage) -> None:
    """Desaturate with the Rec. 709 luma coefficients."""
    desaturate(img, 2126, 7152, 722, 10000)


def desaturate_itu(img: TgaImage) -> None:
    """Desaturate with the ITU luma coefficients."""
    desaturate(img, 2220, 7067, 713, 10000)


def desaturate_avg(img: TgaImage) -> None:
    """Desaturate by averaging the three channels."""
    desaturate(img, 1, 1, 1, 3)


def convert_depth(img: TgaImage, bits: int) -> None:
    """Convert the image to a pixel depth of 16, 24 or 32 bits."""
    if bits not in _UNMAP_DEPTHS or img.pixel_depth not in SANE_DEPTHS:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)
    if img.is_colormapped():
        color_unmap(img)
    if img.pixel_depth == bits:
        return

    src_bpp = img.pixel_depth // 8
    source = img.image_data[:_pixel_count(img) * src_bpp]
    img.image_data = bytearray(
        b"".join(
            pack_pixel(bits, *unpack_pixel(chunk, img.pixel_depth))
            for chunk in _chunks(source, src_bpp)
        )
    )
    img.pixel_depth = bits


def swap_red_blue(img: TgaImage) -> None:
    """Exchange the red and blue channels in place.

    The final pixel of the image is left as it is.
    """
    if img.pixel_depth not in _UNMAP_DEPTHS:
        raise TgaError(TgaErrorCode.PIXEL_DEPTH)
    bpp = img.pixel_depth // 8
    for index in range(_pixel_count(img) - 1):
        start = index * bpp
        b, g, r, a = unpack_pixel(img.image_data[start:start + bpp], img.pixel_depth)
        img.image_data[start:start + bpp] = pack_pixel(img.pixel_depth, r, g, b, a)