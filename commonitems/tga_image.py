"""The Truevision Targa image record, its header flags and its error codes."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

COLOR_MAP_ABSENT = 0
COLOR_MAP_PRESENT = 1

# Bits of the image descriptor byte.
ATTRIB_BITS = 0x0F
R_TO_L_BIT = 0x10
T_TO_B_BIT = 0x20
UNUSED_BITS = 0xC0

# Pixel depths a Targa image may use, and those a color map entry may use.
SANE_DEPTHS = (8, 16, 24, 32)
UNMAP_DEPTHS = (16, 24, 32)


class TgaErrorCode(IntEnum):
    """Reasons an operation on a Targa image can fail."""

    NOERR = 0
    FOPEN = 1
    EOF = 2
    WRITE = 3
    CMAP_TYPE = 4
    IMG_TYPE = 5
    NO_IMG = 6
    CMAP_MISSING = 7
    CMAP_PRESENT = 8
    CMAP_LENGTH = 9
    CMAP_DEPTH = 10
    ZERO_SIZE = 11
    PIXEL_DEPTH = 12
    NO_MEM = 13
    NOT_CMAP = 14
    RLE = 15
    INDEX_RANGE = 16
    MONO = 17
    UTF = 18


_MESSAGES = {
    TgaErrorCode.NOERR: "no error",
    TgaErrorCode.FOPEN: "error opening file",
    TgaErrorCode.EOF: "premature end of file",
    TgaErrorCode.WRITE: "error writing to file",
    TgaErrorCode.CMAP_TYPE: "invalid color map type",
    TgaErrorCode.IMG_TYPE: "invalid image type",
    TgaErrorCode.NO_IMG: "no image data included",
    TgaErrorCode.CMAP_MISSING: "color-mapped image without color map",
    TgaErrorCode.CMAP_PRESENT: "non-color-mapped image with extraneous color map",
    TgaErrorCode.CMAP_LENGTH: "color map has zero length",
    TgaErrorCode.CMAP_DEPTH: "invalid color map depth",
    TgaErrorCode.ZERO_SIZE: "the image dimensions are zero",
    TgaErrorCode.PIXEL_DEPTH: "invalid pixel depth",
    TgaErrorCode.NO_MEM: "out of memory",
    TgaErrorCode.NOT_CMAP: "image is not color mapped",
    TgaErrorCode.RLE: "RLE data is corrupt",
    TgaErrorCode.INDEX_RANGE: "color map index out of range",
    TgaErrorCode.MONO: "image is mono",
    TgaErrorCode.UTF: "character in filename not supported",
}


def error_message(code: Union[TgaErrorCode, int]) -> str:
    """Return the verbose description of an error code."""
    try:
        return _MESSAGES[TgaErrorCode(code)]
    except ValueError:
        return "unknown error code"


class TgaError(Exception):
    """Raised when a Targa image cannot be read, written or transformed."""

    def __init__(self, code: TgaErrorCode):
        self.code = TgaErrorCode(code)
        super().__init__(error_message(self.code))


class ImageType(IntEnum):
    """The image type field of the header."""

    NONE = 0
    COLORMAP = 1
    BGR = 2
    MONO = 3
    COLORMAP_RLE = 9
    BGR_RLE = 10
    MONO_RLE = 11


_COLORMAPPED = (ImageType.COLORMAP, ImageType.COLORMAP_RLE)
_RLE = (ImageType.COLORMAP_RLE, ImageType.BGR_RLE, ImageType.MONO_RLE)
_MONO = (ImageType.MONO, ImageType.MONO_RLE)


@dataclass
class TgaImage:
    """A Targa image: its header fields and its raw data, stored little-endian."""

    width: int
    height: int
    pixel_depth: int
    image_type: int = ImageType.NONE
    color_map_type: int = COLOR_MAP_ABSENT
    color_map_origin: int = 0
    color_map_length: int = 0
    color_map_depth: int = 0
    origin_x: int = 0
    origin_y: int = 0
    image_descriptor: int = T_TO_B_BIT
    image_id: bytes = b""
    color_map_data: bytearray = field(default_factory=bytearray)
    image_data: bytearray = field(default_factory=bytearray)

    @property
    def image_id_length(self) -> int:
        """Length in bytes of the image identification field."""
        return len(self.image_id)

    def attribute_bits(self) -> int:
        """Return the attribute bits per pixel from the image descriptor."""
        return self.image_descriptor & ATTRIB_BITS

    def is_right_to_left(self) -> bool:
        """Return True when pixels are stored right to left."""
        return bool(self.image_descriptor & R_TO_L_BIT)

    def is_top_to_bottom(self) -> bool:
        """Return True when rows are stored top to bottom."""
        return bool(self.image_descriptor & T_TO_B_BIT)

    def is_colormapped(self) -> bool:
        """Return True for color-mapped image types."""
        return self.image_type in _COLORMAPPED

    def is_rle(self) -> bool:
        """Return True for run-length encoded image types."""
        return self.image_type in _RLE

    def is_mono(self) -> bool:
        """Return True for black and white image types."""
        return self.image_type in _MONO