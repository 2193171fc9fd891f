"""Conversion between Windows-1251 bytes and UTF-8 text."""

# Characters outside the contiguous ranges, keyed by code point.
_SPECIAL_LETTERS = {
    0x201A: 0x82, 0x0453: 0x83, 0x201E: 0x84, 0x2026: 0x85,
    0x2020: 0x86, 0x2021: 0x87, 0x20AC: 0x88, 0x2030: 0x89,
    0x0409: 0x8A, 0x2039: 0x8B, 0x040A: 0x8C, 0x040C: 0x8D,
    0x040B: 0x8E, 0x040F: 0x8F, 0x0452: 0x90, 0x2018: 0x91,
    0x2019: 0x92, 0x201C: 0x93, 0x201D: 0x94, 0x2022: 0x95,
    0x2013: 0x96, 0x2014: 0x97, 0x2122: 0x99, 0x0459: 0x9A,
    0x203A: 0x9B, 0x045A: 0x9C, 0x045C: 0x9D, 0x045B: 0x9E,
    0x045F: 0x9F, 0x00A0: 0xA0, 0x040E: 0xA1, 0x045E: 0xA2,
    0x0408: 0xA3, 0x00A4: 0xA4, 0x0490: 0xA5, 0x00A6: 0xA6,
    0x00A7: 0xA7, 0x0401: 0xA8, 0x00A9: 0xA9, 0x0404: 0xAA,
    0x00AB: 0xAB, 0x00AC: 0xAC, 0x00AD: 0xAD, 0x00AE: 0xAE,
    0x0407: 0xAF, 0x00B0: 0xB0, 0x00B1: 0xB1, 0x0406: 0xB2,
    0x0456: 0xB3, 0x0491: 0xB4, 0x00B5: 0xB5, 0x00B6: 0xB6,
    0x00B7: 0xB7, 0x0451: 0xB8, 0x2116: 0xB9, 0x0454: 0xBA,
    0x00BB: 0xBB, 0x0458: 0xBC, 0x0405: 0xBD, 0x0455: 0xBE,
    0x0457: 0xBF,
}


def cp_to_utf(data: bytes) -> str:
    """Decode Windows-1251 bytes; NUL bytes and the unassigned 0x98 are dropped."""
    return data.replace(b"\x00", b"").decode("cp1251", errors="ignore")


def _code_point_to_cp1251(code_point: int) -> int:
    if 0x410 <= code_point <= 0x44F:
        return code_point - 0x350
    if 0x80 <= code_point <= 0xFF:
        return code_point
    if 0x402 <= code_point <= 0x403:
        return code_point - 0x382
    try:
        return _SPECIAL_LETTERS[code_point]
    except KeyError:
        raise ValueError(f"code point U+{code_point:04X} has no Windows-1251 form") from None


def convert_utf8_to_windows1251(data: bytes) -> bytes:
    """Convert UTF-8 bytes to Windows-1251, stopping at the first NUL byte.

    Only one- and two-byte UTF-8 sequences are understood; anything else, or a
    character without a Windows-1251 form, raises ValueError.
    """
    end = data.find(b"\x00")
    if end != -1:
        data = data[:end]
    out = bytearray()
    pos = 0
    while pos < len(data):
        prefix = data[pos]
        if not prefix & 0x80:
            out.append(prefix)
            pos += 1
        elif not prefix & 0x20:
            suffix = data[pos + 1] if pos + 1 < len(data) else 0
            code_point = ((prefix & 0x1F) << 6) + (suffix & 0x3F)
            out.append(_code_point_to_cp1251(code_point))
            pos += 2
        else:
            raise ValueError(f"unsupported UTF-8 sequence at byte {pos}")
    return bytes(out)


def utf_to_cp(text: str) -> bytes:
    """Encode ``text`` as Windows-1251 bytes."""
    return convert_utf8_to_windows1251(text.encode("utf-8"))