"""Directory listing and conversions between UTF-8 text and single-byte code pages."""

import os
from pathlib import Path
from typing import Set, Union

from commonitems.cp1251 import cp_to_utf

# Written in place of any character the target code page cannot represent.
_DEFAULT_CHAR = b"0"

_ASCII = "ascii"
_LATIN9 = "iso8859_15"
_WIN1250 = "cp1250"
_WIN1251 = "cp1251"
_WIN1252 = "cp1252"


def get_all_files_in_folder_recursive(path: Union[str, "os.PathLike[str]"]) -> Set[str]:
    """Return every file below ``path`` as a '/'-separated path relative to it.

    A missing path, or one that is not a directory, gives an empty set.
    """
    root = Path(path)
    if not root.is_dir():
        return set()
    found: Set[str] = set()
    for current, _dirs, files in os.walk(root):
        for name in files:
            full = Path(current) / name
            if full.is_dir():
                continue
            found.add(full.relative_to(root).as_posix())
    return found


def _until_nul(value):
    end = value.find("\x00" if isinstance(value, str) else b"\x00")
    return value if end == -1 else value[:end]


def _encode(text: str, codec: str) -> bytes:
    text = _until_nul(text)
    try:
        return text.encode(codec)
    except UnicodeEncodeError:
        pass
    out = bytearray()
    for char in text:
        try:
            out += char.encode(codec)
        except UnicodeEncodeError:
            out += _DEFAULT_CHAR
    return bytes(out)


def _decode(data: bytes, codec: str) -> str:
    data = _until_nul(data)
    try:
        return data.decode(codec)
    except UnicodeDecodeError:
        pass
    # Bytes the code page leaves undefined map to the code point of the same value.
    return "".join(bytes([byte]).decode(codec, errors="ignore") or chr(byte) for byte in data)


def utf8_to_ascii(text: str) -> bytes:
    """Encode ``text`` as 7-bit ASCII, writing '0' for anything outside it."""
    return _encode(text, _ASCII)


def utf8_to_8859_15(text: str) -> bytes:
    """Encode ``text`` as ISO-8859-15."""
    return _encode(text, _LATIN9)


def utf8_to_win1252(text: str) -> bytes:
    """Encode ``text`` as Windows-1252."""
    return _encode(text, _WIN1252)


def utf8_to_win1251(text: str) -> bytes:
    """Encode ``text`` as Windows-1251."""
    return _encode(text, _WIN1251)


def utf8_to_win1250(text: str) -> bytes:
    """Encode ``text`` as Windows-1250."""
    return _encode(text, _WIN1250)


def latin9_to_utf8(data: bytes) -> str:
    """Decode ISO-8859-15 bytes."""
    return _decode(data, _LATIN9)


def latin9_to_ascii(data: bytes) -> bytes:
    """Re-encode ISO-8859-15 bytes as ASCII."""
    return utf8_to_ascii(latin9_to_utf8(data))


def win1252_to_utf8(data: bytes) -> str:
    """Decode Windows-1252 bytes."""
    return _decode(data, _WIN1252)


def win1252_to_ascii(data: bytes) -> bytes:
    """Re-encode Windows-1252 bytes as ASCII."""
    return utf8_to_ascii(win1252_to_utf8(data))


def win1250_to_utf8(data: bytes) -> str:
    """Decode Windows-1250 bytes."""
    return _decode(data, _WIN1250)


def win1251_to_utf8(data: bytes) -> str:
    """Decode Windows-1251 bytes."""
    return cp_to_utf(data)