"""Quoting helpers, script token regexes, code-page conversion and Targa image handling."""

__version__ = "0.1.0"

__all__ = [
    "stringutils",
    "regexes",
    "cp1251",
    "textcodecs",
    "tga_image",
    "tga_ops",
    "tga_io",
]