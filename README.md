# commonitems

A small library of helpers for tools that handle game script files and image assets:
quote handling, token regular expressions, conversion between UTF-8 and legacy
single-byte code pages, and reading, writing and transforming Truevision Targa
(`.tga`) images. It has no dependencies beyond the standard library.

## Modules

### `commonitems.stringutils`

- `is_quoted(text)`: `True` when the text starts and ends with `"`.
- `rem_quotes(text)`: strips one pair of surrounding double quotes, if present.
- `add_quotes(text)`: wraps the text in double quotes, unless it already begins
  or ends with one.

### `commonitems.regexes`

Pattern strings for script tokens: `CATCHALL_REGEX`, `INTEGER_REGEX`,
`QUOTED_INTEGER_REGEX`, `FLOAT_REGEX`, `QUOTED_FLOAT_REGEX`, `STRING_REGEX`,
`QUOTED_STRING_REGEX` and `DATE_REGEX`. `full_match(pattern, text)` tells whether
a pattern matches the whole text (patterns are compiled once and cached, with
ASCII-only character classes).

### `commonitems.cp1251`

- `cp_to_utf(data)`: decodes Windows-1251 bytes; NUL bytes and the unassigned
  byte `0x98` are dropped.
- `convert_utf8_to_windows1251(data)`: converts UTF-8 bytes to Windows-1251,
  stopping at the first NUL byte. Only one- and two-byte UTF-8 sequences are
  understood; anything else, or a character with no Windows-1251 form, raises
  `ValueError`.
- `utf_to_cp(text)`: encodes a `str` as Windows-1251 bytes the same way.

### `commonitems.textcodecs`

- Encoders from `str` to bytes: `utf8_to_ascii`, `utf8_to_8859_15`,
  `utf8_to_win1252`, `utf8_to_win1251`, `utf8_to_win1250`. Text after a NUL
  character is dropped, and each character the target code page cannot represent
  is written as `0`.
- Decoders from bytes to `str`: `latin9_to_utf8`, `win1252_to_utf8`,
  `win1250_to_utf8`, `win1251_to_utf8`. Bytes after a NUL are dropped; a byte
  the code page leaves undefined becomes the character with the same value
  (except in `win1251_to_utf8`, which uses `cp1251.cp_to_utf`).
- `latin9_to_ascii(data)` and `win1252_to_ascii(data)`: decode, then re-encode
  as ASCII.
- `get_all_files_in_folder_recursive(path)`: the set of all files below a folder,
  as `/`-separated paths relative to it; an empty set when the path is not a
  directory.

### `commonitems.tga_image`

- `TgaImage`: a dataclass holding the header fields (`width`, `height`,
  `pixel_depth`, `image_type`, color map fields, origins, `image_descriptor`),
  `image_id`, `color_map_data` and `image_data`. Methods `attribute_bits()`,
  `is_right_to_left()`, `is_top_to_bottom()`, `is_colormapped()`, `is_rle()`,
  `is_mono()`; property `image_id_length`.
- `ImageType`: the image type codes (`COLORMAP`, `BGR`, `MONO` and their `_RLE`
  forms, plus `NONE`).
- `TgaErrorCode`, `TgaError` (carries `.code`) and `error_message(code)`.

### `commonitems.tga_ops`

All operations change the image in place and raise `TgaError` on failure.

- `flip_horiz(img)`, `flip_vert(img)`: mirror the pixels and toggle the matching
  orientation bit.
- `color_unmap(img)`: replaces color-map indices by their colors, giving a plain
  BGR image.
- `find_pixel(img, x, y)`: byte offset of a pixel in `image_data`, counting from
  the top left and honouring orientation; `None` when out of range.
- `unpack_pixel(data, bits)` returns `(b, g, r, a)`; `pack_pixel(bits, b, g, r, a)`
  returns the bytes of one 16-, 24- or 32-bit pixel.
- `desaturate(img, cr, cg, cb, dv)` turns the image into 8-bit mono, with presets
  `desaturate_rec_601_1`, `desaturate_rec_709`, `desaturate_itu` and
  `desaturate_avg`.
- `convert_depth(img, bits)`: converts to 16, 24 or 32 bits per pixel.
- `swap_red_blue(img)`: exchanges red and blue; the final pixel is left as it is.

### `commonitems.tga_io`

- `read(path)` and `read_from_file(stream)` return a `TgaImage`, raw or
  run-length encoded.
- `write(path, img)` and `write_to_file(stream, img)` write an image, encoding
  it row by row when its type is an RLE type, followed by the `FOOTER` signature.
- `write_mono`, `write_mono_rle`, `write_bgr`, `write_bgr_rle`, `write_rgb`,
  `write_rgb_rle` write raw pixel data stored top to bottom. The `rgb` forms
  swap red and blue on a copy before writing; the bytes passed in are not changed.

## Installation

```
pip install .
```

## Examples

```python
from commonitems.stringutils import add_quotes, rem_quotes
from commonitems.regexes import DATE_REGEX, full_match

add_quotes("abc")                     # '"abc"'
rem_quotes('"abc"')                   # 'abc'
full_match(DATE_REGEX, "1918.11.11")  # True
```

```python
from commonitems import tga_io, tga_ops

tga_io.write_bgr("square.tga", bytes([255, 0, 0]) * 4, 2, 2, 24)
image = tga_io.read("square.tga")
tga_ops.convert_depth(image, 32)
tga_io.write("square_32.tga", image)
```

Failures while reading, writing or transforming an image raise `TgaError`, whose
`code` is a `TgaErrorCode`.

## What it does not do

There is no parser for script files here: `regexes` supplies the token patterns
only. There is no command-line tool, and no logging or console output.

## Running the tests

```
pip install .[test]
pytest
```