import pytest

from commonitems.cp1251 import convert_utf8_to_windows1251, cp_to_utf, utf_to_cp

CYRILLIC = "Съешь же ещё этих мягких французских булок"


def test_ascii_passes_through_both_ways():
    text = "Hello, world 123"
    assert cp_to_utf(text.encode("ascii")) == text
    assert utf_to_cp(text) == text.encode("ascii")


def test_cyrillic_round_trip():
    assert cp_to_utf(utf_to_cp(CYRILLIC)) == CYRILLIC


def test_cyrillic_one_byte_per_character():
    assert len(utf_to_cp(CYRILLIC)) == len(CYRILLIC)


def test_io_letter_pinned():
    assert utf_to_cp("Ё") == b"\xa8"
    assert cp_to_utf(b"\xa8") == "Ё"


def test_two_byte_bytes_round_trip():
    data = bytes(b for b in range(0x80, 0x100) if len(cp_to_utf(bytes([b])).encode("utf-8")) == 2)
    assert len(data) > 64
    assert utf_to_cp(cp_to_utf(data)) == data


def test_capital_range_matches_lowercase_offset():
    upper = "АБВГДЕЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
    encoded_upper = utf_to_cp(upper)
    encoded_lower = utf_to_cp(upper.lower())
    assert [lo - up for up, lo in zip(encoded_upper, encoded_lower)] == [0x20] * len(upper)


def test_unassigned_byte_is_dropped():
    assert cp_to_utf(b"a\x98b") == cp_to_utf(b"ab")


def test_nul_bytes_are_dropped_on_decode():
    assert cp_to_utf(b"a\x00b") == cp_to_utf(b"ab")


def test_convert_stops_at_nul():
    data = "ab".encode() + b"\x00" + "cd".encode()
    assert convert_utf8_to_windows1251(data) == data.split(b"\x00")[0]


@pytest.mark.parametrize("char", ["€", "—", "№", "™"])
def test_three_byte_characters_raise(char):
    with pytest.raises(ValueError):
        utf_to_cp(char)


def test_unmappable_two_byte_character_raises():
    with pytest.raises(ValueError):
        utf_to_cp("Ω")


def test_convert_on_encoded_text_matches_utf_to_cp():
    assert convert_utf8_to_windows1251(CYRILLIC.encode("utf-8")) == utf_to_cp(CYRILLIC)


def test_decoded_matches_standard_codec_for_cyrillic():
    encoded = utf_to_cp(CYRILLIC)
    assert encoded == CYRILLIC.encode("cp1251")