import pytest

from utfkit.encoding.utf16 import (
    decode_utf16,
    decode_utf16_be,
    decode_utf16_le,
    encode_utf16,
    encode_utf16_be,
    encode_utf16_le,
)
from utfkit.scalar import REPLACEMENT_CHARACTER
from utfkit.types import Cursor, DecodeResult

MALFORMED = DecodeResult(-1, REPLACEMENT_CHARACTER)


def _units(data: bytes) -> memoryview:
    return memoryview(data).cast('H')


def test_surrogate_pair():
    units = [0xD83D, 0xDE00]
    cursor = Cursor()
    assert decode_utf16(units, 2, cursor) == DecodeResult(2, 0x1F600)
    assert cursor.index == 2


def test_lone_high_surrogate_at_end_consumes_one_unit():
    cursor = Cursor()
    assert decode_utf16([0x0041, 0xD83D], 2, Cursor(1)) == MALFORMED
    assert decode_utf16([0xD83D], 1, cursor) == MALFORMED
    assert cursor.index == 1
    assert decode_utf16([0xD83D], 1, cursor).is_end_of_input


def test_high_surrogate_followed_by_non_low_consumes_two_units():
    units = [0xD83D, 0x0041, 0x0042]
    cursor = Cursor()
    assert decode_utf16(units, 3, cursor) == MALFORMED
    assert cursor.index == 2
    assert decode_utf16(units, 3, cursor) == DecodeResult(1, 0x42)


def test_two_high_surrogates():
    cursor = Cursor()
    assert decode_utf16([0xD83D, 0xD83D], 2, cursor) == MALFORMED
    assert cursor.index == 2


def test_lone_low_surrogate_consumes_one_unit():
    units = [0xDE00, 0x0041]
    cursor = Cursor()
    assert decode_utf16(units, 2, cursor) == MALFORMED
    assert cursor.index == 1
    assert decode_utf16(units, 2, cursor) == DecodeResult(1, 0x41)


def test_high_surrogate_followed_by_zero_consumes_one_unit():
    units = [0xD83D, 0x0000]
    cursor = Cursor()
    assert decode_utf16(units, 2, cursor) == MALFORMED
    assert cursor.index == 1
    # in bounded mode the zero unit is U+0000
    assert decode_utf16(units, 2, cursor) == DecodeResult(1, 0)

    cursor = Cursor()
    assert decode_utf16(units, -1, cursor) == MALFORMED
    assert cursor.index == 1
    assert decode_utf16(units, -1, cursor).is_end_of_input


def test_sentinel_mode():
    units = [0x0041, 0x0000, 0x0042]
    cursor = Cursor()
    assert decode_utf16(units, -1, cursor) == DecodeResult(1, 0x41)
    assert decode_utf16(units, -1, cursor).is_end_of_input
    assert cursor.index == 1


def test_sentinel_mode_stops_at_physical_end():
    cursor = Cursor()
    assert decode_utf16([0x0041, 0xD83D], -1, cursor) == DecodeResult(1, 0x41)
    assert decode_utf16([0x0041, 0xD83D], -1, cursor) == MALFORMED
    assert cursor.index == 2
    assert decode_utf16([0x0041, 0xD83D], -1, cursor).is_end_of_input


def test_length_bounds_the_pair():
    cursor = Cursor()
    assert decode_utf16([0xD83D, 0xDE00], 1, cursor) == MALFORMED
    assert cursor.index == 1


@pytest.mark.parametrize('text', ['A', 'é', '€', '\U0001F600', '\U0010FFFF', 'a\U00010000b'])
def test_decode_explicit_byte_orders(text):
    for decode, codec in ((decode_utf16_be, 'utf-16-be'), (decode_utf16_le, 'utf-16-le')):
        units = _units(text.encode(codec))
        cursor = Cursor()
        scalars = []
        while not (result := decode(units, len(units), cursor)).is_end_of_input:
            scalars.append(result.scalar)
        assert ''.join(map(chr, scalars)) == text


def test_decode_swapped_bytes_differ():
    units = _units('Ă'.encode('utf-16-be'))
    assert decode_utf16_be(units, 1, Cursor()) == DecodeResult(1, 0x0102)
    assert decode_utf16_le(units, 1, Cursor()) == DecodeResult(1, 0x0201)


@pytest.mark.parametrize('scalar', [0x00, 0x41, 0xD7FF, 0xE000, 0xFFFD, 0xFFFF, 0x10000, 0x1F600, 0x10FFFF])
def test_encode_explicit_byte_orders(scalar):
    for encode, codec in ((encode_utf16_be, 'utf-16-be'), (encode_utf16_le, 'utf-16-le')):
        buf = bytearray(4)
        with memoryview(buf).cast('H') as units:
            count = encode(scalar, units)
        assert bytes(buf[:2 * count]) == chr(scalar).encode(codec)


def test_encode_native_surrogate_pair():
    buf = [0, 0]
    assert encode_utf16(0x10000, buf) == 2
    assert buf == [0xD800, 0xDC00]
    assert encode_utf16(0x10FFFF, buf) == 2
    assert buf == [0xDBFF, 0xDFFF]


@pytest.mark.parametrize('scalar', [0xD800, 0xDFFF, 0x110000, -1])
def test_encode_invalid_scalar_writes_nothing(scalar):
    for encode in (encode_utf16, encode_utf16_be, encode_utf16_le):
        buf = [0xAAAA, 0xAAAA]
        assert encode(scalar, buf) == -1
        assert buf == [0xAAAA, 0xAAAA]
