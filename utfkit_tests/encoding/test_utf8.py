import random

import pytest

from utfkit.encoding.utf8 import (
    UTF8_ACCEPT,
    UTF8_CHARACTER_CLASSES,
    UTF8_REJECT,
    UTF8_SEQUENCE_LENGTHS,
    UTF8_TRANSITIONS,
    decode_utf8,
    encode_utf8,
    utf8_dfa_step,
)
from utfkit.scalar import REPLACEMENT_CHARACTER
from utfkit.types import Cursor, DecodeResult


def _decode_all(data: bytes) -> list[DecodeResult]:
    cursor = Cursor()
    results = []
    while (result := decode_utf8(data, len(data), cursor)).count != 0:
        results.append(result)
    assert cursor.index == len(data)
    return results


def _is_strict_utf8(data: bytes) -> bool:
    try:
        data.decode('utf-8', errors='strict')
    except UnicodeDecodeError:
        return False
    return True


def test_transition_table_shape():
    states = set(range(0, len(UTF8_TRANSITIONS), 12))
    assert set(UTF8_TRANSITIONS) <= states
    assert set(UTF8_CHARACTER_CLASSES) == set(range(12))
    # once rejected the DFA never leaves the reject state
    assert all(utf8_dfa_step(UTF8_REJECT, byte) == UTF8_REJECT for byte in range(256))


def test_dfa_accepts_only_ascii_from_start():
    for byte in range(256):
        state = utf8_dfa_step(UTF8_ACCEPT, byte)
        if byte < 0x80:
            assert state == UTF8_ACCEPT
        else:
            assert state != UTF8_ACCEPT


def test_dfa_agrees_with_sequence_lengths():
    for lead in range(0x80, 0x100):
        state = utf8_dfa_step(UTF8_ACCEPT, lead)
        assert (state == UTF8_REJECT) == (UTF8_SEQUENCE_LENGTHS[lead] == 0), hex(lead)


@pytest.mark.parametrize('scalar', [0x80, 0x7FF, 0x800, 0xD7FF, 0xE000, 0xFFFF, 0x10000, 0x1F600, 0x10FFFF])
def test_dfa_walk_over_valid_sequence(scalar):
    encoded = chr(scalar).encode('utf-8')
    state = UTF8_ACCEPT
    for byte in encoded[:-1]:
        state = utf8_dfa_step(state, byte)
        assert state not in (UTF8_ACCEPT, UTF8_REJECT)
    assert utf8_dfa_step(state, encoded[-1]) == UTF8_ACCEPT


def test_every_single_byte():
    for byte in range(256):
        cursor = Cursor()
        result = decode_utf8(bytes([byte]), 1, cursor)
        assert cursor.index == 1
        if _is_strict_utf8(bytes([byte])):
            assert result == DecodeResult(1, byte)
        else:
            assert result == DecodeResult(-1, REPLACEMENT_CHARACTER)


def test_every_two_byte_sequence():
    for first in range(256):
        for second in range(256):
            data = bytes((first, second))
            results = _decode_all(data)
            malformed = any(result.is_malformed for result in results)
            assert malformed is not _is_strict_utf8(data), data.hex()
            if not malformed:
                assert ''.join(chr(result.scalar) for result in results) == data.decode('utf-8')


@pytest.mark.parametrize('lead', range(0xE0, 0xF0))
def test_three_byte_sequences_by_second_byte(lead):
    for second in range(256):
        data = bytes((lead, second, 0x80))
        malformed = any(result.is_malformed for result in _decode_all(data))
        assert malformed is not _is_strict_utf8(data), data.hex()


@pytest.mark.parametrize('data', [
    b'\xe0\x80\x80',      # overlong
    b'\xed\xa0\x80',      # surrogate U+D800
    b'\xed\xbf\xbf',      # surrogate U+DFFF
    b'\xf0\x8f\xbf\xbf',  # overlong
    b'\xf4\x90\x80\x80',  # above U+10FFFF
    b'\xf5\x80\x80\x80',  # never a leading byte
    b'\xc0\xaf',          # overlong slash
])
def test_rejected_sequences(data):
    assert _is_strict_utf8(data) is False
    assert any(result.is_malformed for result in _decode_all(data))


@pytest.mark.parametrize('byte', range(0x80, 0xC0))
def test_continuation_byte_as_leader_consumes_one_byte(byte):
    data = bytes([byte]) + b'AAA'
    cursor = Cursor()
    assert decode_utf8(data, len(data), cursor) == DecodeResult(-1, REPLACEMENT_CHARACTER)
    assert cursor.index == 1
    assert decode_utf8(data, len(data), cursor) == DecodeResult(1, 0x41)


@pytest.mark.parametrize('lead', range(0xC2, 0xE0))
def test_two_byte_leader_without_continuation_consumes_two_bytes(lead):
    data = bytes([lead, 0x41, 0x42])
    cursor = Cursor()
    assert decode_utf8(data, len(data), cursor) == DecodeResult(-1, REPLACEMENT_CHARACTER)
    assert cursor.index == 2
    assert decode_utf8(data, len(data), cursor) == DecodeResult(1, 0x42)


def test_bounded_truncation_jumps_to_length():
    data = b'\xf0\x9f\x98'
    cursor = Cursor()
    assert decode_utf8(data, len(data), cursor).is_malformed
    assert cursor.index == 3
    assert decode_utf8(data, len(data), cursor).is_end_of_input


def test_length_bounds_the_buffer():
    data = b'AB\xf0\x9f\x98\x80'
    cursor = Cursor(2)
    assert decode_utf8(data, 4, cursor).is_malformed
    assert cursor.index == 4


def test_sentinel_mode():
    data = bytes([0x41, 0x00])
    cursor = Cursor()
    assert decode_utf8(data, -1, cursor) == DecodeResult(1, 0x41)
    assert cursor.index == 1
    assert decode_utf8(data, -1, cursor) == DecodeResult(0, 0)
    assert cursor.index == 1


def test_sentinel_inside_a_sequence():
    data = b'\xe2\x82\x00A'
    cursor = Cursor()
    assert decode_utf8(data, -1, cursor).is_malformed
    assert cursor.index == 2
    assert decode_utf8(data, -1, cursor).is_end_of_input


def test_sentinel_mode_stops_at_physical_end():
    cursor = Cursor()
    assert decode_utf8(b'\xe2\x82', -1, cursor).is_malformed
    assert cursor.index == 2
    assert decode_utf8(b'\xe2\x82', -1, cursor).is_end_of_input


def test_bounded_mode_decodes_zero_byte():
    cursor = Cursor()
    assert decode_utf8(b'\x00', 1, cursor) == DecodeResult(1, 0)


@pytest.mark.parametrize('scalar, size', [
    (0x00, 1),
    (0x7F, 1),
    (0x80, 2),
    (0x7FF, 2),
    (0x800, 3),
    (0xD7FF, 3),
    (0xE000, 3),
    (0xFFFF, 3),
    (0x10000, 4),
    (0x10FFFF, 4),
])
def test_encode_boundaries(scalar, size):
    buf = bytearray(4)
    assert encode_utf8(scalar, buf) == size
    assert bytes(buf[:size]) == chr(scalar).encode('utf-8')


@pytest.mark.parametrize('scalar', [0xD800, 0xDBFF, 0xDC00, 0xDFFF, 0x110000, -1])
def test_encode_invalid_scalar_writes_nothing(scalar):
    buf = bytearray(b'\xaa' * 4)
    assert encode_utf8(scalar, buf) == -1
    assert buf == bytearray(b'\xaa' * 4)


def test_encode_matches_python_codec_on_sample():
    rng = random.Random(8)
    for _ in range(2000):
        scalar = rng.choice([rng.randrange(0, 0xD800), rng.randrange(0xE000, 0x110000)])
        buf = bytearray(4)
        count = encode_utf8(scalar, buf)
        assert bytes(buf[:count]) == chr(scalar).encode('utf-8')
