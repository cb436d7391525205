# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
This module implements the UTF-8 encoding form (RFC 3629).

Decoding looks up the expected sequence length from the leading byte and then validates the whole sequence with
Bjoern Hoehrmann's UTF-8 DFA, accumulating 6 bits of the scalar per continuation byte. The DFA states are stored as
row offsets into `UTF8_TRANSITIONS` so a step is a single table lookup.

>>> text = 'Aé€\U0001F600'.encode('utf-8')
>>> cursor = Cursor()
>>> decode_utf8(text, len(text), cursor)  # reads 41
DecodeResult(count=1, scalar=65)
>>> decode_utf8(text, len(text), cursor)  # reads c3a9
DecodeResult(count=2, scalar=233)
>>> decode_utf8(text, len(text), cursor)  # reads e282ac
DecodeResult(count=3, scalar=8364)
>>> decode_utf8(text, len(text), cursor)  # reads f09f9880
DecodeResult(count=4, scalar=128512)
>>> decode_utf8(text, len(text), cursor)
DecodeResult(count=0, scalar=0)
>>> cursor.index
10

A sequence that fails validation is consumed as a whole, the following bytes are not re-examined:

>>> cursor = Cursor()
>>> decode_utf8(b'\xc3\x28', 2, cursor), cursor.index
(DecodeResult(count=-1, scalar=65533), 2)

With a negative length the input ends at the first zero byte:

>>> cursor = Cursor()
>>> decode_utf8(b'A\x00B', -1, cursor), decode_utf8(b'A\x00B', -1, cursor), cursor.index
(DecodeResult(count=1, scalar=65), DecodeResult(count=0, scalar=0), 1)

>>> buf = bytearray(4)
>>> encode_utf8(0x20AC, buf), bytes(buf[:3]).hex()
(3, 'e282ac')
>>> encode_utf8(0xD800, buf)
-1
"""

from typing import Final

from utfkit.scalar import is_valid_scalar
from utfkit.types import END_OF_INPUT, MALFORMED, CodeUnits, Cursor, DecodeResult, WritableCodeUnits

# Sequence length by leading byte: 1 for 00..7F, 2 for C2..DF, 3 for E0..EF, 4 for F0..F4 and 0 for continuation bytes,
# overlong leaders (C0, C1) and bytes that never appear in UTF-8 (F5..FF).
UTF8_SEQUENCE_LENGTHS: Final[tuple[int, ...]] = (
    (1,) * 0x80
    + (0,) * 0x40
    + (0, 0) + (2,) * 0x1E
    + (3,) * 0x10
    + (4,) * 0x05 + (0,) * 0x0B
)

# Mask applied to the leading byte, indexed by sequence length.
UTF8_LEADING_MASKS: Final[tuple[int, ...]] = (
    0x00,
    0xFF,  # 0xxxxxxx
    0x1F,  # 110xxxxx 10xxxxxx
    0x0F,  # 1110xxxx 10xxxxxx 10xxxxxx
    0x07,  # 11110xxx 10xxxxxx 10xxxxxx 10xxxxxx
)

# Character class of each byte as seen by the DFA.
UTF8_CHARACTER_CLASSES: Final[tuple[int, ...]] = (
    (0,) * 0x80      # 00..7F
    + (1,) * 0x10    # 80..8F
    + (9,) * 0x10    # 90..9F
    + (7,) * 0x20    # A0..BF
    + (8, 8)         # C0..C1
    + (2,) * 0x1E    # C2..DF
    + (10,)          # E0
    + (3,) * 0x0C    # E1..EC
    + (4,)           # ED
    + (3, 3)         # EE..EF
    + (11,)          # F0
    + (6,) * 0x03    # F1..F3
    + (5,)           # F4
    + (8,) * 0x0B    # F5..FF
)

UTF8_ACCEPT: Final[int] = 0
UTF8_REJECT: Final[int] = 12

# Next state indexed by `state + character_class`, 9 states of 12 classes each.
UTF8_TRANSITIONS: Final[tuple[int, ...]] = (
    0, 12, 24, 36, 60, 96, 84, 12, 12, 12, 48, 72,   # 0: accept
    12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12,  # 12: reject
    12, 0, 12, 12, 12, 12, 12, 0, 12, 0, 12, 12,     # 24: one continuation left
    12, 24, 12, 12, 12, 12, 12, 24, 12, 24, 12, 12,  # 36: two continuations left
    12, 12, 12, 12, 12, 12, 12, 24, 12, 12, 12, 12,  # 48: after E0, needs A0..BF
    12, 24, 12, 12, 12, 12, 12, 12, 12, 24, 12, 12,  # 60: after ED, needs 80..9F
    12, 12, 12, 12, 12, 12, 12, 36, 12, 36, 12, 12,  # 72: after F0, needs 90..BF
    12, 36, 12, 12, 12, 12, 12, 36, 12, 36, 12, 12,  # 84: after F1..F3
    12, 36, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12,  # 96: after F4, needs 80..8F
)

assert len(UTF8_SEQUENCE_LENGTHS) == 256
assert len(UTF8_CHARACTER_CLASSES) == 256
assert len(UTF8_TRANSITIONS) == 9 * 12


def utf8_dfa_step(state: int, byte: int) -> int:
    """Feed one byte to the UTF-8 DFA."""
    return UTF8_TRANSITIONS[state + UTF8_CHARACTER_CLASSES[byte]]


def decode_utf8(text: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """ Decode the scalar value at `cursor` from UTF-8 bytes.

    This module's docstring has more details and examples.
    """
    offset = cursor.index

    if length >= 0:
        if offset >= length:
            return END_OF_INPUT
    elif offset >= len(text) or text[offset] == 0:
        return END_OF_INPUT

    lead = text[offset]
    seqlen = UTF8_SEQUENCE_LENGTHS[lead]
    if seqlen == 0:
        cursor.index = offset + 1
        return MALFORMED

    if length < 0:
        # a zero byte inside the sequence means the string ended in the middle of it
        end = offset + 1
        for i in range(offset + 1, offset + seqlen):
            if i >= len(text) or text[i] == 0:
                cursor.index = end
                return MALFORMED
            end += 1
        cursor.index = end
    elif offset + seqlen > length:
        cursor.index = length
        return MALFORMED
    else:
        cursor.index = offset + seqlen

    value = lead & UTF8_LEADING_MASKS[seqlen]
    state = UTF8_TRANSITIONS[UTF8_CHARACTER_CLASSES[lead]]
    for i in range(offset + 1, offset + seqlen):
        byte = text[i]
        value = (value << 6) | (byte & 0x3F)
        state = UTF8_TRANSITIONS[state + UTF8_CHARACTER_CLASSES[byte]]

    if state != UTF8_ACCEPT:
        return MALFORMED
    return DecodeResult(seqlen, value)


def encode_utf8(scalar: int, buf: WritableCodeUnits) -> int:
    """ Encode a scalar value as UTF-8 into `buf`, which must hold at least 4 bytes.

    Returns the number of bytes written, or -1 without writing anything if `scalar` is not a scalar value.
    """
    if not is_valid_scalar(scalar):
        return -1
    if scalar <= 0x7F:
        buf[0] = scalar
        return 1
    if scalar <= 0x7FF:
        buf[0] = 0xC0 | (scalar >> 6)
        buf[1] = 0x80 | (scalar & 0x3F)
        return 2
    if scalar <= 0xFFFF:
        buf[0] = 0xE0 | (scalar >> 12)
        buf[1] = 0x80 | ((scalar >> 6) & 0x3F)
        buf[2] = 0x80 | (scalar & 0x3F)
        return 3
    buf[0] = 0xF0 | (scalar >> 18)
    buf[1] = 0x80 | ((scalar >> 12) & 0x3F)
    buf[2] = 0x80 | ((scalar >> 6) & 0x3F)
    buf[3] = 0x80 | (scalar & 0x3F)
    return 4
