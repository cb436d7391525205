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

"""
This module implements the UTF-16 encoding form.

Scalars in the Basic Multilingual Plane take one 16-bit code unit, the others take a surrogate pair. The `_be` and
`_le` variants read and write big/little-endian units, the plain variant uses the host's order. The variants only
differ in the swap strategy they bind, see `utfkit.byteorder`.

>>> units = [0x0041, 0xD83D, 0xDE00]
>>> cursor = Cursor()
>>> decode_utf16(units, len(units), cursor)  # reads 0041
DecodeResult(count=1, scalar=65)
>>> decode_utf16(units, len(units), cursor)  # reads d83d de00
DecodeResult(count=2, scalar=128512)
>>> decode_utf16(units, len(units), cursor)
DecodeResult(count=0, scalar=0)

A high surrogate that cannot be completed is malformed and only that unit is consumed:

>>> cursor = Cursor()
>>> decode_utf16([0xD83D], 1, cursor), cursor.index
(DecodeResult(count=-1, scalar=65533), 1)

Big-endian units as they come from a byte stream, whatever the host:

>>> data = memoryview(bytes.fromhex('d83dde00')).cast('H')
>>> decode_utf16_be(data, len(data), Cursor())
DecodeResult(count=2, scalar=128512)

>>> buf = [0, 0]
>>> encode_utf16(0x1F600, buf), [hex(unit) for unit in buf]
(2, ['0xd83d', '0xde00'])
>>> encode_utf16(0x110000, buf)
-1
"""

from typing import Final

from utfkit.byteorder import ByteOrder, Swap
from utfkit.scalar import HIGH_SURROGATE_MIN, LOW_SURROGATE_MIN, is_high_surrogate, is_low_surrogate, is_valid_scalar
from utfkit.types import END_OF_INPUT, MALFORMED, CodeUnits, Cursor, DecodeResult, WritableCodeUnits

# ((high << 10) + low) + SURROGATE_OFFSET is the scalar encoded by a surrogate pair
SURROGATE_OFFSET: Final[int] = 0x10000 - (HIGH_SURROGATE_MIN << 10) - LOW_SURROGATE_MIN

# LEAD_OFFSET + (scalar >> 10) is the high surrogate of a scalar above the BMP
LEAD_OFFSET: Final[int] = HIGH_SURROGATE_MIN - (0x10000 >> 10)


def _decode16(units: CodeUnits, length: int, cursor: Cursor, swap: Swap) -> DecodeResult:
    offset = cursor.index

    if length >= 0:
        if offset >= length:
            return END_OF_INPUT
    elif offset >= len(units) or units[offset] == 0:
        return END_OF_INPUT

    word = swap(units[offset])

    if is_low_surrogate(word):
        cursor.index = offset + 1
        return MALFORMED

    if not is_high_surrogate(word):
        cursor.index = offset + 1
        return DecodeResult(1, word)

    # a high surrogate needs a low surrogate right after it
    following = offset + 1
    if (length >= 0 and following >= length) or following >= len(units) or units[following] == 0:
        cursor.index = following
        return MALFORMED

    next_word = swap(units[following])
    cursor.index = offset + 2
    if not is_low_surrogate(next_word):
        return MALFORMED
    return DecodeResult(2, ((word << 10) + next_word) + SURROGATE_OFFSET)


def _encode16(scalar: int, buf: WritableCodeUnits, swap: Swap) -> int:
    if not is_valid_scalar(scalar):
        return -1
    if scalar <= 0xFFFF:
        buf[0] = swap(scalar)
        return 1
    high = LEAD_OFFSET + (scalar >> 10)
    low = LOW_SURROGATE_MIN + (scalar & 0x3FF)
    buf[0] = swap(high)
    buf[1] = swap(low)
    return 2


def decode_utf16(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode host-order UTF-16 units."""
    return _decode16(units, length, cursor, ByteOrder.NATIVE.strategy.resolve16())


def decode_utf16_be(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode big-endian UTF-16 units."""
    return _decode16(units, length, cursor, ByteOrder.BIG.strategy.resolve16())


def decode_utf16_le(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode little-endian UTF-16 units."""
    return _decode16(units, length, cursor, ByteOrder.LITTLE.strategy.resolve16())


def encode_utf16(scalar: int, buf: WritableCodeUnits) -> int:
    """ Encode a scalar value as host-order UTF-16 into `buf`, which must hold at least 2 units.

    Returns the number of units written, or -1 without writing anything if `scalar` is not a scalar value.
    """
    return _encode16(scalar, buf, ByteOrder.NATIVE.strategy.resolve16())


def encode_utf16_be(scalar: int, buf: WritableCodeUnits) -> int:
    return _encode16(scalar, buf, ByteOrder.BIG.strategy.resolve16())


def encode_utf16_le(scalar: int, buf: WritableCodeUnits) -> int:
    return _encode16(scalar, buf, ByteOrder.LITTLE.strategy.resolve16())
