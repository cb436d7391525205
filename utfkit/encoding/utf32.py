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
This module implements the UTF-32 encoding form, one 32-bit code unit per scalar value.

>>> cursor = Cursor()
>>> decode_utf32([0x1F600, 0xD800], 2, cursor)
DecodeResult(count=1, scalar=128512)
>>> decode_utf32([0x1F600, 0xD800], 2, cursor)  # surrogates are not scalar values
DecodeResult(count=-1, scalar=65533)
>>> cursor.index
2

>>> data = memoryview(bytes.fromhex('0001f600')).cast('I')
>>> decode_utf32_be(data, len(data), Cursor())
DecodeResult(count=1, scalar=128512)

>>> buf = [0]
>>> encode_utf32(0x41, buf), buf
(1, [65])
"""

from utfkit.byteorder import ByteOrder, Swap
from utfkit.scalar import is_valid_scalar
from utfkit.types import END_OF_INPUT, MALFORMED, CodeUnits, Cursor, DecodeResult, WritableCodeUnits


def _decode32(units: CodeUnits, length: int, cursor: Cursor, swap: Swap) -> DecodeResult:
    offset = cursor.index

    if length >= 0:
        if offset >= length:
            return END_OF_INPUT
    elif offset >= len(units):
        return END_OF_INPUT

    scalar = swap(units[offset])
    if length < 0 and scalar == 0:
        return END_OF_INPUT

    cursor.index = offset + 1
    if not is_valid_scalar(scalar):
        return MALFORMED
    return DecodeResult(1, scalar)


def _encode32(scalar: int, buf: WritableCodeUnits, swap: Swap) -> int:
    if not is_valid_scalar(scalar):
        return -1
    buf[0] = swap(scalar)
    return 1


def decode_utf32(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode host-order UTF-32 units."""
    return _decode32(units, length, cursor, ByteOrder.NATIVE.strategy.resolve32())


def decode_utf32_be(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode big-endian UTF-32 units."""
    return _decode32(units, length, cursor, ByteOrder.BIG.strategy.resolve32())


def decode_utf32_le(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
    """Decode little-endian UTF-32 units."""
    return _decode32(units, length, cursor, ByteOrder.LITTLE.strategy.resolve32())


def encode_utf32(scalar: int, buf: WritableCodeUnits) -> int:
    """ Encode a scalar value as a host-order UTF-32 unit into `buf[0]`.

    Returns 1, or -1 without writing anything if `scalar` is not a scalar value.
    """
    return _encode32(scalar, buf, ByteOrder.NATIVE.strategy.resolve32())


def encode_utf32_be(scalar: int, buf: WritableCodeUnits) -> int:
    return _encode32(scalar, buf, ByteOrder.BIG.strategy.resolve32())


def encode_utf32_le(scalar: int, buf: WritableCodeUnits) -> int:
    return _encode32(scalar, buf, ByteOrder.LITTLE.strategy.resolve32())
