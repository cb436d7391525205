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
Registry of the supported encoding forms, mapping each one to its codec and code unit layout.

>>> EncodingForm.parse('UTF-16_BE')
<EncodingForm.UTF16BE: 'utf16be'>
>>> EncodingForm.parse('utf16') is EncodingForm.native(16)
True
>>> EncodingForm.UTF16BE.encode_scalar(0x1F600).hex()
'd83dde00'
>>> EncodingForm.UTF32LE.encode_scalar(0x1F600).hex()
'00f60100'
"""

from enum import Enum
from typing import NamedTuple

from utfkit.byteorder import HOST_BYTE_ORDER, ByteOrder
from utfkit.encoding import Decoder, Encoder
from utfkit.encoding.utf8 import decode_utf8, encode_utf8
from utfkit.encoding.utf16 import decode_utf16_be, decode_utf16_le, encode_utf16_be, encode_utf16_le
from utfkit.encoding.utf32 import decode_utf32_be, decode_utf32_le, encode_utf32_be, encode_utf32_le
from utfkit.exceptions import InvalidScalarError, UnknownEncodingError
from utfkit.scalar import LONGEST_SEQUENCE_LENGTH
from utfkit.types import Buffer, CodeUnits, Cursor, DecodeResult, WritableCodeUnits


class _Codec(NamedTuple):
    unit_size: int
    # struct/memoryview format of one code unit in host order
    unit_format: str
    decode: Decoder
    encode: Encoder


class EncodingForm(Enum):
    UTF8 = 'utf8'
    UTF16BE = 'utf16be'
    UTF16LE = 'utf16le'
    UTF32BE = 'utf32be'
    UTF32LE = 'utf32le'

    @classmethod
    def native(cls, bits: int) -> 'EncodingForm':
        """The UTF-16 or UTF-32 form in the host's byte order."""
        big = HOST_BYTE_ORDER is ByteOrder.BIG
        match bits:
            case 16:
                return cls.UTF16BE if big else cls.UTF16LE
            case 32:
                return cls.UTF32BE if big else cls.UTF32LE
            case _:
                raise ValueError(f'no native form with {bits}-bit code units')

    @classmethod
    def parse(cls, name: str) -> 'EncodingForm':
        """Parse an encoding name, ignoring case, dashes and underscores."""
        normalized = ''.join(ch.lower() for ch in name if ch not in '-_' and ch.isascii())
        if normalized == 'utf16':
            return cls.native(16)
        if normalized == 'utf32':
            return cls.native(32)
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownEncodingError(f"unsupported character encoding '{name}'") from None

    @property
    def _codec(self) -> _Codec:
        return _CODECS[self]

    @property
    def unit_size(self) -> int:
        """Size of one code unit in bytes."""
        return self._codec.unit_size

    def code_units(self, data: Buffer) -> memoryview:
        """Read-only view of the whole code units in `data`, a trailing partial unit is left out."""
        view = memoryview(data).cast('B')
        whole = len(view) - len(view) % self.unit_size
        return view[:whole].toreadonly().cast(self._codec.unit_format)

    def unit_view(self, buffer: bytearray) -> memoryview:
        """Writable code unit view over `buffer`, for the encoders to write into."""
        assert len(buffer) % self.unit_size == 0
        return memoryview(buffer).cast(self._codec.unit_format)

    def decode(self, units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
        return self._codec.decode(units, length, cursor)

    def encode(self, scalar: int, buf: WritableCodeUnits) -> int:
        return self._codec.encode(scalar, buf)

    def encode_scalar(self, scalar: int) -> bytes:
        """Encode a single scalar value, raises InvalidScalarError if it is not one."""
        buf = bytearray(LONGEST_SEQUENCE_LENGTH)
        with self.unit_view(buf) as units:
            count = self.encode(scalar, units)
        if count < 0:
            raise InvalidScalarError(f'cannot encode {scalar:#x}: not a Unicode scalar value')
        return bytes(buf[:count * self.unit_size])


_CODECS: dict[EncodingForm, _Codec] = {
    EncodingForm.UTF8: _Codec(1, 'B', decode_utf8, encode_utf8),
    EncodingForm.UTF16BE: _Codec(2, 'H', decode_utf16_be, encode_utf16_be),
    EncodingForm.UTF16LE: _Codec(2, 'H', decode_utf16_le, encode_utf16_le),
    EncodingForm.UTF32BE: _Codec(4, 'I', decode_utf32_be, encode_utf32_be),
    EncodingForm.UTF32LE: _Codec(4, 'I', decode_utf32_le, encode_utf32_le),
}


def supported_encoding_names() -> list[str]:
    """Names accepted by `EncodingForm.parse`, the byte-order-less ones mean the host's order."""
    return ['utf8', 'utf16', 'utf16be', 'utf16le', 'utf32', 'utf32be', 'utf32le']
