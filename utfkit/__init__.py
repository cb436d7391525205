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

from utfkit.byteorder import ByteOrder, SwapStrategy
from utfkit.encoding.utf8 import decode_utf8, encode_utf8
from utfkit.encoding.utf16 import (
    decode_utf16,
    decode_utf16_be,
    decode_utf16_le,
    encode_utf16,
    encode_utf16_be,
    encode_utf16_le,
)
from utfkit.encoding.utf32 import (
    decode_utf32,
    decode_utf32_be,
    decode_utf32_le,
    encode_utf32,
    encode_utf32_be,
    encode_utf32_le,
)
from utfkit.exceptions import (
    ByteCountOverflowError,
    InvalidScalarError,
    MalformedSequenceError,
    StreamClosedError,
    UnknownEncodingError,
    UtfkitError,
)
from utfkit.forms import EncodingForm, supported_encoding_names
from utfkit.scalar import LONGEST_SEQUENCE_LENGTH, REPLACEMENT_CHARACTER, is_valid_scalar
from utfkit.transcoder import StreamTranscoder, transcode
from utfkit.types import Cursor, DecodeResult

__all__ = [
    'ByteOrder',
    'SwapStrategy',
    'Cursor',
    'DecodeResult',
    'EncodingForm',
    'StreamTranscoder',
    'LONGEST_SEQUENCE_LENGTH',
    'REPLACEMENT_CHARACTER',
    'is_valid_scalar',
    'supported_encoding_names',
    'transcode',
    'decode_utf8',
    'encode_utf8',
    'decode_utf16',
    'decode_utf16_be',
    'decode_utf16_le',
    'encode_utf16',
    'encode_utf16_be',
    'encode_utf16_le',
    'decode_utf32',
    'decode_utf32_be',
    'decode_utf32_le',
    'encode_utf32',
    'encode_utf32_be',
    'encode_utf32_le',
    'UtfkitError',
    'MalformedSequenceError',
    'InvalidScalarError',
    'UnknownEncodingError',
    'ByteCountOverflowError',
    'StreamClosedError',
]
