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
This module holds the codec of each Unicode encoding form.

The general organization is that each submodule `x` deals with a single encoding form and looks like this:

    def decode_x(units: CodeUnits, length: int, cursor: Cursor) -> DecodeResult:
        ...

    def encode_x(scalar: int, buf: WritableCodeUnits) -> int:
        ...

A non-negative `length` bounds the number of code units that can be read, a negative `length` makes the decoder stop
at the first zero code unit instead. Decoders never raise on bad data, they return a malformed `DecodeResult` carrying
U+FFFD and advance the cursor according to the recovery rules of their encoding form. Encoders return the number of
code units written, or -1 without writing anything when the scalar is not a Unicode scalar value.

Codecs hold no state between calls, all state is in the caller's cursor and buffers.
"""

from typing import Protocol

from utfkit.types import CodeUnits, Cursor, DecodeResult, WritableCodeUnits


class Decoder(Protocol):
    def __call__(self, units: CodeUnits, length: int, cursor: Cursor, /) -> DecodeResult:
        ...


class Encoder(Protocol):
    def __call__(self, scalar: int, buf: WritableCodeUnits, /) -> int:
        ...
