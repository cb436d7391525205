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


class UtfkitError(Exception):
    """General error class"""


class MalformedSequenceError(UtfkitError):
    """Input contains a code unit sequence that is not well-formed in its encoding form.

    `offset` is the absolute position, in bytes, of the first byte of the sequence in the input stream.
    """

    def __init__(self, offset: int) -> None:
        super().__init__(f'malformed character at byte: {offset}')
        self.offset = offset


class InvalidScalarError(UtfkitError, ValueError):
    """Value is out of the Unicode range or is a surrogate, so it cannot be encoded"""


class UnknownEncodingError(UtfkitError, ValueError):
    """Encoding name does not match any supported encoding form"""


class ByteCountOverflowError(UtfkitError):
    """Total number of bytes processed by a stream exceeded its maximum"""


class StreamClosedError(UtfkitError):
    """Data was fed to a stream after it was closed"""
