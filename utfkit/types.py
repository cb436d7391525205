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

from dataclasses import dataclass
from typing import MutableSequence, NamedTuple, Sequence, TypeAlias, Union

from utfkit.scalar import REPLACEMENT_CHARACTER

Buffer: TypeAlias = Union[bytes, bytearray, memoryview]

# Code units exactly as they sit in memory on this host, see `utfkit.byteorder`.
CodeUnits: TypeAlias = Sequence[int]
WritableCodeUnits: TypeAlias = Union[MutableSequence[int], memoryview]


@dataclass
class Cursor:
    """Position in a code unit sequence, measured in code units (not bytes).

    Decoders read and advance `index` in place, the caller owns the cursor and keeps it between calls.
    """

    index: int = 0


class DecodeResult(NamedTuple):
    """Outcome of a single decode call.

    `count` is the number of code units consumed on success, `0` at the end of input (`scalar` is 0) and `-1` for a
    malformed sequence (`scalar` is already U+FFFD, so repairing is just using it).
    """

    count: int
    scalar: int

    @property
    def is_end_of_input(self) -> bool:
        return self.count == 0

    @property
    def is_malformed(self) -> bool:
        return self.count < 0


END_OF_INPUT = DecodeResult(0, 0)
MALFORMED = DecodeResult(-1, REPLACEMENT_CHARACTER)
