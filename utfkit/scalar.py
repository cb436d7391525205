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
Unicode scalar value checks shared by every encoding form.

A scalar value is any code point in `[0, 0x10FFFF]` that is not a surrogate.

>>> is_valid_scalar(0x41)
True
>>> is_valid_scalar(0xD800)
False
>>> is_valid_scalar(0x110000)
False
>>> is_high_surrogate(0xD83D), is_low_surrogate(0xDE00)
(True, True)
"""

from typing import Final

MAX_SCALAR: Final[int] = 0x10FFFF

HIGH_SURROGATE_MIN: Final[int] = 0xD800
HIGH_SURROGATE_MAX: Final[int] = 0xDBFF
LOW_SURROGATE_MIN: Final[int] = 0xDC00
LOW_SURROGATE_MAX: Final[int] = 0xDFFF

# U+FFFD, substituted for every malformed sequence
REPLACEMENT_CHARACTER: Final[int] = 0xFFFD

# The longest code unit sequence of all forms is a 4-byte UTF-8 sequence.
LONGEST_SEQUENCE_LENGTH: Final[int] = 4


def is_high_surrogate(value: int) -> bool:
    return HIGH_SURROGATE_MIN <= value <= HIGH_SURROGATE_MAX


def is_low_surrogate(value: int) -> bool:
    return LOW_SURROGATE_MIN <= value <= LOW_SURROGATE_MAX


def is_valid_scalar(value: int) -> bool:
    """True if `value` is a Unicode scalar value: in range and not a surrogate."""
    if value < 0 or value > MAX_SCALAR:
        return False
    return not (HIGH_SURROGATE_MIN <= value <= LOW_SURROGATE_MAX)
