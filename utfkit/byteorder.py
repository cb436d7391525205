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
Byte order handling for the multi-byte encoding forms (UTF-16 and UTF-32).

Code units are always read from and written to memory in the host's own order. A `SwapStrategy` turns such a raw unit
into its logical value (and back, the transform is an involution). Strategies are resolved into a plain function once
per codec call, never per code unit:

>>> hex(SwapStrategy.SWAP.resolve16()(0x3DD8))
'0xd83d'
>>> SwapStrategy.IDENTITY.resolve32()(0x1F600) == 0x1F600
True
>>> hex(SwapStrategy.SWAP_ON_LITTLE_ENDIAN_HOST.resolve16(host=ByteOrder.LITTLE)(0x3DD8))
'0xd83d'
>>> hex(SwapStrategy.SWAP_ON_LITTLE_ENDIAN_HOST.resolve16(host=ByteOrder.BIG)(0x3DD8))
'0x3dd8'
>>> ByteOrder.BIG.strategy
<SwapStrategy.SWAP_ON_LITTLE_ENDIAN_HOST: 'swap-on-little-endian-host'>
"""

import sys
from enum import Enum
from typing import Callable, Optional

from typing_extensions import assert_never

Swap = Callable[[int], int]


def swap16(value: int) -> int:
    return ((value & 0x00FF) << 8) | ((value >> 8) & 0x00FF)


def swap32(value: int) -> int:
    return (
        ((value & 0x000000FF) << 24)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x00FF0000) >> 8)
        | ((value >> 24) & 0x000000FF)
    )


def _identity(value: int) -> int:
    return value


class ByteOrder(Enum):
    BIG = 'big'
    LITTLE = 'little'
    NATIVE = 'native'

    @staticmethod
    def host() -> 'ByteOrder':
        return HOST_BYTE_ORDER

    @property
    def strategy(self) -> 'SwapStrategy':
        """Strategy to go between raw units in memory and logical values for data in this byte order."""
        match self:
            case ByteOrder.BIG:
                return SwapStrategy.SWAP_ON_LITTLE_ENDIAN_HOST
            case ByteOrder.LITTLE:
                return SwapStrategy.SWAP_ON_BIG_ENDIAN_HOST
            case ByteOrder.NATIVE:
                return SwapStrategy.IDENTITY
            case _:
                assert_never(self)


HOST_BYTE_ORDER: ByteOrder = ByteOrder.BIG if sys.byteorder == 'big' else ByteOrder.LITTLE


class SwapStrategy(Enum):
    IDENTITY = 'identity'
    SWAP = 'swap'
    SWAP_ON_BIG_ENDIAN_HOST = 'swap-on-big-endian-host'
    SWAP_ON_LITTLE_ENDIAN_HOST = 'swap-on-little-endian-host'

    def swaps_on(self, host: ByteOrder) -> bool:
        """Whether this strategy swaps bytes on a host with the given byte order."""
        assert host is not ByteOrder.NATIVE, 'host byte order must be concrete'
        match self:
            case SwapStrategy.IDENTITY:
                return False
            case SwapStrategy.SWAP:
                return True
            case SwapStrategy.SWAP_ON_BIG_ENDIAN_HOST:
                return host is ByteOrder.BIG
            case SwapStrategy.SWAP_ON_LITTLE_ENDIAN_HOST:
                return host is ByteOrder.LITTLE
            case _:
                assert_never(self)

    def resolve16(self, *, host: Optional[ByteOrder] = None) -> Swap:
        return swap16 if self.swaps_on(host or HOST_BYTE_ORDER) else _identity

    def resolve32(self, *, host: Optional[ByteOrder] = None) -> Swap:
        return swap32 if self.swaps_on(host or HOST_BYTE_ORDER) else _identity
