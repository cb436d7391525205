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

from typing_extensions import override

from utfkit.serialization.serializer import Serializer
from utfkit.types import Buffer


class NullSerializer(Serializer):
    """Serializer that discards everything, only counting the bytes written to it."""

    def __init__(self) -> None:
        self._pos: int = 0

    @override
    def finalize(self) -> bytes:
        return b''

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._pos += memoryview(data).nbytes
