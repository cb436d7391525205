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

from typing import BinaryIO

from typing_extensions import override

from utfkit.serialization.serializer import Serializer
from utfkit.types import Buffer


class StreamSerializer(Serializer):
    """Serializer that writes straight to a binary file object, such as `sys.stdout.buffer`.

    The stream is not closed by the serializer.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pos: int = 0

    @override
    def finalize(self) -> bytes:
        """Flush the stream, the bytes themselves were already written to it."""
        self.flush()
        return b''

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self._stream.write(int.to_bytes(data, length=1, byteorder='big'))
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        self._stream.write(view)
        self._pos += view.nbytes

    @override
    def flush(self) -> None:
        self._stream.flush()
