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

r"""
Incremental transcoding between encoding forms.

A `StreamTranscoder` owns a fixed-capacity buffer with a valid range `[begin, end)`. Every pass decodes the scalars in
the valid range with the source codec and re-encodes them with the target codec. A malformed sequence that starts
less than `LONGEST_SEQUENCE_LENGTH` bytes before the end of the valid range might only be truncated by the chunk
boundary, so unless the stream is closed its bytes are carried over to the next pass instead of being judged.

>>> transcode('€'.encode('utf-8'), 'utf8', 'utf16be').hex()
'20ac'
>>> transcode(b'A\xffB', 'utf8', repair=True).decode('utf-8') == 'A\ufffdB'
True
>>> transcode(b'A\xffB', 'utf8')
Traceback (most recent call last):
    ...
utfkit.exceptions.MalformedSequenceError: malformed character at byte: 1
"""

from typing import TYPE_CHECKING, Protocol

from structlog import get_logger

from utfkit.exceptions import ByteCountOverflowError, MalformedSequenceError, StreamClosedError
from utfkit.forms import EncodingForm
from utfkit.scalar import LONGEST_SEQUENCE_LENGTH, REPLACEMENT_CHARACTER
from utfkit.serialization import Serializer
from utfkit.types import Buffer, Cursor

if TYPE_CHECKING:
    from utfkit.conf.settings import TranscoderSettings

logger = get_logger()

DEFAULT_CHUNK_SIZE = 4096
DEFAULT_MAX_TOTAL_BYTES = 0x7FFFFFFF


class Readable(Protocol):
    def read(self, size: int, /) -> bytes:
        ...


class StreamTranscoder:
    """ Transcode a byte stream from one encoding form to another, writing the result to `sink`.

    Bytes can be pushed with `feed` and `close`, or pulled from a file-like object with `run`. The sink receives the
    output of each pass as a single write.
    """

    def __init__(
        self,
        source: EncodingForm,
        target: EncodingForm,
        sink: Serializer,
        *,
        repair: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES,
    ) -> None:
        if chunk_size < 2 * LONGEST_SEQUENCE_LENGTH:
            raise ValueError(f'chunk_size must be at least {2 * LONGEST_SEQUENCE_LENGTH}, got {chunk_size}')
        if max_total_bytes <= 0:
            raise ValueError(f'max_total_bytes must be positive, got {max_total_bytes}')

        self.log = logger.new(source=source.value, target=target.value)
        self.source = source
        self.target = target
        self.sink = sink
        self.repair = repair
        self.max_total_bytes = max_total_bytes

        self._buffer = bytearray(chunk_size)
        self._begin = 0
        self._end = 0
        self._closed = False

        # scratch space for a single encoded scalar, the view is reused for the whole stream
        self._scratch = bytearray(LONGEST_SEQUENCE_LENGTH)
        self._scratch_units = target.unit_view(self._scratch)

        # bytes before self._begin that were already processed
        self._total = 0

        self.bytes_read = 0
        self.bytes_written = 0
        self.repairs = 0

    @classmethod
    def from_settings(cls, settings: 'TranscoderSettings', sink: Serializer) -> 'StreamTranscoder':
        return cls(
            settings.source_form,
            settings.target_form,
            sink,
            repair=settings.REPAIR,
            chunk_size=settings.CHUNK_SIZE,
            max_total_bytes=settings.MAX_TOTAL_BYTES,
        )

    @property
    def chunk_size(self) -> int:
        return len(self._buffer)

    @property
    def read_size(self) -> int:
        """Largest slice appended to the buffer at once, room is left for the carry-over of the previous pass."""
        return len(self._buffer) - LONGEST_SEQUENCE_LENGTH

    @property
    def bytes_processed(self) -> int:
        return self._total

    @property
    def carry(self) -> int:
        """Number of bytes waiting for more input."""
        return self._end - self._begin

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, chunk: Buffer) -> None:
        """Append bytes to the stream and transcode as much as possible of them."""
        if self._closed:
            raise StreamClosedError('cannot feed a closed stream')
        with memoryview(chunk) as view, view.cast('B') as data:
            read_size = self.read_size
            for offset in range(0, len(data), read_size):
                self._append(data[offset:offset + read_size])
                self._pass(final=False)

    def close(self) -> None:
        """Signal the end of the stream, any bytes still carried over are judged now."""
        if self._closed:
            return
        self._closed = True
        self._pass(final=True)
        self.sink.flush()
        self.log.debug(
            'stream closed',
            bytes_read=self.bytes_read,
            bytes_processed=self.bytes_processed,
            bytes_written=self.bytes_written,
            repairs=self.repairs,
        )

    def run(self, source: Readable) -> None:
        """Transcode everything `source` yields until it returns no bytes, then close the stream."""
        while chunk := source.read(self.read_size):
            self.feed(chunk)
        self.close()

    def _append(self, data: memoryview) -> None:
        carry = self._end - self._begin
        if self._begin:
            self._buffer[:carry] = self._buffer[self._begin:self._end]
            self._begin, self._end = 0, carry
        size = len(data)
        assert carry + size <= len(self._buffer)
        self._buffer[carry:carry + size] = data
        self._end = carry + size
        self.bytes_read += size

    def _pass(self, *, final: bool) -> None:
        form = self.source
        unit_size = form.unit_size
        available = self._end - self._begin
        pending = bytearray()
        processed = 0

        with memoryview(self._buffer)[self._begin:self._end] as window, form.code_units(window) as units:
            length = len(units)
            cursor = Cursor()
            while True:
                start = cursor.index
                result = form.decode(units, length, cursor)
                if result.is_end_of_input:
                    processed = start * unit_size
                    break
                if result.is_malformed:
                    start_byte = start * unit_size
                    if not final and start_byte + LONGEST_SEQUENCE_LENGTH > available:
                        # might be cut by the chunk boundary, wait for more bytes
                        processed = start_byte
                        break
                    self._on_malformed(self._total + start_byte, pending)
                self._encode(result.scalar, pending)

        if final and processed < available:
            # a code unit split by the end of the stream
            self._on_malformed(self._total + processed, pending)
            self._encode(REPLACEMENT_CHARACTER, pending)
            processed = available

        if processed > self.max_total_bytes - self._total:
            self._closed = True
            raise ByteCountOverflowError(
                f'more than {self.max_total_bytes} bytes processed in a single stream'
            )

        if pending:
            self._write(pending)
        self._total += processed
        self._begin += processed

        if not final:
            assert self.carry < LONGEST_SEQUENCE_LENGTH, 'carry-over exceeds the longest sequence'
            if self.carry:
                self.log.debug('carrying over possibly truncated bytes', carry=self.carry, offset=self._total)

    def _on_malformed(self, offset: int, pending: bytearray) -> None:
        if not self.repair:
            self._closed = True
            if pending:
                self._write(pending)
            self.sink.flush()
            self.log.debug('malformed sequence', offset=offset)
            raise MalformedSequenceError(offset)
        self.repairs += 1
        self.log.debug('repaired malformed sequence', offset=offset)

    def _write(self, data: bytearray) -> None:
        self.sink.write_bytes(data)
        self.bytes_written += len(data)

    def _encode(self, scalar: int, pending: bytearray) -> None:
        count = self.target.encode(scalar, self._scratch_units)
        assert count > 0, f'decoder produced an invalid scalar {scalar:#x}'
        pending += self._scratch[:count * self.target.unit_size]


def _as_form(form: EncodingForm | str) -> EncodingForm:
    if isinstance(form, EncodingForm):
        return form
    return EncodingForm.parse(form)


def transcode(
    data: Buffer,
    source: EncodingForm | str,
    target: EncodingForm | str | None = None,
    *,
    repair: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Transcode a whole byte string in memory, `target` defaults to `source`."""
    source_form = _as_form(source)
    target_form = source_form if target is None else _as_form(target)
    sink = Serializer.build_bytes_serializer()
    transcoder = StreamTranscoder(source_form, target_form, sink, repair=repair, chunk_size=chunk_size)
    transcoder.feed(data)
    transcoder.close()
    return sink.finalize()
