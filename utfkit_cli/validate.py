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

import sys
from argparse import ArgumentParser, Namespace
from typing import BinaryIO

from utfkit.conf.settings import TranscoderSettings
from utfkit.serialization import NullSerializer
from utfkit.transcoder import StreamTranscoder
from utfkit_cli.transcode import add_settings_arguments, build_settings, run_transcoder
from utfkit_cli.util import ExitCode, create_parser


def create_validate_parser() -> ArgumentParser:
    parser = create_parser()
    parser.description = 'Check that stdin is well-formed in the given encoding, nothing is written to stdout.'
    add_settings_arguments(parser)
    parser.add_argument('--count', action='store_true',
                        help='Count every malformed sequence instead of stopping at the first one')
    return parser


def execute(args: Namespace, settings: TranscoderSettings, stdin: BinaryIO) -> ExitCode:
    source = settings.source_form
    transcoder = StreamTranscoder(
        source,
        source,
        NullSerializer(),
        repair=args.count,
        chunk_size=settings.CHUNK_SIZE,
        max_total_bytes=settings.MAX_TOTAL_BYTES,
    )
    exit_code = run_transcoder(transcoder, stdin)
    if exit_code is not ExitCode.OK:
        return exit_code

    if args.count:
        print(f'{transcoder.repairs} malformed sequences in {transcoder.bytes_processed} bytes')
        return ExitCode.MALFORMED_INPUT if transcoder.repairs else ExitCode.OK

    print(f'ok: {transcoder.bytes_processed} bytes of well-formed {source.value}')
    return ExitCode.OK


def main(argv: list[str] | None = None) -> ExitCode:
    parser = create_validate_parser()
    args = parser.parse_args(argv)
    settings = build_settings(parser, args)
    return execute(args, settings, sys.stdin.buffer)
