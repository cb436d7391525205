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

from pydantic import ValidationError
from structlog import get_logger

from utfkit.conf.settings import TranscoderSettings
from utfkit.exceptions import ByteCountOverflowError, MalformedSequenceError
from utfkit.serialization import Serializer
from utfkit.transcoder import StreamTranscoder
from utfkit.version import __version__
from utfkit_cli.util import ExitCode, create_parser

logger = get_logger()


def add_settings_arguments(parser: ArgumentParser) -> None:
    """Options shared by the commands that read a stream, each one overrides a field of TranscoderSettings."""
    parser.add_argument('-f', '--from', dest='from_encoding', metavar='ENCODING',
                        help='Encoding of the input, required unless set in the config file')
    parser.add_argument('--chunk-size', type=int, help='Size of the stream buffer in bytes')
    parser.add_argument('--config-yaml', help='Path to a yaml file with the transcoder settings')


def create_transcode_parser() -> ArgumentParser:
    parser = create_parser()
    parser.description = 'Convert text on stdin from one Unicode encoding form to another, writing it to stdout.'
    add_settings_arguments(parser)
    parser.add_argument('-t', '--to', dest='to_encoding', metavar='ENCODING',
                        help='Encoding of the output, defaults to the input encoding')
    parser.add_argument('-r', '--repair', action='store_true', default=None,
                        help='Replace malformed sequences with U+FFFD instead of failing')
    parser.add_argument('-v', '--version', action='version', version=__version__)
    return parser


def build_settings(parser: ArgumentParser, args: Namespace) -> TranscoderSettings:
    """ Merge the config file and the command line options, the latter take precedence.

    The file goes through `TranscoderSettings.from_yaml`, like the process wide settings. `get_global_settings` is not
    used because `--config-yaml` may name a different file than UTFKIT_CONFIG_YAML, which configargparse already maps
    to that same option, and the singleton refuses to load a second file.
    """
    base = TranscoderSettings()
    if args.config_yaml:
        try:
            base = TranscoderSettings.from_yaml(filepath=args.config_yaml)
        except ValidationError as e:
            parser.error(f'invalid settings in {args.config_yaml}:\n{e}')
        except ValueError as e:
            parser.error(str(e))

    # only what the file sets explicitly, so the defaults do not count as a source encoding
    values = base.model_dump(exclude_unset=True)
    overrides = {
        'SOURCE_ENCODING': args.from_encoding,
        'TARGET_ENCODING': getattr(args, 'to_encoding', None),
        'REPAIR': getattr(args, 'repair', None),
        'CHUNK_SIZE': args.chunk_size,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    if 'SOURCE_ENCODING' not in values:
        parser.error('the following arguments are required: -f/--from')

    try:
        return TranscoderSettings.model_validate(values)
    except ValidationError as e:
        parser.error(f'invalid settings:\n{e}')


def run_transcoder(transcoder: StreamTranscoder, stdin: BinaryIO) -> ExitCode:
    """Pump stdin through the transcoder, mapping its errors to exit codes."""
    try:
        transcoder.run(stdin)
    except MalformedSequenceError as e:
        print(f'error: {e}', file=sys.stderr)
        return ExitCode.MALFORMED_INPUT
    except ByteCountOverflowError as e:
        transcoder.log.error('stream too long', error=str(e))
        return ExitCode.ERROR
    except OSError as e:
        transcoder.log.error('i/o error', error=str(e))
        return ExitCode.ERROR
    return ExitCode.OK


def execute(settings: TranscoderSettings, stdin: BinaryIO, stdout: BinaryIO) -> ExitCode:
    sink = Serializer.build_stream_serializer(stdout)
    transcoder = StreamTranscoder.from_settings(settings, sink)
    exit_code = run_transcoder(transcoder, stdin)
    sink.finalize()
    return exit_code


def main(argv: list[str] | None = None) -> ExitCode:
    parser = create_transcode_parser()
    args = parser.parse_args(argv)
    settings = build_settings(parser, args)
    return execute(settings, sys.stdin.buffer, sys.stdout.buffer)
