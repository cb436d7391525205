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

import os
import sys
from collections import defaultdict
from types import ModuleType
from typing import Optional

from structlog import get_logger

from utfkit_cli.util import ExitCode

logger = get_logger()


class CliManager:
    def __init__(self) -> None:
        self.basename: str = os.path.basename(sys.argv[0])
        self.command_list: dict[str, ModuleType] = {}
        self.cmd_description: dict[str, str] = {}
        self.groups: dict[str, list[str]] = defaultdict(list)
        self.longest_cmd: int = 0

        from utfkit_cli import encodings, transcode, validate

        self.add_cmd('convert', 'transcode', transcode, 'Convert stdin between Unicode encoding forms')
        self.add_cmd('convert', 'validate', validate, 'Check that stdin is well-formed')
        self.add_cmd('info', 'encodings', encodings, 'List the accepted encoding names')

    def add_cmd(self, group: str, cmd: str, module: ModuleType, short_description: Optional[str] = None) -> None:
        self.command_list[cmd] = module
        self.groups[group].append(cmd)
        if short_description:
            self.cmd_description[cmd] = short_description
        self.longest_cmd = max(self.longest_cmd, len(cmd))

    def help(self) -> None:
        print()
        print('Available subcommands:')
        print()

        from colorama import Fore, Style
        for group in sorted(self.groups):
            print(Fore.RED + Style.BRIGHT + '[{}]'.format(group) + Style.RESET_ALL)
            for cmd in self.groups[group]:
                filling = ' ' * (self.longest_cmd - len(cmd))
                description = self.cmd_description.get(cmd, '')
                print('    {}{}   {}'.format(cmd, filling, description))
            print()

    def execute_from_command_line(self, argv: Optional[list[str]] = None) -> int:
        from utfkit_cli.util import process_logging_options, process_logging_output, setup_logging

        argv = list(sys.argv[1:] if argv is None else argv)

        if not argv:
            self.help()
            return ExitCode.OK

        cmd = argv.pop(0)
        if cmd == 'help':
            self.help()
            return ExitCode.OK

        if cmd not in self.command_list:
            print('Unknown command: "{}"'.format(cmd), file=sys.stderr)
            print('Type "{} help" for usage.'.format(self.basename), file=sys.stderr)
            return ExitCode.INVALID_OPTION

        sys.argv[0] = '{} {}'.format(self.basename, cmd)
        module = self.command_list[cmd]

        output = process_logging_output(argv)
        options = process_logging_options(argv)
        setup_logging(logging_output=output, logging_options=options)
        return module.main(argv)


def main() -> None:
    try:
        sys.exit(CliManager().execute_from_command_line())
    except KeyboardInterrupt:
        logger.warn('Aborting and exiting...')
        sys.exit(ExitCode.ERROR)
    except Exception:
        logger.exception('Uncaught exception:')
        sys.exit(ExitCode.ERROR)


if __name__ == '__main__':
    main()
