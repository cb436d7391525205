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

from utfkit.forms import EncodingForm, supported_encoding_names
from utfkit_cli.util import ExitCode, create_parser


def main(argv: list[str] | None = None) -> ExitCode:
    parser = create_parser()
    parser.description = 'List the accepted encoding names.'
    parser.parse_args(argv)

    for name in supported_encoding_names():
        form = EncodingForm.parse(name)
        if form.value == name:
            print(name)
        else:
            print(f'{name} (same as {form.value} on this host)')
    return ExitCode.OK
