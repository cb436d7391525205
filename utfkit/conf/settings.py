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

from pathlib import Path
from typing import Annotated, Optional, Union

from pydantic import AfterValidator, Field

from utfkit.forms import EncodingForm
from utfkit.scalar import LONGEST_SEQUENCE_LENGTH
from utfkit.utils.pydantic import BaseModel
from utfkit.utils.yaml import model_from_extended_yaml


def _check_encoding_name(name: str) -> str:
    # raises UnknownEncodingError, which is a ValueError so pydantic reports it as a validation error
    EncodingForm.parse(name)
    return name


EncodingName = Annotated[str, AfterValidator(_check_encoding_name)]


class TranscoderSettings(BaseModel):
    # Encoding of the input stream, any name accepted by EncodingForm.parse
    SOURCE_ENCODING: EncodingName = 'utf8'

    # Encoding of the output stream, None means the same as the input
    TARGET_ENCODING: Optional[EncodingName] = None

    # Replace malformed sequences with U+FFFD instead of failing
    REPAIR: bool = False

    # Capacity of the stream buffer in bytes
    CHUNK_SIZE: int = Field(default=4096, ge=2 * LONGEST_SEQUENCE_LENGTH)

    # Streams that process more bytes than this are aborted
    MAX_TOTAL_BYTES: int = Field(default=0x7FFFFFFF, gt=0)

    @property
    def source_form(self) -> EncodingForm:
        return EncodingForm.parse(self.SOURCE_ENCODING)

    @property
    def target_form(self) -> EncodingForm:
        if self.TARGET_ENCODING is None:
            return self.source_form
        return EncodingForm.parse(self.TARGET_ENCODING)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'TranscoderSettings':
        """Load settings from a yaml file, which may extend another one through its 'extends' key."""
        return model_from_extended_yaml(cls, filepath=filepath)
