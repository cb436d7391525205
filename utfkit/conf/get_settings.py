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
from typing import NamedTuple, Optional

from structlog import get_logger

from utfkit.conf.settings import TranscoderSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'UTFKIT_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    # path of the yaml file, None for the defaults
    source: Optional[str]
    settings: TranscoderSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> TranscoderSettings:
    """
    Return the process wide settings.

    They are loaded from the yaml file in the 'UTFKIT_CONFIG_YAML' env var the first time, or are the defaults if it is
    not set. Changing the env var to another file afterwards is an error.
    """
    return _load_settings_singleton(os.environ.get(CONFIG_YAML_ENV_VAR) or None)


def get_settings_source() -> Optional[str]:
    """ Returns the path of the yaml file that was loaded, or None if the defaults are used.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def _load_settings_singleton(source: Optional[str]) -> TranscoderSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    if source is None:
        settings = TranscoderSettings()
    else:
        logger.new().debug('loading settings', filepath=source)
        settings = TranscoderSettings.from_yaml(filepath=source)

    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings


def _reset_settings_singleton() -> None:
    global _settings_singleton
    _settings_singleton = None
