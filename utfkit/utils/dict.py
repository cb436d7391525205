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

from copy import deepcopy
from typing import Any, TypeVar

K = TypeVar('K')


def deep_merge(first_dict: dict[K, Any], second_dict: dict[K, Any]) -> dict[K, Any]:
    """
    Recursively merge two dicts into a new one, values from `second_dict` win. Neither input is modified.

    >>> base = dict(SOURCE_ENCODING='utf8', LIMITS=dict(CHUNK_SIZE=4096, MAX=10))
    >>> override = dict(REPAIR=True, LIMITS=dict(MAX=20))
    >>> deep_merge(base, override) == dict(SOURCE_ENCODING='utf8', LIMITS=dict(CHUNK_SIZE=4096, MAX=20), REPAIR=True)
    True
    >>> base == dict(SOURCE_ENCODING='utf8', LIMITS=dict(CHUNK_SIZE=4096, MAX=10))
    True
    """
    merged = deepcopy(first_dict)

    def merge_into(first: dict[K, Any], second: dict[K, Any]) -> dict[K, Any]:
        for key, value in second.items():
            if isinstance(first.get(key), dict) and isinstance(value, dict):
                merge_into(first[key], value)
            else:
                first[key] = deepcopy(value)
        return first

    return merge_into(merged, second_dict)
