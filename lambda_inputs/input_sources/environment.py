# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Process environment input source."""

import os
from collections.abc import MutableMapping
from typing import Any, Optional

from lambda_inputs.input_sources import casts
from lambda_inputs.input_sources.base import AbstractInput


class EnvironmentInput(AbstractInput):
    """Reads and writes environment variables.

    Without an explicit mapping the live ``os.environ`` is used, so changes made
    elsewhere in the process are seen on the next read and writes are inherited
    by child processes. Values are always stored as text.
    """

    source_name = 'environment'

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        """Initialize the source.

        Args:
            environ: The mapping to wrap, defaults to os.environ

        """
        self._environ = os.environ if environ is None else environ

    def has(self, key: str) -> bool:
        return key in self._environ

    def _lookup(self, key: str) -> Any:
        return self._environ[key]

    def set(self, key: str, value: Any) -> None:
        self._environ[key] = casts.to_string(value)
