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

"""HTTP query string and body parameter input sources."""

from collections.abc import MutableMapping
from typing import Any, Optional

from lambda_inputs.input_sources.base import AbstractInput


class _ParamsInput(AbstractInput):
    """Input source over a parameter map owned by the in-flight request."""

    def __init__(self, params: Optional[MutableMapping[str, Any]] = None):
        self._params: MutableMapping[str, Any] = {} if params is None else params

    def has(self, key: str) -> bool:
        return key in self._params

    def _lookup(self, key: str) -> Any:
        return self._params[key]

    def set(self, key: str, value: Any) -> None:
        self._params[key] = value


class QueryParams(_ParamsInput):
    """Query string parameters of the request."""

    source_name = 'query'


class BodyParams(_ParamsInput):
    """Parameters decoded from the request body (form or JSON object)."""

    source_name = 'body'

    def missing_message(self, key: str) -> Optional[str]:
        return f'The key {key} was not found in the POST data'
