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

"""Models for the API Gateway request events the input sources are built from."""

import base64
import json
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lambda_inputs.input_sources.constants import (
    ARRAY_PARAM_SUFFIX,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
    HEADER_FORWARDED_FOR,
    HEADER_USER_AGENT,
)


def group_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """Group name/value pairs into a parameter map.

    A name seen more than once maps to the list of its values. A name using the
    ``name[]`` notation always maps to a list, stored under ``name``.
    """
    grouped: Dict[str, List[str]] = {}
    forced_lists = set()
    for name, value in pairs:
        if name.endswith(ARRAY_PARAM_SUFFIX) and len(name) > len(ARRAY_PARAM_SUFFIX):
            name = name[: -len(ARRAY_PARAM_SUFFIX)]
            forced_lists.add(name)
        grouped.setdefault(name, []).append(value)

    return {name: values if name in forced_lists or len(values) > 1 else values[0] for name, values in grouped.items()}


class RequestIdentity(BaseModel):
    """Caller identity as seen by API Gateway."""

    sourceIp: Optional[str] = None


class RequestContext(BaseModel):
    """The subset of the API Gateway request context the inputs use."""

    identity: RequestIdentity = Field(default_factory=RequestIdentity)


class HttpRequestEvent(BaseModel):
    """API Gateway (REST, proxy integration) event with case-insensitive headers."""

    httpMethod: str
    headers: Dict[str, str] = Field(default_factory=dict)
    queryStringParameters: Optional[Dict[str, str]] = None
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    body: Optional[str] = None
    isBase64Encoded: bool = False
    requestContext: RequestContext = Field(default_factory=RequestContext)

    @field_validator('headers', mode='before')
    @classmethod
    def convert_headers_to_lowercase(cls, data: Any) -> Any:
        """Convert all header keys to lowercase for case-insensitive lookup."""
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data

    @property
    def content_type(self) -> str:
        """The media type of the body without parameters such as charset."""
        return self.headers.get(HEADER_CONTENT_TYPE, '').split(';')[0].strip().lower()

    @property
    def user_agent(self) -> Optional[str]:
        return self.headers.get(HEADER_USER_AGENT)

    @property
    def remote_address(self) -> Optional[str]:
        """The caller address, falling back to the first X-Forwarded-For hop."""
        if self.requestContext.identity.sourceIp:
            return self.requestContext.identity.sourceIp
        forwarded = self.headers.get(HEADER_FORWARDED_FOR)
        if forwarded:
            return forwarded.split(',')[0].strip() or None
        return None

    def query_params(self) -> Dict[str, Any]:
        """Decode the query string parameters into a parameter map."""
        if self.multiValueQueryStringParameters:
            pairs = [(name, value) for name, values in self.multiValueQueryStringParameters.items() for value in values]
        else:
            pairs = list((self.queryStringParameters or {}).items())
        return group_params(pairs)

    def raw_body(self) -> str:
        if not self.body:
            return ''
        if self.isBase64Encoded:
            return base64.b64decode(self.body).decode('utf-8')
        return self.body

    def body_params(self) -> Dict[str, Any]:
        """Decode the body into a parameter map.

        JSON bodies must hold an object, form bodies are grouped like the query
        string. Other media types give an empty map.

        Raises:
            ValueError: If a JSON body is malformed or is not an object

        """
        body = self.raw_body()
        if not body:
            return {}

        if self.content_type == CONTENT_TYPE_JSON:
            decoded = json.loads(body)
            if not isinstance(decoded, dict):
                raise ValueError('JSON body must be an object')
            return decoded

        if self.content_type == CONTENT_TYPE_FORM:
            return group_params(parse_qsl(body, keep_blank_values=True))

        return {}


class RequestMetadata(BaseModel):
    """Caller metadata the session fingerprint is computed from."""

    model_config = ConfigDict(frozen=True)

    remote_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_event(cls, event: HttpRequestEvent) -> 'RequestMetadata':
        return cls(remote_address=event.remote_address, user_agent=event.user_agent)
