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

"""Bundle of the input sources of one Lambda request."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from aws_lambda_powertools.utilities.parser import parse

from lambda_inputs.input_sources.constants import DEFAULT_SESSION_LIFETIME, HEADER_SESSION_ID
from lambda_inputs.input_sources.environment import EnvironmentInput
from lambda_inputs.input_sources.models import HttpRequestEvent, RequestMetadata
from lambda_inputs.input_sources.params import BodyParams, QueryParams
from lambda_inputs.input_sources.session import SessionInput
from lambda_inputs.input_sources.session_store import SessionStore


@dataclass
class RequestInputs:
    """The query, body and environment sources plus the caller metadata."""

    query: QueryParams = field(default_factory=QueryParams)
    body: BodyParams = field(default_factory=BodyParams)
    env: EnvironmentInput = field(default_factory=EnvironmentInput)
    request: RequestMetadata = field(default_factory=RequestMetadata)
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> 'RequestInputs':
        """Parse an API Gateway proxy event into input sources.

        Raises:
            ValueError: If the event does not match the model or its body cannot be decoded

        """
        parsed_event = parse(event=event, model=HttpRequestEvent)
        return cls(
            query=QueryParams(parsed_event.query_params()),
            body=BodyParams(parsed_event.body_params()),
            request=RequestMetadata.from_event(parsed_event),
            headers=parsed_event.headers,
        )

    @property
    def session_id(self) -> Optional[str]:
        """The session ID sent by the client, if any."""
        return self.headers.get(HEADER_SESSION_ID) or None

    def session(self, store: SessionStore, lifetime_seconds: int = DEFAULT_SESSION_LIFETIME) -> SessionInput:
        """Start the session the client asked for on the given store."""
        return SessionInput(store, session_id=self.session_id, request=self.request, lifetime_seconds=lifetime_seconds)
