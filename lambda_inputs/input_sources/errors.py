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

"""Errors raised by the request input sources."""

from typing import Optional


class MissingValue(LookupError):
    """The key is not set in the backing store and no default was given."""

    def __init__(self, key: str, message: Optional[str] = None):
        """Initialize the error.

        Args:
            key: The missing key
            message: Optional source specific message, defaults to a plain key-missing message

        """
        self.key = key
        super().__init__(message or f'The key {key} is missing')


class InputTypeError(TypeError):
    """The value is not of the requested kind, or cannot be converted to it."""

    def __init__(self, expected: str, actual: str, message: Optional[str] = None):
        """Initialize the error.

        Args:
            expected: Name of the requested kind
            actual: Name of the kind that was found
            message: Optional message, defaults to an expected/got message

        """
        self.expected = expected
        self.actual = actual
        super().__init__(message or f'Expected value of type {expected}, got {actual}')


class SessionPaused(RuntimeError):
    """The session was paused and has to be resumed before it can be used."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f'The session {session_id} is paused')
