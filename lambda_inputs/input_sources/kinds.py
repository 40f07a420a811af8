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

"""Value kinds recognized by the typed accessors."""

from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Enum for the kinds of values an input source can hold."""

    STRING = 'string'
    INT = 'int'
    FLOAT = 'float'
    BOOL = 'bool'
    ARRAY = 'array'
    DATETIME = 'datetime'
    NULL = 'null'
    OTHER = 'other'


def is_container(value: Any) -> bool:
    """Check if the value is an ordered or keyed container, text excluded."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, Mapping))


def kind_of(value: Any) -> ValueKind:
    """Classify a value by its exact runtime kind.

    bool is checked before int since it subclasses int, a bool is never an INT.
    """
    match value:
        case None:
            return ValueKind.NULL
        case bool():
            return ValueKind.BOOL
        case int():
            return ValueKind.INT
        case float():
            return ValueKind.FLOAT
        case str():
            return ValueKind.STRING
        case datetime():
            return ValueKind.DATETIME
        case _ if is_container(value):
            return ValueKind.ARRAY
        case _:
            return ValueKind.OTHER
