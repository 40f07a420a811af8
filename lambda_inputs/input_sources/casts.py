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

"""Cast rules used by the coercing getters.

The rules follow the usual loose conversions of request data:

* string: text is kept, None becomes '', datetimes become ISO 8601 text,
  containers become JSON text and any other value goes through ``str()``.
* int / float: numbers are kept (int truncates toward zero), bools become 0/1,
  text is read up to the end of its leading numeric prefix and becomes 0 when
  there is none, datetimes become POSIX timestamps, containers become 0 when
  empty and 1 otherwise, None and anything else become 0.
* bool: text is false for '', '0', 'false', 'no' and 'off' (case-insensitive),
  anything else uses Python truthiness.
* array: containers are kept, anything else is wrapped in a one-element list.
* datetime: datetimes are kept, text is stripped and parsed as ISO 8601,
  anything else fails. Bare numbers are not read as Unix timestamps.
"""

import json
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from lambda_inputs.input_sources.errors import InputTypeError
from lambda_inputs.input_sources.kinds import ValueKind, is_container, kind_of

NUMERIC_PREFIX = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
FALSE_STRINGS = frozenset({'', '0', 'false', 'no', 'off'})

_datetime_adapter: TypeAdapter[datetime] = TypeAdapter(datetime)


def _number_from_text(text: str) -> float:
    match = NUMERIC_PREFIX.match(text.strip())
    if match is None:
        return 0.0
    return float(match.group())


def to_string(value: Any) -> str:
    """Cast a value to text."""
    kind = kind_of(value)
    if kind == ValueKind.STRING:
        return value
    if kind == ValueKind.NULL:
        return ''
    if kind == ValueKind.DATETIME:
        return value.isoformat()
    if kind == ValueKind.ARRAY:
        try:
            return json.dumps(dict(value) if isinstance(value, Mapping) else list(value), default=str)
        except TypeError:
            # keys JSON cannot represent
            return str(value)
    return str(value)


def to_float(value: Any) -> float:
    """Cast a value to a float."""
    match kind_of(value):
        case ValueKind.FLOAT | ValueKind.INT | ValueKind.BOOL:
            return float(value)
        case ValueKind.STRING:
            return _number_from_text(value)
        case ValueKind.DATETIME:
            return value.timestamp()
        case ValueKind.ARRAY:
            return 1.0 if len(value) else 0.0
        case _:
            return 0.0


def to_int(value: Any) -> int:
    """Cast a value to an int, truncating toward zero."""
    kind = kind_of(value)
    if kind in (ValueKind.INT, ValueKind.BOOL):
        return int(value)
    if kind == ValueKind.STRING:
        # an integral prefix is parsed exactly, not through float
        prefix = NUMERIC_PREFIX.match(value.strip())
        if prefix is not None and prefix.group().lstrip('+-').isdigit():
            return int(prefix.group())
    number = to_float(value)
    if not math.isfinite(number):
        return 0
    return int(number)


def to_bool(value: Any) -> bool:
    """Cast a value to a bool."""
    if kind_of(value) == ValueKind.STRING:
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def to_array(value: Any) -> Any:
    """Wrap a non-container value in a one-element list."""
    if is_container(value):
        return value
    return [value]


def to_datetime(value: Any) -> datetime:
    """Cast a value to a datetime.

    Raises:
        InputTypeError: If the value is neither a datetime nor parseable text

    """
    kind = kind_of(value)
    if kind == ValueKind.DATETIME:
        return value
    if kind != ValueKind.STRING:
        raise InputTypeError(
            expected=f'{ValueKind.DATETIME.value} or {ValueKind.STRING.value}',
            actual=kind.value,
        )
    text = value.strip()
    if NUMERIC_PREFIX.fullmatch(text):
        raise InputTypeError(
            expected=ValueKind.DATETIME.value,
            actual=kind.value,
            message=f'Unable to create {ValueKind.DATETIME.value} from {value}: not an ISO 8601 date',
        )
    try:
        return _datetime_adapter.validate_python(text)
    except ValidationError as exc:
        raise InputTypeError(
            expected=ValueKind.DATETIME.value,
            actual=kind.value,
            message=f'Unable to create {ValueKind.DATETIME.value} from {value}: {exc.errors()[0]["msg"]}',
        ) from exc
