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

"""Input source contract and the shared typed accessors."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Union

from lambda_inputs.handlers.utils.observability import logger
from lambda_inputs.input_sources import casts
from lambda_inputs.input_sources.errors import InputTypeError, MissingValue
from lambda_inputs.input_sources.kinds import ValueKind, kind_of

Array = Union[list, tuple, dict]


class InputSource(ABC):
    """Abstract base class for key/value input sources."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check if the key exists.

        Args:
            key: The key to check

        Returns:
            True if the key exists, False otherwise

        """
        pass

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get the value of the key, or the default if the key is not set.

        Args:
            key: The key to retrieve
            default: The default value, None to raise MissingValue if the key is not set

        Returns:
            The value of the key

        Raises:
            MissingValue: If the key is not set and no default value is specified

        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Write the value under the key, overwriting any previous value.

        Args:
            key: The name of the key to write
            value: The value to write

        """
        pass


class AbstractInput(InputSource):
    """Typed accessors built on top of the has/lookup/set primitives.

    Concrete sources supply ``has``, ``_lookup`` and ``set``. Validated getters
    (``get_int`` etc.) raise InputTypeError when the value is not exactly of the
    requested kind; coercing getters (``get_as_int`` etc.) cast it instead, see
    ``casts`` for the rules. A default passed to a validated getter is checked
    the same way as a stored value.
    """

    source_name = 'input'

    @abstractmethod
    def _lookup(self, key: str) -> Any:
        """Return the stored value, the caller has checked the key exists."""
        pass

    def missing_message(self, key: str) -> Optional[str]:
        """Message for the MissingValue error, None for the plain one."""
        return None

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def get(self, key: str, default: Any = None) -> Any:
        if self.has(key):
            return self._lookup(key)

        if default is not None:
            logger.debug('key not set, using default', extra={'key': key, 'source': self.source_name})
            return default

        logger.debug('key not set and no default', extra={'key': key, 'source': self.source_name})
        raise MissingValue(key, self.missing_message(key))

    def _get_validated(self, key: str, default: Any, expected: ValueKind) -> Any:
        value = self.get(key, default)
        actual = kind_of(value)
        if actual != expected:
            logger.warning(
                'value of wrong type',
                extra={'key': key, 'source': self.source_name, 'expected': expected.value, 'actual': actual.value},
            )
            raise InputTypeError(expected=expected.value, actual=actual.value)
        return value

    def get_string(self, key: str, default: Optional[str] = None) -> str:
        """Get the value of the key and validate it is text.

        Raises:
            MissingValue: If the key is not set and no default value is specified
            InputTypeError: If the value is of wrong type

        """
        return self._get_validated(key, default, ValueKind.STRING)

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get the value of the key and validate it is an int, bools are rejected."""
        return self._get_validated(key, default, ValueKind.INT)

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        """Get the value of the key and validate it is a float, ints are rejected."""
        return self._get_validated(key, default, ValueKind.FLOAT)

    def get_bool(self, key: str, default: Optional[bool] = None) -> bool:
        """Get the value of the key and validate it is a bool."""
        return self._get_validated(key, default, ValueKind.BOOL)

    def get_array(self, key: str, default: Optional[Array] = None) -> Array:
        """Get the value of the key and validate it is a list, tuple or mapping."""
        return self._get_validated(key, default, ValueKind.ARRAY)

    def get_datetime(self, key: str, default: Optional[datetime] = None) -> datetime:
        """Get the value of the key and validate it is a datetime instance."""
        return self._get_validated(key, default, ValueKind.DATETIME)

    def get_as_string(self, key: str, default: Optional[str] = None) -> str:
        """Get the value of the key cast to text.

        Raises:
            MissingValue: If the key is not set and no default value is specified

        """
        return casts.to_string(self.get(key, default))

    def get_as_int(self, key: str, default: Optional[int] = None) -> int:
        return casts.to_int(self.get(key, default))

    def get_as_float(self, key: str, default: Optional[float] = None) -> float:
        return casts.to_float(self.get(key, default))

    def get_as_bool(self, key: str, default: Optional[bool] = None) -> bool:
        return casts.to_bool(self.get(key, default))

    def get_as_array(self, key: str, default: Optional[Array] = None) -> Array:
        """Get the value of the key, wrapping a non-container in a one-element list."""
        return casts.to_array(self.get(key, default))

    def get_as_datetime(self, key: str, default: Optional[datetime] = None) -> datetime:
        """Get the value of the key as a datetime, parsing text as ISO 8601.

        Raises:
            MissingValue: If the key is not set and no default value is specified
            InputTypeError: If the value is not a datetime and cannot be parsed as one

        """
        value = self.get(key, default)
        try:
            return casts.to_datetime(value)
        except InputTypeError:
            logger.warning('value is not a datetime', extra={'key': key, 'source': self.source_name})
            raise

    def set_string(self, key: str, value: str) -> None:
        self.set(key, value)

    def set_int(self, key: str, value: int) -> None:
        self.set(key, value)

    def set_float(self, key: str, value: float) -> None:
        self.set(key, value)

    def set_bool(self, key: str, value: bool) -> None:
        self.set(key, value)

    def set_array(self, key: str, value: Array) -> None:
        self.set(key, value)

    def set_datetime(self, key: str, value: datetime) -> None:
        self.set(key, value)
