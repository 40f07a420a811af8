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

"""Session storage backends for the session input source."""

import copy
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from boto3 import resource as boto3_resource

from lambda_inputs.handlers.utils.observability import logger
from lambda_inputs.input_sources.constants import DEFAULT_STORE_LIFETIME


class SessionStore(ABC):
    """Abstract base class for session storage implementations."""

    @abstractmethod
    def create_session(self, session_data: Optional[Dict[str, Any]] = None) -> str:
        """Create a new session.

        Args:
            session_data: Optional initial session data

        Returns:
            The session ID

        """
        pass

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Get session data.

        Args:
            session_id: The session ID to look up

        Returns:
            Session data or None if not found

        """
        pass

    @abstractmethod
    def update_session(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        """Update session data.

        Args:
            session_id: The session ID to update
            session_data: New session data

        Returns:
            True if successful, False otherwise

        """
        pass

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Delete a session.

        Args:
            session_id: The session ID to delete

        Returns:
            True if successful, False otherwise

        """
        pass


def to_dynamodb(value: Any) -> Any:
    """Convert session data to types the DynamoDB serializer accepts.

    Floats become Decimals and datetimes become ISO 8601 text.
    """
    match value:
        case bool():
            return value
        case float():
            return Decimal(str(value))
        case datetime():
            return value.isoformat()
        case dict():
            return {k: to_dynamodb(v) for k, v in value.items()}
        case list() | tuple():
            return [to_dynamodb(v) for v in value]
        case _:
            return value


def from_dynamodb(value: Any) -> Any:
    """Convert the Decimals DynamoDB returns back to ints and floats."""
    match value:
        case Decimal():
            return int(value) if value == value.to_integral_value() else float(value)
        case dict():
            return {k: from_dynamodb(v) for k, v in value.items()}
        case list():
            return [from_dynamodb(v) for v in value]
        case _:
            return value


class DynamoDBSessionStore(SessionStore):
    """Manages sessions using DynamoDB, ``expires_at`` is the table TTL attribute."""

    def __init__(self, table_name_getter: Callable[[], str], lifetime_seconds: int = DEFAULT_STORE_LIFETIME):
        """Initialize the session store.

        Args:
            table_name_getter: A callable that takes no arguments and returns the DynamoDB table name as a string
            lifetime_seconds: How long a stored session lives after it was created

        """
        self.table_name_getter = table_name_getter
        self.lifetime_seconds = lifetime_seconds
        self._table = None
        self._dynamodb = None

    @property
    def table_name(self) -> str:
        """Get the table name by calling the table_name_getter."""
        return self.table_name_getter()

    @property
    def dynamodb(self):
        """Lazy initialization of the DynamoDB resource."""
        if self._dynamodb is None:
            self._dynamodb = boto3_resource('dynamodb')
        return self._dynamodb

    @property
    def table(self):
        """Lazy initialization of the DynamoDB table."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)  # pyright: ignore [reportAttributeAccessIssue]
        return self._table

    def create_session(self, session_data: Optional[Dict[str, Any]] = None) -> str:
        session_id = str(uuid.uuid4())
        now = int(time.time())
        item = {
            'session_id': session_id,
            'expires_at': now + self.lifetime_seconds,
            'created_at': now,
            'data': to_dynamodb(session_data or {}),
        }

        self.table.put_item(Item=item)
        logger.debug('created session id', extra={'session_id': session_id})

        return session_id

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.table.get_item(Key={'session_id': session_id})
            item = response.get('Item')

            if not item:
                return None

            # DynamoDB TTL deletion is lazy, expired items can still be read
            if item.get('expires_at', 0) < time.time():
                logger.debug('Session expired', extra={'session_id': session_id})
                self.delete_session(session_id)
                return None

            return from_dynamodb(item.get('data', {}))

        except Exception:
            logger.exception('Error getting session', extra={'session_id': session_id})
            return None

    def update_session(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        try:
            self.table.update_item(
                Key={'session_id': session_id},
                UpdateExpression='SET #data = :data',
                ExpressionAttributeNames={'#data': 'data'},
                ExpressionAttributeValues={':data': to_dynamodb(session_data)},
            )
            return True
        except Exception:
            logger.exception('Error updating session', extra={'session_id': session_id})
            return False

    def delete_session(self, session_id: str) -> bool:
        try:
            self.table.delete_item(Key={'session_id': session_id})
            logger.debug('Deleted session', extra={'session_id': session_id})
            return True
        except Exception:
            logger.exception('Error deleting session', extra={'session_id': session_id})
            return False


class InMemorySessionStore(SessionStore):
    """Keeps sessions in a dict, for tests and local runs.

    Stored data is copied on the way in and out so callers never share the
    store's own dicts, the same as a round trip through a real backend.
    """

    def __init__(self, lifetime_seconds: int = DEFAULT_STORE_LIFETIME, clock: Callable[[], float] = time.time):
        self.lifetime_seconds = lifetime_seconds
        self.clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create_session(self, session_data: Optional[Dict[str, Any]] = None) -> str:
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = {
            'expires_at': self.clock() + self.lifetime_seconds,
            'data': copy.deepcopy(session_data or {}),
        }
        logger.debug('created session id', extra={'session_id': session_id})
        return session_id

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        item = self._sessions.get(session_id)
        if item is None:
            return None
        if item['expires_at'] < self.clock():
            logger.debug('Session expired', extra={'session_id': session_id})
            self.delete_session(session_id)
            return None
        return copy.deepcopy(item['data'])

    def update_session(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        item = self._sessions.get(session_id)
        if item is None:
            return False
        item['data'] = copy.deepcopy(session_data)
        return True

    def delete_session(self, session_id: str) -> bool:
        self._sessions.pop(session_id, None)
        logger.debug('Deleted session', extra={'session_id': session_id})
        return True
