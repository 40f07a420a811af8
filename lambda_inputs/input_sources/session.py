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

"""Session input source with pause/resume and fingerprint validation."""

import hashlib
import time
from typing import Any, Callable, Dict, Optional

from lambda_inputs.handlers.utils.observability import logger
from lambda_inputs.input_sources.base import AbstractInput
from lambda_inputs.input_sources.constants import (
    DEFAULT_REMOTE_ADDRESS,
    DEFAULT_SESSION_LIFETIME,
    DEFAULT_USER_AGENT,
    SESSION_EXPIRES,
    SESSION_MARKERS,
    SESSION_REMOTE_ADDRESS,
    SESSION_SERVER_GENERATED_SID,
    SESSION_USER_AGENT,
)
from lambda_inputs.input_sources.errors import SessionPaused
from lambda_inputs.input_sources.kinds import ValueKind, kind_of
from lambda_inputs.input_sources.models import RequestMetadata
from lambda_inputs.input_sources.session_store import SessionStore


def fingerprint(value: str) -> str:
    """Hash a piece of request metadata the way it is kept in the session."""
    return hashlib.md5(value.encode('utf-8')).hexdigest()


class SessionInput(AbstractInput):
    """Input source over the data of one session.

    The session is started on construction: the data stored for ``session_id``
    is loaded, or a new session with a server generated ID is created when the
    ID is missing or unknown to the store. Concurrent requests for the same
    session are serialized by the store, ``pause`` and ``resume`` let a long
    running request give the session up in between.
    """

    source_name = 'session'

    def __init__(
        self,
        store: SessionStore,
        session_id: Optional[str] = None,
        request: Optional[RequestMetadata] = None,
        lifetime_seconds: int = DEFAULT_SESSION_LIFETIME,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize and start the session.

        Args:
            store: The storage backend of the sessions
            session_id: The ID sent by the client, None to start a new session
            request: Metadata of the current request, used by is_valid and stamp
            lifetime_seconds: How long a stamped session stays valid
            clock: Returns the current POSIX time

        """
        self.store = store
        self.request = request or RequestMetadata()
        self.lifetime_seconds = lifetime_seconds
        self.clock = clock
        self._session_id = session_id
        self._data: Optional[Dict[str, Any]] = None
        self._start()

    def _start(self) -> None:
        data = self.store.get_session(self._session_id) if self._session_id else None
        if data is None:
            previous_id = self._session_id
            self._session_id = self.store.create_session()
            data = {}
            logger.info('started new session', extra={'session_id': self._session_id, 'requested_session_id': previous_id})
        self._data = data

    @property
    def data(self) -> Dict[str, Any]:
        """The live session map.

        Raises:
            SessionPaused: If the session is paused

        """
        if self._data is None:
            raise SessionPaused(self._session_id)
        return self._data

    @property
    def paused(self) -> bool:
        return self._data is None

    def has(self, key: str) -> bool:
        return key in self.data

    def _lookup(self, key: str) -> Any:
        return self.data[key]

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def get_session_id(self) -> str:
        """Get the ID of the current session."""
        return self._session_id

    def save(self) -> bool:
        """Write the session data to the store, keeping the session active."""
        saved = self.store.update_session(self._session_id, self.data)
        if not saved:
            logger.warning('session data was not saved', extra={'session_id': self._session_id})
        return saved

    def pause(self) -> None:
        """Write the session out and release it so other requests are not blocked."""
        if self.paused:
            return
        self.save()
        self._data = None
        logger.debug('session paused', extra={'session_id': self._session_id})

    def resume(self) -> None:
        """Reload a paused session, starting a new one if it is gone from the store."""
        if not self.paused:
            return
        self._start()
        logger.debug('session resumed', extra={'session_id': self._session_id})

    def regenerate(self) -> str:
        """Move the session data to a new ID and delete the old session.

        Returns:
            The new session ID

        """
        data = self.data
        old_session_id = self._session_id
        self._session_id = self.store.create_session(data)
        self.store.delete_session(old_session_id)
        logger.info('session id regenerated', extra={'session_id': self._session_id, 'old_session_id': old_session_id})
        return self._session_id

    def destroy(self) -> None:
        """Delete the stored session and start a new, empty one."""
        self.store.delete_session(self._session_id)
        logger.info('session destroyed', extra={'session_id': self._session_id})
        self._session_id = None
        self._start()

    def _remote_address_fingerprint(self) -> str:
        return fingerprint(self.request.remote_address or DEFAULT_REMOTE_ADDRESS)

    def _user_agent_fingerprint(self) -> str:
        return fingerprint(self.request.user_agent or DEFAULT_USER_AGENT)

    def stamp(self) -> None:
        """Write the fingerprint of the current request and a new expiry time."""
        data = self.data
        data[SESSION_SERVER_GENERATED_SID] = True
        data[SESSION_REMOTE_ADDRESS] = self._remote_address_fingerprint()
        data[SESSION_USER_AGENT] = self._user_agent_fingerprint()
        data[SESSION_EXPIRES] = int(self.clock() + self.lifetime_seconds)

    def is_valid(self) -> bool:
        """Make sure the session belongs to this caller and has not expired.

        Returns:
            True if the session is still valid, False otherwise

        """
        data = self.data
        if not data:
            logger.debug('session is empty', extra={'session_id': self._session_id})
            return False

        missing = [marker for marker in SESSION_MARKERS if data.get(marker) is None]
        if missing:
            logger.debug('session markers missing', extra={'session_id': self._session_id, 'missing': missing})
            return False

        if data[SESSION_REMOTE_ADDRESS] != self._remote_address_fingerprint():
            logger.debug('remote address changed', extra={'session_id': self._session_id})
            return False

        if data[SESSION_USER_AGENT] != self._user_agent_fingerprint():
            logger.debug('user agent changed', extra={'session_id': self._session_id})
            return False

        if kind_of(data[SESSION_EXPIRES]) not in (ValueKind.INT, ValueKind.FLOAT):
            logger.debug('session expiry is not a number', extra={'session_id': self._session_id})
            return False

        if self.clock() > data[SESSION_EXPIRES]:
            logger.debug('session expired', extra={'session_id': self._session_id})
            return False

        if not data[SESSION_SERVER_GENERATED_SID]:
            logger.debug('session id was not generated by the server', extra={'session_id': self._session_id})
            return False

        return True
