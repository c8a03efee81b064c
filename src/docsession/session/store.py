# Copyright 2026 Firefly Software Solutions Inc.
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
"""BaseSessionStore — lock-guarded in-memory values shared by all backends."""

from __future__ import annotations

import abc
from datetime import datetime
from typing import Any

from docsession.session.locks import ReadWriteLock
from docsession.session.serializer import JsonValueSerializer, ValueSerializer, encode_values


class BaseSessionStore(abc.ABC):
    """In-memory key/value state of one session, persisted on demand.

    Subclasses implement :meth:`_persist`, which writes the encoded payload
    (and a pending expiry, if any) to the record matching the session id.

    The lock is never held across an ``await``: :meth:`save` snapshots and
    encodes the values under the shared lock, then releases it before
    touching the backend.
    """

    def __init__(
        self,
        session_id: str,
        expired: int,
        values: dict[str, Any] | None = None,
        *,
        context: Any = None,
        serializer: ValueSerializer | None = None,
        pending_expiry: datetime | None = None,
    ) -> None:
        self._sid = session_id
        self._expired = expired
        self._values: dict[str, Any] = dict(values) if values else {}
        self._context = context
        self._serializer = serializer or JsonValueSerializer()
        self._pending_expiry = pending_expiry
        self._lock = ReadWriteLock()

    @property
    def context(self) -> Any:
        """The caller context passed to the manager call that produced this store."""
        return self._context

    @property
    def session_id(self) -> str:
        return self._sid

    @property
    def expired(self) -> int:
        """Expiry in seconds this store was bound with."""
        return self._expired

    @property
    def pending_expiry(self) -> datetime | None:
        """Expiry computed by a refresh and not yet written; cleared by :meth:`save`."""
        return self._pending_expiry

    def set(self, key: str, value: Any) -> None:
        with self._lock.write_locked():
            self._values[key] = value

    def get(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, found)``; ``found`` distinguishes a stored ``None`` from a missing key."""
        with self._lock.read_locked():
            if key in self._values:
                return self._values[key], True
            return None, False

    def delete(self, key: str) -> Any:
        """Remove *key* and return its value, or ``None`` if it was not set.

        Lookup and removal happen under one exclusive hold, so the value
        returned is always the one that was removed.
        """
        with self._lock.write_locked():
            return self._values.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock.read_locked():
            return list(self._values)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._values)

    async def flush(self) -> None:
        """Drop every value and persist the now-empty session."""
        with self._lock.write_locked():
            self._values = {}
        await self.save()

    async def save(self) -> None:
        """Write the current values to the backend (last writer wins)."""
        with self._lock.read_locked():
            raw = encode_values(self._serializer, self._values, sid=self._sid)
        await self._persist(raw, self._pending_expiry)
        self._pending_expiry = None

    @abc.abstractmethod
    async def _persist(self, raw: str, expiry: datetime | None) -> None:
        """Overwrite the stored values of this session with *raw*.

        When *expiry* is set it is written as the record's ``time`` as well.
        Raise SessionNotFoundException if the record no longer exists.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(session_id={self._sid!r}, expired={self._expired})"
