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
"""In-memory session manager with the same record semantics as the MongoDB backend."""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime
from typing import Any

import structlog

from docsession.kernel.exceptions import SessionNotFoundException, StorageException
from docsession.session.record import SessionRecord, expires_at, utcnow
from docsession.session.serializer import JsonValueSerializer, ValueSerializer, decode_values
from docsession.session.store import BaseSessionStore

logger = structlog.get_logger("docsession.session.memory")


class InMemorySessionStore(BaseSessionStore):
    """Session store persisting into an :class:`InMemorySessionManager`."""

    def __init__(self, manager: InMemorySessionManager, session_id: str, expired: int, **kwargs: Any) -> None:
        super().__init__(session_id, expired, **kwargs)
        self._manager = manager

    async def _persist(self, raw: str, expiry: datetime | None) -> None:
        async with self._manager._lock:
            record = self._manager._records.get(self._sid)
            if record is None:
                raise SessionNotFoundException(self._sid)
            record.values = raw
            if expiry is not None:
                record.time = expiry


class InMemorySessionManager:
    """Session records kept in a dict, guarded by an asyncio.Lock.

    Suitable for development, testing, and single-process applications.
    Records never expire on their own; ``time`` is kept for parity with
    the MongoDB backend.
    """

    def __init__(self, *, serializer: ValueSerializer | None = None) -> None:
        self._records: dict[str, SessionRecord] = {}
        self._lock = asyncio.Lock()
        self._serializer = serializer or JsonValueSerializer()

    def get_record(self, sid: str) -> SessionRecord | None:
        """Return a copy of the stored record for *sid*, if any."""
        record = self._records.get(sid)
        return record.model_copy() if record is not None else None

    def _bind(self, values: dict[str, Any], sid: str, expired: int, context: Any, **kwargs: Any) -> InMemorySessionStore:
        return InMemorySessionStore(
            self, sid, expired, values=values, context=context, serializer=self._serializer, **kwargs
        )

    async def create(self, sid: str, expired: int, context: Any = None) -> InMemorySessionStore:
        async with self._lock:
            if sid in self._records:
                logger.error("session_create_failed", sid=sid, error="duplicate session id")
                raise StorageException(f"Unable to create session '{sid}': duplicate session id", sid=sid)
            self._records[sid] = SessionRecord(id=uuid.uuid4().hex, sid=sid, time=utcnow())
        return InMemorySessionStore(self, sid, expired, context=context, serializer=self._serializer)

    async def update(self, sid: str, expired: int, context: Any = None) -> InMemorySessionStore:
        async with self._lock:
            record = self._records.get(sid)
            if record is None:
                raise SessionNotFoundException(sid)
            record.time = expires_at(expired)
            raw = record.values
        return self._bind(decode_values(self._serializer, raw, sid=sid), sid, expired, context)

    async def refresh(self, old_sid: str, sid: str, expired: int, context: Any = None) -> InMemorySessionStore:
        async with self._lock:
            record = self._records.get(old_sid)
            if record is None:
                raise SessionNotFoundException(old_sid)
            values = decode_values(self._serializer, record.values, sid=old_sid)
            if sid != old_sid:
                if sid in self._records:
                    logger.error("session_refresh_failed", sid=sid, error="duplicate session id")
                    raise StorageException(f"Unable to refresh session '{old_sid}': '{sid}' already exists", sid=sid)
                del self._records[old_sid]
                record.sid = sid
                self._records[sid] = record
        return self._bind(values, sid, expired, context, pending_expiry=expires_at(expired))

    async def delete(self, sid: str) -> None:
        async with self._lock:
            self._records.pop(sid, None)

    async def check(self, sid: str) -> bool:
        async with self._lock:
            return sid in self._records

    async def close(self) -> None:
        """Nothing to release; records stay available until the manager is discarded."""
