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
"""MongoDB-backed session manager and store (motor)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pymongo
import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from docsession.config.properties.mongodb import DEFAULT_DATABASE, MongoDBProperties
from docsession.kernel.exceptions import (
    SessionNotFoundException,
    StorageException,
    StoreConnectionException,
)
from docsession.session.record import SessionRecord, expires_at, utcnow
from docsession.session.serializer import JsonValueSerializer, ValueSerializer, decode_values
from docsession.session.store import BaseSessionStore

logger = structlog.get_logger("docsession.session.mongodb")


class MongoSessionStore(BaseSessionStore):
    """Session store that writes its values back to a MongoDB collection."""

    def __init__(self, collection: Any, session_id: str, expired: int, **kwargs: Any) -> None:
        super().__init__(session_id, expired, **kwargs)
        self._collection = collection

    async def _persist(self, raw: str, expiry: datetime | None) -> None:
        try:
            document = await self._collection.find_one({"sid": self._sid})
        except PyMongoError as exc:
            logger.error("session_save_failed", sid=self._sid, error=str(exc))
            raise StorageException(f"Unable to load session '{self._sid}': {exc}", sid=self._sid) from exc
        if document is None:
            raise SessionNotFoundException(self._sid)

        changes: dict[str, Any] = {"values": raw}
        if expiry is not None:
            changes["time"] = expiry

        try:
            result = await self._collection.update_one({"_id": document["_id"]}, {"$set": changes})
        except PyMongoError as exc:
            logger.error("session_save_failed", sid=self._sid, error=str(exc))
            raise StorageException(f"Unable to save session '{self._sid}': {exc}", sid=self._sid) from exc
        if result.matched_count == 0:
            # deleted between the lookup and the update
            raise SessionNotFoundException(self._sid)


class MongoSessionManager:
    """Creates, renews, checks and deletes session records in MongoDB.

    The manager owns the motor client. Construct it with :meth:`connect`
    to get a started manager, or pass an existing client and call
    :meth:`start` yourself.

    Usage::

        manager = await MongoSessionManager.connect(MongoDBProperties(uri="mongodb://db:27017/app"))
        store = await manager.create("abc123", 3600)
        store.set("theme", "dark")
        await store.save()
    """

    def __init__(
        self,
        client: Any,
        properties: MongoDBProperties | None = None,
        *,
        serializer: ValueSerializer | None = None,
    ) -> None:
        self._client = client
        self._properties = properties or MongoDBProperties()
        self._serializer = serializer or JsonValueSerializer()
        if self._properties.database:
            database = client[self._properties.database]
        else:
            database = client.get_default_database(DEFAULT_DATABASE)
        self._database_name = database.name
        self._collection = database[self._properties.collection]
        self._closed = False

    @classmethod
    async def connect(
        cls,
        properties: MongoDBProperties | None = None,
        *,
        serializer: ValueSerializer | None = None,
    ) -> MongoSessionManager:
        """Build a motor client from *properties*, ping the server and return a started manager."""
        properties = properties or MongoDBProperties()
        try:
            client: AsyncIOMotorClient = AsyncIOMotorClient(  # type: ignore[type-arg]
                properties.uri, **properties.client_options()
            )
        except (PyMongoError, ValueError) as exc:
            logger.error("session_connect_failed", uri=properties.uri, error=str(exc))
            raise StoreConnectionException(f"Unable to connect: {exc}") from exc

        manager = cls(client, properties, serializer=serializer)
        try:
            await manager.start()
        except Exception:
            await manager.close()
            raise
        return manager

    @property
    def collection(self) -> Any:
        return self._collection

    async def start(self) -> None:
        """Ping the server and ensure the unique index on ``sid``."""
        try:
            await self._client.admin.command("ping")
        except PyMongoError as exc:
            logger.error("session_ping_failed", error=str(exc))
            raise StoreConnectionException(f"Unable to ping: {exc}") from exc

        if self._properties.ensure_indexes:
            try:
                await self._collection.create_index([("sid", pymongo.ASCENDING)], unique=True)
            except PyMongoError as exc:
                logger.error("session_index_failed", collection=self._properties.collection, error=str(exc))
                raise StorageException(f"Unable to create session index: {exc}") from exc

        logger.info(
            "session_store_started",
            database=self._database_name,
            collection=self._properties.collection,
        )

    async def stop(self) -> None:
        await self.close()

    async def _find(self, sid: str) -> SessionRecord:
        try:
            document = await self._collection.find_one({"sid": sid})
        except PyMongoError as exc:
            logger.error("session_lookup_failed", sid=sid, error=str(exc))
            raise StorageException(f"Unable to load session '{sid}': {exc}", sid=sid) from exc
        if document is None:
            raise SessionNotFoundException(sid)
        return SessionRecord.from_document(document)

    async def _set(self, record: SessionRecord, changes: dict[str, Any], operation: str) -> None:
        try:
            await self._collection.update_one({"_id": record.id}, {"$set": changes})
        except PyMongoError as exc:
            logger.error(f"session_{operation}_failed", sid=record.sid, error=str(exc))
            raise StorageException(f"Unable to {operation} session '{record.sid}': {exc}", sid=record.sid) from exc

    def _bind(self, values: dict[str, Any], sid: str, expired: int, context: Any, **kwargs: Any) -> MongoSessionStore:
        return MongoSessionStore(
            self._collection,
            sid,
            expired,
            values=values,
            context=context,
            serializer=self._serializer,
            **kwargs,
        )

    async def create(self, sid: str, expired: int, context: Any = None) -> MongoSessionStore:
        """Insert a new record with empty values and return its store."""
        record = SessionRecord(sid=sid, time=utcnow())
        try:
            await self._collection.insert_one(record.to_document())
        except PyMongoError as exc:
            logger.error("session_create_failed", sid=sid, error=str(exc))
            raise StorageException(f"Unable to create session '{sid}': {exc}", sid=sid) from exc

        return MongoSessionStore(self._collection, sid, expired, context=context, serializer=self._serializer)

    async def update(self, sid: str, expired: int, context: Any = None) -> MongoSessionStore:
        """Push the record's expiry to now + *expired* and return a store with its values."""
        record = await self._find(sid)
        record.time = expires_at(expired)
        await self._set(record, {"time": record.time}, "update")
        values = decode_values(self._serializer, record.values, sid=sid)
        return self._bind(values, sid, expired, context)

    async def refresh(self, old_sid: str, sid: str, expired: int, context: Any = None) -> MongoSessionStore:
        """Load the record stored under *old_sid* and bind it to *sid*.

        The new expiry is carried by the returned store and written on its
        next save. A changed session id is written immediately so that save
        can find the record. A payload that fails to decode leaves the
        record under *old_sid*.
        """
        record = await self._find(old_sid)
        values = decode_values(self._serializer, record.values, sid=old_sid)
        if sid != old_sid:
            await self._set(record, {"sid": sid}, "refresh")
            record.sid = sid
        return self._bind(values, sid, expired, context, pending_expiry=expires_at(expired))

    async def delete(self, sid: str) -> None:
        """Remove the record for *sid*; deleting a missing session is not an error."""
        try:
            await self._collection.delete_many({"sid": sid})
        except PyMongoError as exc:
            logger.error("session_delete_failed", sid=sid, error=str(exc))
            raise StorageException(f"Unable to delete session '{sid}': {exc}", sid=sid) from exc

    async def check(self, sid: str) -> bool:
        """Return whether a record exists for *sid*. Lookup failures count as absent."""
        try:
            document = await self._collection.find_one({"sid": sid}, {"_id": 1})
        except PyMongoError as exc:
            logger.warning("session_check_failed", sid=sid, error=str(exc))
            return False
        return document is not None

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()
        logger.info("session_store_closed")
