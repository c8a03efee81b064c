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
"""Builds a session manager from configuration."""

from __future__ import annotations

import structlog

from docsession.config.properties.mongodb import MongoDBProperties
from docsession.config.properties.session import SessionProperties
from docsession.core.config import Config
from docsession.logging.structlog_adapter import StructlogAdapter
from docsession.session.ports.outbound import SessionManagerStore
from docsession.session.serializer import ValueSerializer

logger = structlog.get_logger("docsession.session.factory")


def configure_logging(config: Config) -> StructlogAdapter:
    """Apply the docsession.logging section to structlog and stdlib logging."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter


async def create_session_manager(
    config: Config,
    *,
    serializer: ValueSerializer | None = None,
) -> SessionManagerStore:
    """Return a started manager for the backend named by ``docsession.session.store``.

    ``mongodb`` connects with :class:`MongoDBProperties` bound from
    ``docsession.mongodb.*`` and raises StoreConnectionException when the
    server cannot be reached. ``memory`` needs no connection.
    """
    properties = config.bind(SessionProperties)

    if properties.store == "memory":
        from docsession.session.adapters.memory import InMemorySessionManager

        logger.info("session_store_selected", store="memory")
        return InMemorySessionManager(serializer=serializer)

    from docsession.session.adapters.mongodb import MongoSessionManager

    mongo = config.bind(MongoDBProperties)
    logger.info("session_store_selected", store="mongodb", collection=mongo.collection)
    return await MongoSessionManager.connect(mongo, serializer=serializer)
