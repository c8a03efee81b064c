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
"""Session backends.

Import concrete managers from the adapter package::

    from docsession.session.adapters.memory import InMemorySessionManager
    from docsession.session.adapters.mongodb import MongoSessionManager
"""

from docsession.session.factory import configure_logging, create_session_manager
from docsession.session.ports.outbound import SessionManagerStore, SessionStore
from docsession.session.record import SessionRecord
from docsession.session.serializer import JsonValueSerializer, ValueSerializer
from docsession.session.store import BaseSessionStore

__all__ = [
    "BaseSessionStore",
    "JsonValueSerializer",
    "SessionManagerStore",
    "SessionRecord",
    "SessionStore",
    "ValueSerializer",
    "configure_logging",
    "create_session_manager",
]
