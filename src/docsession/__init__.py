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
"""docsession — MongoDB-backed session persistence with pluggable stores.

The package exposes two contracts: a manager that creates, renews, checks
and deletes session records, and a per-session store holding the values
the session framework reads and writes between saves.
"""

from docsession.core.config import Config
from docsession.kernel.exceptions import (
    DocSessionException,
    SessionDecodeException,
    SessionEncodeException,
    SessionNotFoundException,
    StorageException,
    StoreConnectionException,
)
from docsession.session import (
    SessionManagerStore,
    SessionStore,
    configure_logging,
    create_session_manager,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DocSessionException",
    "SessionDecodeException",
    "SessionEncodeException",
    "SessionManagerStore",
    "SessionNotFoundException",
    "SessionStore",
    "StorageException",
    "StoreConnectionException",
    "configure_logging",
    "create_session_manager",
]
