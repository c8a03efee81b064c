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
"""Session manager and per-session store protocols."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """One active session's in-memory values and their persistence.

    ``set``/``get``/``delete`` touch only the in-memory map and are safe to
    call from several threads. ``save``/``flush`` write to the backend.
    """

    @property
    def context(self) -> Any: ...

    @property
    def session_id(self) -> str: ...

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> tuple[Any, bool]: ...

    def delete(self, key: str) -> Any: ...

    async def flush(self) -> None: ...

    async def save(self) -> None: ...


@runtime_checkable
class SessionManagerStore(Protocol):
    """Lifecycle of session records in a backend.

    All session backends (MongoDB, in-memory) implement this protocol.
    """

    async def create(self, sid: str, expired: int, context: Any = None) -> SessionStore: ...

    async def update(self, sid: str, expired: int, context: Any = None) -> SessionStore: ...

    async def refresh(self, old_sid: str, sid: str, expired: int, context: Any = None) -> SessionStore: ...

    async def delete(self, sid: str) -> None: ...

    async def check(self, sid: str) -> bool: ...

    async def close(self) -> None: ...
