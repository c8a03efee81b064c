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
"""Shared fixtures for the MongoDB-backed tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def mongo_client():
    """An in-memory motor-compatible client."""
    mongomock_motor = pytest.importorskip("mongomock_motor", reason="mongomock-motor not installed")
    client = mongomock_motor.AsyncMongoMockClient()
    yield client
    client.close()


@pytest.fixture
def raising():
    """Build coroutine functions that raise a given exception, for patching driver calls."""

    def factory(exc: Exception):
        async def _raise(*args: Any, **kwargs: Any) -> Any:
            raise exc

        return _raise

    return factory
