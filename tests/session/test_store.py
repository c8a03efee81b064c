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
"""Tests for BaseSessionStore — in-memory values, locking and save/flush."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import Any

import pytest

from docsession.kernel.exceptions import SessionEncodeException
from docsession.session.store import BaseSessionStore


class RecordingStore(BaseSessionStore):
    """Captures every persisted payload instead of writing to a backend."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.persisted: list[tuple[str, datetime | None]] = []

    async def _persist(self, raw: str, expiry: datetime | None) -> None:
        self.persisted.append((raw, expiry))


class UpperSerializer:
    def dumps(self, values):
        return ";".join(f"{k}={v}" for k, v in sorted(values.items())).upper()

    def loads(self, raw):
        return {}


class TestAccessors:
    def test_properties(self):
        context = object()
        store = RecordingStore("sid-1", 1800, context=context)
        assert store.session_id == "sid-1"
        assert store.expired == 1800
        assert store.context is context
        assert store.pending_expiry is None

    def test_initial_values_are_copied(self):
        initial = {"a": 1}
        store = RecordingStore("sid", 60, values=initial)
        store.set("b", 2)
        assert initial == {"a": 1}

    def test_repr(self):
        assert repr(RecordingStore("sid", 60)) == "RecordingStore(session_id='sid', expired=60)"


class TestGetSetDelete:
    def test_set_then_get(self):
        store = RecordingStore("sid", 60)
        store.set("theme", "dark")
        assert store.get("theme") == ("dark", True)

    def test_get_missing_key(self):
        store = RecordingStore("sid", 60)
        assert store.get("missing") == (None, False)

    def test_get_distinguishes_stored_none(self):
        store = RecordingStore("sid", 60)
        store.set("nothing", None)
        assert store.get("nothing") == (None, True)

    def test_set_overwrites(self):
        store = RecordingStore("sid", 60)
        store.set("k", 1)
        store.set("k", 2)
        assert store.get("k") == (2, True)
        assert len(store) == 1

    def test_delete_returns_previous_value(self):
        store = RecordingStore("sid", 60, values={"k": "v"})
        assert store.delete("k") == "v"
        assert store.get("k") == (None, False)

    def test_delete_missing_key_returns_none(self):
        store = RecordingStore("sid", 60)
        assert store.delete("missing") is None

    def test_keys(self):
        store = RecordingStore("sid", 60, values={"a": 1, "b": 2})
        assert sorted(store.keys()) == ["a", "b"]


class TestSaveAndFlush:
    @pytest.mark.asyncio
    async def test_save_empty_map_persists_empty_string(self):
        store = RecordingStore("sid", 60)
        await store.save()
        assert store.persisted == [("", None)]

    @pytest.mark.asyncio
    async def test_save_serializes_values_as_json(self):
        store = RecordingStore("sid", 60)
        store.set("theme", "dark")
        await store.save()
        assert store.persisted == [('{"theme": "dark"}', None)]

    @pytest.mark.asyncio
    async def test_save_uses_supplied_serializer(self):
        store = RecordingStore("sid", 60, serializer=UpperSerializer())
        store.set("a", "x")
        await store.save()
        assert store.persisted[0][0] == "A=X"

    @pytest.mark.asyncio
    async def test_save_writes_pending_expiry_once(self):
        expiry = datetime(2030, 1, 1, tzinfo=UTC)
        store = RecordingStore("sid", 60, pending_expiry=expiry)

        await store.save()
        await store.save()

        assert store.persisted == [("", expiry), ("", None)]
        assert store.pending_expiry is None

    @pytest.mark.asyncio
    async def test_unserializable_value_raises_encode_exception(self):
        store = RecordingStore("sid", 60)
        store.set("handle", object())

        with pytest.raises(SessionEncodeException) as exc_info:
            await store.save()
        assert exc_info.value.context["sid"] == "sid"
        assert store.persisted == []

    @pytest.mark.asyncio
    async def test_flush_clears_then_saves(self):
        store = RecordingStore("sid", 60, values={"a": 1})
        await store.flush()
        assert len(store) == 0
        assert store.persisted == [("", None)]

    @pytest.mark.asyncio
    async def test_flush_twice_persists_same_payload(self):
        store = RecordingStore("sid", 60, values={"a": 1})
        await store.flush()
        await store.flush()
        assert store.persisted == [("", None), ("", None)]


class TestConcurrentAccess:
    def test_concurrent_writers_lose_no_keys(self):
        store = RecordingStore("sid", 60)

        def writer(worker: int) -> None:
            for i in range(200):
                store.set(f"w{worker}-{i}", i)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(writer, range(8)))

        assert len(store) == 8 * 200
        assert store.get("w3-199") == (199, True)

    def test_mixed_readers_writers_and_deleters(self):
        store = RecordingStore("sid", 60)
        start = threading.Barrier(6)
        errors: list[Exception] = []

        def setter() -> None:
            start.wait()
            for i in range(500):
                store.set(f"k{i % 50}", i)

        def getter() -> None:
            start.wait()
            for i in range(500):
                value, found = store.get(f"k{i % 50}")
                if found and not isinstance(value, int):
                    errors.append(AssertionError(f"corrupt value {value!r}"))

        def deleter() -> None:
            start.wait()
            for i in range(500):
                store.delete(f"k{i % 50}")

        threads = [threading.Thread(target=fn) for fn in (setter, setter, getter, getter, deleter, deleter)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert not any(thread.is_alive() for thread in threads)
        assert errors == []
        for key in store.keys():
            value, found = store.get(key)
            assert found and isinstance(value, int)

    def test_each_delete_returns_a_distinct_removal(self):
        store = RecordingStore("sid", 60, values={f"k{i}": i for i in range(1000)})
        removed: list[Any] = []
        lock = threading.Lock()

        def deleter() -> None:
            for i in range(1000):
                value = store.delete(f"k{i}")
                if value is not None:
                    with lock:
                        removed.append(value)

        threads = [threading.Thread(target=deleter) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert sorted(removed) == list(range(1000))
        assert len(store) == 0
